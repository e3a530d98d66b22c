"""Render computed checksums as SFV, BSD or JSON text."""

from __future__ import annotations

import json
from collections.abc import Sequence
from enum import Enum

from digestsum.models import Checksum


class Style(str, Enum):
    """Checksum line styles."""

    SFV = "sfv"
    BSD = "bsd"
    JSON = "json"


def _sfv(checksum: Checksum) -> str:
    return f"{checksum.hexdigest}  {checksum.file}"


def _bsd(checksum: Checksum) -> str:
    return f"{checksum.algorithm.display_name} ({checksum.file}) = {checksum.hexdigest}"


def _json(checksum: Checksum, *, pretty: bool = False) -> str:
    return json.dumps(checksum.model_dump(mode="json"), indent=2 if pretty else None)


def format_checksum(checksum: Checksum, style: Style, *, pretty: bool = False) -> str:
    """Render a single checksum in `style`."""

    if style is Style.SFV:
        return _sfv(checksum)
    if style is Style.BSD:
        return _bsd(checksum)
    return _json(checksum, pretty=pretty)


def format_checksums(checksums: Sequence[Checksum], style: Style, *, pretty: bool = False) -> str:
    """Render all checksums, one per line; JSON becomes a single array.

    The result always ends with a newline.
    """

    if style is Style.JSON:
        payload = [checksum.model_dump(mode="json") for checksum in checksums]
        return json.dumps(payload, indent=2 if pretty else None) + "\n"
    return "".join(f"{format_checksum(checksum, style)}\n" for checksum in checksums)


__all__ = ["Style", "format_checksum", "format_checksums"]
