"""Checksum-file parser for SFV, BSD and structured JSON input."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any, List, NamedTuple, Optional

from pydantic import TypeAdapter, ValidationError

from digestsum.errors import (
    ImproperLineError,
    MalformedDigestError,
    StructuredFormatError,
    UnknownAlgorithmError,
)
from digestsum.models import ChecksumRecord, ImproperLine
from digestsum.services.registry import Algorithm, resolve

LOGGER = logging.getLogger(__name__)

# The digest is hex only, so the first two-space run after it is the separator.
SFV_PATTERN = re.compile(r"^(?P<digest>[0-9A-Fa-f]{32,128})  (?P<file>.+)$")
BSD_PATTERN = re.compile(
    r"^(?P<algorithm>[A-Za-z0-9-]+) \((?P<file>.+)\) = (?P<digest>[0-9A-Fa-f]{32,128})$"
)

_RECORDS = TypeAdapter(List[ChecksumRecord])


class ParsedChecksums(NamedTuple):
    records: list[ChecksumRecord]
    improper_lines: list[ImproperLine]


def _decode_digest(text: str) -> bytes:
    try:
        return bytes.fromhex(text)
    except ValueError as exc:
        raise MalformedDigestError(f"malformed digest {text!r}: {exc}") from exc


def _parse_sfv(line: str) -> Optional[ChecksumRecord]:
    match = SFV_PATTERN.match(line)
    if not match:
        return None
    return ChecksumRecord(
        algorithm=None,
        file=match.group("file").strip(),
        digest=_decode_digest(match.group("digest")),
    )


def _parse_bsd(line: str) -> Optional[ChecksumRecord]:
    match = BSD_PATTERN.match(line)
    if not match:
        return None

    algorithm: Optional[Algorithm]
    try:
        algorithm = resolve(match.group("algorithm"))
    except UnknownAlgorithmError:
        LOGGER.debug("Unknown algorithm %r in BSD line; leaving unresolved", match.group("algorithm"))
        algorithm = None

    return ChecksumRecord(
        algorithm=algorithm,
        file=match.group("file").strip(),
        digest=_decode_digest(match.group("digest")),
    )


def parse_line(line: str) -> ChecksumRecord:
    """Parse one SFV or BSD checksum line.

    Raises ImproperLineError when neither grammar matches and
    MalformedDigestError when the digest field cannot be decoded.
    """

    stripped = line.rstrip("\r\n")
    for parser in (_parse_sfv, _parse_bsd):
        record = parser(stripped)
        if record is not None:
            return record
    raise ImproperLineError(stripped)


def parse_structured(text: str) -> Optional[list[ChecksumRecord]]:
    """Return records when `text` is a JSON list (or object) of checksum records.

    Returns None when the text is not JSON at all, so that line parsing can
    take over. A JSON document of the wrong shape raises StructuredFormatError.
    """

    try:
        payload: Any = json.loads(text)
    except ValueError:
        return None

    if isinstance(payload, Mapping):
        payload = [payload]
    if not isinstance(payload, Sequence) or isinstance(payload, str):
        return None

    try:
        return _RECORDS.validate_python(payload)
    except ValidationError as exc:
        raise StructuredFormatError(f"invalid structured checksum input: {exc}") from exc


def parse_checksums(text: str) -> ParsedChecksums:
    """Parse the full content of a checksum file."""

    structured = parse_structured(text)
    if structured is not None:
        LOGGER.debug("Parsed %s structured checksum records", len(structured))
        return ParsedChecksums(structured, [])

    records: list[ChecksumRecord] = []
    improper: list[ImproperLine] = []
    for number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            records.append(parse_line(line))
        except ImproperLineError as exc:
            improper.append(ImproperLine(line_number=number, line=exc.line, reason=str(exc)))

    return ParsedChecksums(records, improper)


__all__ = [
    "BSD_PATTERN",
    "ParsedChecksums",
    "SFV_PATTERN",
    "parse_checksums",
    "parse_line",
    "parse_structured",
]
