"""Compute-mode digesting of files and standard input."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from digestsum.errors import InputReadError
from digestsum.io.stdin import STDIN_NAME
from digestsum.models import Checksum
from digestsum.services import registry
from digestsum.services.registry import Algorithm
from digestsum.util.parallel import parallel_map

LOGGER = logging.getLogger(__name__)


def checksum_bytes(algorithm: Algorithm, data: bytes, *, name: Path | str = STDIN_NAME) -> Checksum:
    """Digest literal bytes under `name`."""

    return Checksum(algorithm=algorithm, file=Path(name), digest=registry.digest(algorithm, data))


def checksum_file(algorithm: Algorithm, path: Path) -> Checksum:
    """Digest the file at `path`."""

    try:
        digest = registry.digest_path(algorithm, path)
    except OSError as exc:
        raise InputReadError(path, "read bytes from", exc.strerror or exc) from exc
    return Checksum(algorithm=algorithm, file=path, digest=digest)


def checksum_files(algorithm: Algorithm, paths: Sequence[Path], *, threads: int = 0) -> list[Checksum]:
    """Digest `paths` in parallel, returning checksums in input order."""

    LOGGER.info("Computing %s for %s file(s)", algorithm.display_name, len(paths))
    return parallel_map(lambda path: checksum_file(algorithm, path), paths, threads=threads)


__all__ = ["checksum_bytes", "checksum_file", "checksum_files"]
