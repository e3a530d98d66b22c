"""Checksum verification: algorithm resolution, digest recomputation, outcome classification."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from digestsum.errors import AmbiguousAlgorithmError, InputReadError
from digestsum.models import ChecksumRecord, VerificationOutcome
from digestsum.services import registry
from digestsum.services.registry import Algorithm
from digestsum.util.parallel import parallel_map
from digestsum.util.typing import InputSource

LOGGER = logging.getLogger(__name__)


def resolve_algorithm(
    explicit: Optional[Algorithm],
    declared: Optional[Algorithm],
    *,
    file: Path | str = "-",
    inferred: Optional[Algorithm] = None,
) -> Algorithm:
    """Pick the algorithm for one record.

    Precedence: explicit selection, the record's own algorithm, then the
    algorithm of the first record in the same checksum file.
    """

    for candidate in (explicit, declared, inferred):
        if candidate is not None:
            return candidate
    raise AmbiguousAlgorithmError(file)


def infer_algorithm(records: Sequence[ChecksumRecord]) -> Optional[Algorithm]:
    """Return the algorithm of the first record, if it names one.

    Later records are never consulted.
    """

    if not records:
        return None
    return records[0].algorithm


def resolve_records(
    records: Sequence[ChecksumRecord],
    *,
    explicit: Optional[Algorithm],
    allow_insecure: bool,
) -> list[tuple[ChecksumRecord, Algorithm]]:
    """Pair each record with its resolved, permitted algorithm."""

    inferred = infer_algorithm(records)
    resolved: list[tuple[ChecksumRecord, Algorithm]] = []
    for record in records:
        algorithm = resolve_algorithm(
            explicit, record.algorithm, file=record.file, inferred=inferred
        )
        registry.require_allowed(algorithm, allow_insecure=allow_insecure)
        resolved.append((record, algorithm))
    return resolved


def _digest_file(algorithm: Algorithm, path: Path) -> bytes:
    try:
        return registry.digest_path(algorithm, path)
    except OSError as exc:
        raise InputReadError(path, "read", exc.strerror or exc) from exc


def verify(
    record: ChecksumRecord,
    algorithm: Algorithm,
    *,
    stdin: Optional[InputSource] = None,
) -> VerificationOutcome:
    """Recompute the digest for `record` and classify the result.

    When `stdin` is a non-interactive source its bytes are verified in place of
    the named file. Otherwise a file that does not exist yields a missing
    outcome (`success is None`).
    """

    piped = stdin is not None and not stdin.is_interactive()

    if not piped and not record.file.exists():
        LOGGER.debug("Missing %s", record.file)
        return VerificationOutcome(algorithm=algorithm, file=record.file, success=None)

    if piped:
        actual = registry.digest(algorithm, stdin.read_all())
    else:
        actual = _digest_file(algorithm, record.file)
    success = actual == record.digest
    LOGGER.debug("%s %s: %s", algorithm.display_name, record.file, "OK" if success else "FAILED")
    return VerificationOutcome(algorithm=algorithm, file=record.file, success=success)


def verify_records(
    records: Sequence[ChecksumRecord],
    *,
    explicit: Optional[Algorithm] = None,
    allow_insecure: bool = False,
    stdin: Optional[InputSource] = None,
    threads: int = 0,
) -> list[VerificationOutcome]:
    """Verify `records` on a thread pool, returning outcomes in record order."""

    resolved = resolve_records(records, explicit=explicit, allow_insecure=allow_insecure)
    return parallel_map(lambda pair: verify(pair[0], pair[1], stdin=stdin), resolved, threads=threads)


__all__ = [
    "infer_algorithm",
    "resolve_algorithm",
    "resolve_records",
    "verify",
    "verify_records",
]
