"""Pydantic models for checksums, verification outcomes and per-file results."""

from __future__ import annotations

from pathlib import Path
from typing import List, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from digestsum.errors import UnknownAlgorithmError
from digestsum.services.registry import Algorithm, resolve


def _coerce_algorithm(value: object) -> Optional[Algorithm]:
    if value is None or isinstance(value, Algorithm):
        return value
    if isinstance(value, str):
        try:
            return resolve(value)
        except UnknownAlgorithmError:
            return None
    raise ValueError(f"algorithm must be a string or null, got {type(value).__name__}")


def _coerce_digest(value: object) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        try:
            return bytes.fromhex(value)
        except ValueError as exc:
            raise ValueError(f"digest is not valid hex: {value!r}") from exc
    raise ValueError(f"digest must be a hex string, got {type(value).__name__}")


class ChecksumRecord(BaseModel):
    """One parsed checksum line or structured element."""

    model_config = ConfigDict(frozen=True)

    algorithm: Optional[Algorithm] = None
    file: Path
    digest: bytes

    @field_validator("algorithm", mode="before")
    @classmethod
    def _parse_algorithm(cls, value: object) -> Optional[Algorithm]:
        """Unknown algorithm names leave the record unresolved."""

        return _coerce_algorithm(value)

    @field_validator("digest", mode="before")
    @classmethod
    def _parse_digest(cls, value: object) -> bytes:
        return _coerce_digest(value)

    @field_serializer("algorithm")
    def _serialize_algorithm(self, algorithm: Optional[Algorithm]) -> Optional[str]:
        return algorithm.display_name if algorithm is not None else None

    @field_serializer("digest")
    def _serialize_digest(self, digest: bytes) -> str:
        return digest.hex()

    @property
    def hexdigest(self) -> str:
        return self.digest.hex()


class Checksum(BaseModel):
    """A digest computed over literal input bytes, ready for rendering."""

    model_config = ConfigDict(frozen=True)

    algorithm: Algorithm
    file: Path
    digest: bytes

    @field_serializer("algorithm")
    def _serialize_algorithm(self, algorithm: Algorithm) -> str:
        return algorithm.display_name

    @field_serializer("digest")
    def _serialize_digest(self, digest: bytes) -> str:
        return digest.hex()

    @property
    def hexdigest(self) -> str:
        return self.digest.hex()


class VerificationOutcome(BaseModel):
    """Result of checking one record; `success is None` means the file was absent."""

    model_config = ConfigDict(frozen=True)

    algorithm: Algorithm
    file: Path
    success: Optional[bool]

    @field_serializer("algorithm")
    def _serialize_algorithm(self, algorithm: Algorithm) -> str:
        return algorithm.display_name

    @property
    def missing(self) -> bool:
        return self.success is None


class ImproperLine(BaseModel):
    """A checksum-file line matching none of the supported grammars."""

    model_config = ConfigDict(frozen=True)

    line_number: int = Field(ge=1)
    line: str
    reason: str = "improperly formatted checksum line"


class VerificationCounts(NamedTuple):
    total: int
    missing: int
    success: int
    failure: int


class AggregateResult(BaseModel):
    """All outcomes for one checksum file, in line order; `source` is the name as given."""

    model_config = ConfigDict(frozen=True)

    source: str
    outcomes: List[VerificationOutcome] = Field(default_factory=list)
    improper_lines: List[ImproperLine] = Field(default_factory=list)

    def counts(self) -> VerificationCounts:
        missing = sum(1 for outcome in self.outcomes if outcome.success is None)
        success = sum(1 for outcome in self.outcomes if outcome.success is True)
        failure = sum(1 for outcome in self.outcomes if outcome.success is False)
        return VerificationCounts(len(self.outcomes), missing, success, failure)

    @property
    def has_improper_lines(self) -> bool:
        return bool(self.improper_lines)


__all__ = [
    "AggregateResult",
    "Checksum",
    "ChecksumRecord",
    "ImproperLine",
    "VerificationCounts",
    "VerificationOutcome",
]
