"""Error taxonomy for digest computation and checksum verification."""

from __future__ import annotations

from pathlib import Path

EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70
EX_IOERR = 74


class DigestsumError(RuntimeError):
    """Base class for user-facing failures; carries the process exit status."""

    exit_code: int = EX_SOFTWARE


class UnknownAlgorithmError(DigestsumError):
    """Raised when a name matches no catalog entry or alias."""

    exit_code = EX_USAGE

    def __init__(self, name: str) -> None:
        super().__init__(f"unknown hash algorithm: {name}")
        self.name = name


class InsecureAlgorithmError(DigestsumError):
    """Raised when an insecure algorithm is used without opt-in."""

    exit_code = EX_USAGE

    def __init__(self, name: str) -> None:
        super().__init__(
            f"{name} is an insecure hash algorithm; "
            "pass --allow-insecure-hash-algorithm to use it"
        )
        self.name = name


class MissingAlgorithmError(DigestsumError):
    """Raised when compute mode runs without an algorithm selection."""

    exit_code = EX_USAGE

    def __init__(self) -> None:
        super().__init__("unable to determine hash algorithm; select one with --hash-algorithm")


class AmbiguousAlgorithmError(DigestsumError):
    """Raised when verification cannot determine the algorithm of a record."""

    def __init__(self, file: Path | str) -> None:
        super().__init__(f"unable to determine hash algorithm for {file}")
        self.file = file


class ImproperLineError(DigestsumError):
    """Raised for a checksum line matching none of the supported grammars."""

    exit_code = EX_DATAERR

    def __init__(self, line: str) -> None:
        super().__init__("improperly formatted checksum line")
        self.line = line


class MalformedDigestError(DigestsumError):
    """Raised when a digest field is not valid hexadecimal."""

    exit_code = EX_DATAERR


class StructuredFormatError(DigestsumError):
    """Raised when JSON checksum input does not describe checksum records."""

    exit_code = EX_DATAERR


class InputReadError(DigestsumError):
    """Raised when input bytes cannot be read for reasons other than absence."""

    exit_code = EX_IOERR

    def __init__(self, target: Path | str, operation: str, reason: object) -> None:
        super().__init__(f"failed to {operation} {target}: {reason}")
        self.target = target
        self.operation = operation


__all__ = [
    "AmbiguousAlgorithmError",
    "DigestsumError",
    "EX_DATAERR",
    "EX_IOERR",
    "EX_NOINPUT",
    "EX_OK",
    "EX_SOFTWARE",
    "EX_USAGE",
    "ImproperLineError",
    "InputReadError",
    "InsecureAlgorithmError",
    "MalformedDigestError",
    "MissingAlgorithmError",
    "StructuredFormatError",
    "UnknownAlgorithmError",
]
