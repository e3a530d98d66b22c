"""Shared typing helpers for digestsum modules."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Hasher(Protocol):
    """Incremental digest objects exposed by hashlib, blake3 and pycryptodome."""

    def update(self, data: bytes) -> object:
        ...

    def digest(self) -> bytes:
        ...


@runtime_checkable
class InputSource(Protocol):
    """Byte stream standing in for standard input."""

    def is_interactive(self) -> bool:
        """Return True when the stream is attached to a terminal."""
        ...

    def read_all(self) -> bytes:
        """Return the whole stream; a source may be read only once."""
        ...


__all__ = ["Hasher", "InputSource"]
