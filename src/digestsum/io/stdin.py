"""Single-shot input sources standing in for standard input."""

from __future__ import annotations

import sys
import threading
from typing import BinaryIO, Optional

from digestsum.errors import InputReadError

STDIN_NAME = "-"


class _SingleShotSource:
    """Hands out its bytes once; later reads are refused."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._consumed = False

    def _read(self) -> bytes:
        raise NotImplementedError

    def is_interactive(self) -> bool:
        raise NotImplementedError

    @property
    def consumed(self) -> bool:
        return self._consumed

    def read_all(self) -> bytes:
        with self._lock:
            if self._consumed:
                raise InputReadError(STDIN_NAME, "read", "standard input was already consumed")
            self._consumed = True
            return self._read()


class StdinSource(_SingleShotSource):
    """The process standard input (or any binary stream)."""

    def __init__(self, stream: Optional[BinaryIO] = None) -> None:
        super().__init__()
        self._stream = stream

    def _resolve_stream(self) -> Optional[BinaryIO]:
        if self._stream is not None:
            return self._stream
        if sys.stdin is None:
            return None
        return getattr(sys.stdin, "buffer", sys.stdin)

    def is_interactive(self) -> bool:
        """A closed standard input counts as a terminal: it is never piped data."""

        stream = self._resolve_stream()
        if stream is None:
            return True
        try:
            return bool(stream.isatty())
        except (AttributeError, ValueError):
            return False

    def _read(self) -> bytes:
        stream = self._resolve_stream()
        if stream is None:
            raise InputReadError(STDIN_NAME, "read", "standard input is closed")
        try:
            data = stream.read()
        except (OSError, ValueError) as exc:
            raise InputReadError(STDIN_NAME, "read", exc) from exc
        if isinstance(data, str):
            data = data.encode("utf-8")
        return data


class BufferSource(_SingleShotSource):
    """Fixed bytes presented as a pipe (or a terminal when `interactive`)."""

    def __init__(self, data: bytes = b"", *, interactive: bool = False) -> None:
        super().__init__()
        self._data = data
        self._interactive = interactive

    def is_interactive(self) -> bool:
        return self._interactive

    def _read(self) -> bytes:
        return self._data


__all__ = ["BufferSource", "STDIN_NAME", "StdinSource"]
