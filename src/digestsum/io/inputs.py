"""Collect command-line inputs into readable files and skipped directories."""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path
from typing import NamedTuple

from digestsum.errors import InputReadError
from digestsum.io.stdin import STDIN_NAME
from digestsum.util.typing import InputSource


class InputSelection(NamedTuple):
    files: list[Path]
    directories: list[Path]
    # Arguments as typed, parallel to `files`; Path drops a leading "./".
    labels: list[str]


def split_inputs(arguments: Sequence[str | Path]) -> InputSelection:
    """Partition `arguments` into files and directories, preserving order.

    A path that is neither raises InputReadError.
    """

    files: list[Path] = []
    directories: list[Path] = []
    labels: list[str] = []
    for argument in arguments:
        path = Path(argument)
        if path.is_dir():
            directories.append(path)
        elif path.exists():
            files.append(path)
            labels.append(os.fspath(argument))
        else:
            raise InputReadError(argument, "open", "No such file or directory")
    return InputSelection(files, directories, labels)


def read_path(path: Path) -> bytes:
    """Return the bytes of `path`, wrapping OS errors with context."""

    try:
        return path.read_bytes()
    except OSError as exc:
        raise InputReadError(path, "read bytes from", exc.strerror or exc) from exc


def read_stdin(source: InputSource) -> bytes:
    """Return piped standard input; a terminal is not accepted as input."""

    if source.is_interactive():
        raise InputReadError(STDIN_NAME, "read", "input from tty is invalid")
    return source.read_all()


def decode_text(data: bytes, *, source: Path | str) -> str:
    """Decode checksum-file bytes as UTF-8."""

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InputReadError(source, "decode", exc) from exc


__all__ = ["InputSelection", "decode_text", "read_path", "read_stdin", "split_inputs"]
