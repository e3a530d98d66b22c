from __future__ import annotations

from pathlib import Path
from typing import Sequence

from typer.testing import CliRunner

from digestsum import cli
from digestsum.io.stdin import BufferSource

HELLO = b"Hello, world!"
HELLO_MD5 = "6cd3556deb0da54bca060b4c39479839"
HELLO_SHA256 = "315f5bdb76d078c43b8ac0064e4a0164612b1fce77c869345bfc94c75894edd3"

INSECURE = "--allow-insecure-hash-algorithm"


def isolate_config(monkeypatch, tmp_path: Path) -> None:
    """Point config discovery at an empty directory so user files never leak in."""

    monkeypatch.delenv("DIGESTSUM_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))


def invoke(monkeypatch, args: Sequence[str], *, stdin: bytes | None = None):
    """Run the CLI with `stdin` piped in, or with a terminal on stdin when None."""

    if stdin is None:
        source = BufferSource(interactive=True)
    else:
        source = BufferSource(stdin)
    monkeypatch.setattr(cli, "_stdin_source", lambda: source)

    runner = CliRunner()
    return runner.invoke(cli.app, list(args))


def write_files(root: Path, files: dict[str, bytes]) -> dict[str, Path]:
    """Write each name -> content pair under `root` and return the paths."""

    paths: dict[str, Path] = {}
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        paths[name] = path
    return paths
