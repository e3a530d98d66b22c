"""Logging setup utilities."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOGGER_NAME = "digestsum"


def level_for_verbosity(verbosity: int, *, default: str | None = None) -> int:
    """Map repeated ``-v`` flags (or a configured level name) to a logging level."""

    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    if default:
        level = logging.getLevelName(default.upper())
        if isinstance(level, int):
            return level
    return logging.WARNING


def configure_logging(*, level: int = logging.WARNING, log_path: Path | None = None) -> logging.Logger:
    """Configure project-wide logging handlers.

    Diagnostics go to stderr; stdout is reserved for checksums and reports.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    has_stream = any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in logger.handlers
    )
    existing_files = {getattr(h, "baseFilename", None) for h in logger.handlers}

    formatter = logging.Formatter(fmt="%(asctime)s %(levelname)s %(name)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")

    if not has_stream:
        stream_handler = logging.StreamHandler(stream=sys.stderr)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    if log_path and str(log_path.resolve()) not in existing_files:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


__all__ = ["LOGGER_NAME", "configure_logging", "level_for_verbosity"]
