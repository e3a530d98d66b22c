"""Ordered fork-join helper over a thread pool."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from concurrent import futures
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")


def worker_count(threads: int) -> int:
    """Return the pool size for `threads` (0 means every available core)."""
    if threads < 0:
        raise ValueError("threads must be >= 0")
    if threads == 0:
        return os.cpu_count() or 1
    return threads


def parallel_map(func: Callable[[T], R], items: Iterable[T], *, threads: int = 0) -> list[R]:
    """Apply `func` to every item, returning results in input order.

    The first exception raised by a task propagates once the pool shuts down.
    """
    materialized = list(items)
    if not materialized:
        return []

    workers = min(worker_count(threads), len(materialized))
    with futures.ThreadPoolExecutor(max_workers=workers, thread_name_prefix="digestsum") as executor:
        return list(executor.map(func, materialized))


__all__ = ["parallel_map", "worker_count"]
