from __future__ import annotations

import functools
import logging
import time
from typing import Any, Callable, TypeVar

LOGGER = logging.getLogger("togglebench.timing")

DEFAULT_COUNT = 1_000_000
MICROSECONDS_PER_SECOND = 1_000_000

StateT = TypeVar("StateT")

clock = time.perf_counter


def _validate_count(count: int) -> int:
    if isinstance(count, bool) or not isinstance(count, int):
        raise ValueError(f"count must be an integer, got {count!r}")
    if count <= 0:
        raise ValueError(f"count must be > 0, got {count}")
    return count


def average_run(func: Callable[[], Any], count: int = DEFAULT_COUNT) -> float:
    """Return the mean duration of ``func()`` in microseconds over ``count`` calls.

    Calls run back to back on the calling thread and share whatever state
    ``func`` closes over. Exceptions raised by ``func`` propagate unchanged and
    abort the remaining iterations.
    """
    count = _validate_count(count)
    started = clock()
    for _ in range(count):
        func()
    elapsed = clock() - started
    return max(elapsed, 0.0) / count * MICROSECONDS_PER_SECOND


def average_isolated_run(
    setup: Callable[[], StateT],
    func: Callable[[StateT], Any],
    count: int = DEFAULT_COUNT,
) -> float:
    """Like :func:`average_run`, but each call gets fresh state from ``setup()``.

    Only ``func(state)`` is timed; ``setup`` runs outside the measured window.
    """
    count = _validate_count(count)
    total = 0.0
    for _ in range(count):
        state = setup()
        started = clock()
        func(state)
        total += clock() - started
    return max(total, 0.0) / count * MICROSECONDS_PER_SECOND


def describe(func: Callable[..., Any]) -> str:
    while isinstance(func, functools.partial):
        func = func.func
    name = getattr(func, "__qualname__", None) or getattr(func, "__name__", None)
    return name or repr(func)


def format_report(name: str, duration: float) -> str:
    return f"Average run for '{name}': {duration:.3f} microseconds"


def emit_report(name: str, duration: float, count: int) -> str:
    line = format_report(name, duration)
    LOGGER.debug("%s (count=%d)", line, count)
    print(line)
    return line


def report(name: str | None, func: Callable[[], Any], count: int = DEFAULT_COUNT) -> float:
    """Measure ``func`` and print the average run line; returns the duration."""
    label = name or describe(func)
    duration = average_run(func, count)
    emit_report(label, duration, count)
    return duration


__all__ = [
    "DEFAULT_COUNT",
    "MICROSECONDS_PER_SECOND",
    "average_isolated_run",
    "average_run",
    "describe",
    "emit_report",
    "format_report",
    "report",
]
