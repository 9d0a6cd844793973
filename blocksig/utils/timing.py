# ------------------------------------------------------------
# Module: blocksig/utils/timing.py
# Purpose: Timing context manager that logs start/ok/failed with durations.
# ------------------------------------------------------------

"""Lightweight utilities for timing measurements and structured log timing.

Responsibilities
----------------
- Provide a consistent context manager for timing and logging operations.
- Log start, success, and failure messages with elapsed durations.
- Support optional contextual data in structured log output.

Notes
-----
- Uses `time.perf_counter()` for monotonic, high-resolution timing.
- Safe for concurrent use in multithreaded environments.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager


def ms_since(t0: float) -> float:
    """Return elapsed milliseconds since a `time.perf_counter()` reading."""
    return (time.perf_counter() - t0) * 1000.0


def _fields(ctx: dict) -> str:
    return "".join(f" {k}={v}" for k, v in ctx.items())


@contextmanager
def log_timer(msg: str, logger: logging.Logger | None = None, **ctx):
    """
    Log `<msg> start`, then `<msg> ok` or `<msg> failed` with `duration_ms`.

    Context keywords are appended as `key=value` pairs, matching the rest of
    the project's log lines.

    Usage:
        with log_timer("hash-stream", log, size=size, block_size=block_size):
            ...
        # hash-stream start size=5 block_size=1048576
        # hash-stream ok duration_ms=0.4 size=5 block_size=1048576
    """
    log = logger or logging.getLogger(__name__)
    fields = _fields(ctx)
    t0 = time.perf_counter()
    log.info("%s start%s", msg, fields)
    try:
        yield
    except Exception:
        log.error(
            "%s failed duration_ms=%.1f%s", msg, ms_since(t0), fields, exc_info=True
        )
        raise
    log.info("%s ok duration_ms=%.1f%s", msg, ms_since(t0), fields)


__all__ = ["log_timer", "ms_since"]
