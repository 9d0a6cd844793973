# ------------------------------------------------------------
# Module: blocksig/engine/failures.py
# Purpose: Thread-safe, append-only collection of per-block failures.
# ------------------------------------------------------------

"""Error aggregation for concurrent block workers.

Responsibilities
----------------
- Record `BlockError`s from any worker thread under a single lock.
- Serve the scheduler's gate (`is_empty`) before each new dispatch.
- Report the first failure by completion order, or the lowest block id on request.

Notes
-----
- `is_empty()` is a racy gate: a failure recorded while the scheduler is
  checking may let one more work item through. Completed blocks stay correct.
- `first()` is first *appended*, which is not necessarily the lowest block id.
"""

from __future__ import annotations

import threading

from blocksig.engine.errors import BlockError


class ErrorList:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._errors: list[BlockError] = []

    def add(self, err: BlockError) -> None:
        with self._lock:
            self._errors.append(err)

    def is_empty(self) -> bool:
        with self._lock:
            return not self._errors

    def first(self) -> BlockError | None:
        with self._lock:
            return self._errors[0] if self._errors else None

    def lowest(self) -> BlockError | None:
        """Return the recorded failure with the smallest block id, if any."""
        with self._lock:
            return min(self._errors, key=lambda e: e.block_id, default=None)

    def failures(self) -> tuple[BlockError, ...]:
        with self._lock:
            return tuple(self._errors)

    def __len__(self) -> int:
        with self._lock:
            return len(self._errors)


__all__ = ["ErrorList"]
