# ------------------------------------------------------------
# Module: blocksig/engine/scheduler.py
# Purpose: Dispatch work items onto a bounded thread pool, gated by recorded failures.
# ------------------------------------------------------------

"""Bounded dispatch of block-hashing work items.

Responsibilities
----------------
- Run at most `max_workers` work items at once on a thread pool.
- Check the error list before each dispatch; stop dispatching after a failure.
- Let items already running finish (there is no cancellation).
- Wait for every dispatched item before returning.

Notes
-----
- A bounded semaphore holds back the next dispatch until a slot frees, so the
  failure gate is consulted while work is still pending, not all at once.
- Which items ran before a failure stopped dispatch depends on timing.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, wait

from blocksig.engine.errors import BlockError
from blocksig.engine.failures import ErrorList
from blocksig.engine.partition import WorkItem

log = logging.getLogger("blocksig.engine.scheduler")


class Scheduler:
    """Runs work items concurrently with a hard cap of `max_workers`."""

    def __init__(self, max_workers: int) -> None:
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self.max_workers = max_workers

    def run(
        self,
        items: Sequence[WorkItem],
        work: Callable[[int, WorkItem], None],
        errors: ErrorList,
    ) -> int:
        """Dispatch `work(index, item)` for each item until a failure is recorded.

        Parameters
        ----------
        items : Sequence[WorkItem]
            Disjoint work items, dispatched in order.
        work : Callable[[int, WorkItem], None]
            Worker body; `BlockError`s it raises are recorded in `errors`.
        errors : ErrorList
            Shared failure collection used as the dispatch gate.

        Returns
        -------
        int
            Number of items dispatched.

        Raises
        ------
        Exception
            Any non-`BlockError` raised by a worker, after all workers finished.
        """
        if not items:
            return 0

        slots = threading.BoundedSemaphore(self.max_workers)
        futures: list[Future[None]] = []

        def _run(index: int, item: WorkItem) -> None:
            try:
                work(index, item)
            except BlockError as e:
                log.warning(
                    "work item failed start=%d count=%d: %s", item.start, item.count, e
                )
                errors.add(e)
            finally:
                slots.release()

        workers = min(self.max_workers, len(items))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="blocksig") as pool:
            for index, item in enumerate(items):
                slots.acquire()
                if not errors.is_empty():
                    slots.release()
                    log.info(
                        "dispatch stopped after failure dispatched=%d of %d",
                        len(futures),
                        len(items),
                    )
                    break
                futures.append(pool.submit(_run, index, item))
            wait(futures)

        # Surface programming errors instead of losing them inside futures.
        for fut in futures:
            fut.result()
        return len(futures)


__all__ = ["Scheduler"]
