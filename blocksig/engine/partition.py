# ------------------------------------------------------------
# Module: blocksig/engine/partition.py
# Purpose: Split the block range of one invocation into disjoint work items.
# ------------------------------------------------------------

"""Work-item planning for the parallel block hasher.

Responsibilities
----------------
- Size work items so roughly `target_workers` items cover the whole stream.
- Carve `[0, total_blocks)` into contiguous, non-overlapping items.
- Shrink the final item to the remaining blocks.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

log = logging.getLogger("blocksig.engine.partition")


@dataclass(frozen=True)
class WorkItem:
    """Contiguous block range `[start, start + count)` handled by one worker."""

    start: int
    count: int

    @property
    def stop(self) -> int:
        return self.start + self.count

    def block_ids(self) -> Iterator[int]:
        return iter(range(self.start, self.stop))


# Blocks per item so that about `target_workers` items span the stream.
def blocks_per_worker(total_blocks: int, target_workers: int) -> int:
    """Return `ceil(total_blocks / target_workers) + 1`, clamped to `total_blocks`.

    Notes
    -----
    - Never returns less than 1, so an empty stream still gets a valid size.
    """
    if target_workers < 1:
        raise ValueError(f"target_workers must be >= 1, got {target_workers}")
    per_worker = -(-total_blocks // target_workers) + 1
    return max(1, min(per_worker, total_blocks))


def plan_work_items(total_blocks: int, blocks_per_worker: int) -> list[WorkItem]:
    """Carve `[0, total_blocks)` into consecutive items of `blocks_per_worker` blocks.

    Notes
    -----
    - A size larger than the stream collapses into one sequential item.
    - The last item holds whatever remains.
    """
    if blocks_per_worker < 1:
        raise ValueError(f"blocks_per_worker must be >= 1, got {blocks_per_worker}")
    if total_blocks < 0:
        raise ValueError(f"total_blocks must be >= 0, got {total_blocks}")

    if blocks_per_worker > total_blocks > 0:
        log.debug(
            "blocks_per_worker=%d exceeds total_blocks=%d; using one item",
            blocks_per_worker,
            total_blocks,
        )
        blocks_per_worker = total_blocks

    items: list[WorkItem] = []
    cursor = 0
    while cursor < total_blocks:
        count = min(blocks_per_worker, total_blocks - cursor)
        items.append(WorkItem(cursor, count))
        cursor += count
    return items


__all__ = ["WorkItem", "blocks_per_worker", "plan_work_items"]
