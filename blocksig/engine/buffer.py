# ------------------------------------------------------------
# Module: blocksig/engine/buffer.py
# Purpose: Pre-sized digest arena written in disjoint ranges by workers.
# ------------------------------------------------------------

"""Result buffer addressed by block id.

The arena carries no lock. Each worker receives a `BlockSlots` view that can
only write inside its own work item, and `SignatureBuffer.partition` refuses
to hand out views unless the items cover the arena exactly once.

Responsibilities
----------------
- Allocate one empty digest slot per block.
- Validate that work items partition `[0, total_blocks)` with no overlap or gap.
- Reject out-of-range writes from a worker view.
"""

from __future__ import annotations

from collections.abc import Sequence

from blocksig.engine.partition import WorkItem


class BlockSlots:
    """Write-only window over the arena restricted to one work item."""

    __slots__ = ("_slots", "_item")

    def __init__(self, slots: list[str], item: WorkItem) -> None:
        self._slots = slots
        self._item = item

    @property
    def item(self) -> WorkItem:
        return self._item

    def __setitem__(self, block_id: int, digest: str) -> None:
        if not self._item.start <= block_id < self._item.stop:
            raise IndexError(
                f"block {block_id} outside work item "
                f"[{self._item.start}, {self._item.stop})"
            )
        self._slots[block_id] = digest


class SignatureBuffer:
    """Fixed-length sequence of digest slots; unreached blocks stay ``""``."""

    def __init__(self, total_blocks: int) -> None:
        if total_blocks < 0:
            raise ValueError(f"total_blocks must be >= 0, got {total_blocks}")
        self._slots: list[str] = [""] * total_blocks

    def __len__(self) -> int:
        return len(self._slots)

    def partition(self, items: Sequence[WorkItem]) -> list[BlockSlots]:
        """Return one writer view per item after checking the items tile the arena.

        Raises
        ------
        ValueError
            If any item is empty, overlaps another, leaves a gap, or runs past the end.
        """
        cursor = 0
        for item in sorted(items, key=lambda it: it.start):
            if item.count < 1:
                raise ValueError(f"empty work item at block {item.start}")
            if item.start != cursor:
                kind = "overlap" if item.start < cursor else "gap"
                raise ValueError(f"work items {kind} at block {min(item.start, cursor)}")
            cursor = item.stop
        if cursor != len(self._slots):
            raise ValueError(
                f"work items cover {cursor} blocks, expected {len(self._slots)}"
            )
        return [BlockSlots(self._slots, item) for item in items]

    def to_list(self) -> list[str]:
        return list(self._slots)


__all__ = ["BlockSlots", "SignatureBuffer"]
