# ------------------------------------------------------------
# Module: blocksig/engine/signature.py
# Purpose: Top-level engine call: plan, hash in parallel, collect partial results.
# ------------------------------------------------------------

"""Compute the block signature of a stream.

Responsibilities
----------------
- Count blocks, allocate the result arena, and plan disjoint work items.
- Run the bounded scheduler to completion.
- Return a full-length signature together with the first recorded failure.

Notes
-----
- On failure the signature keeps its full length; unreached blocks are ``""``.
  Treat a non-None `error` as "possibly incomplete", not "unusable".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from blocksig.engine.buffer import SignatureBuffer
from blocksig.engine.errors import BlockError
from blocksig.engine.failures import ErrorList
from blocksig.engine.geometry import block_count
from blocksig.engine.hasher import DEFAULT_CHUNK_SIZE, hash_blocks
from blocksig.engine.partition import WorkItem, plan_work_items
from blocksig.engine.readers import RangeReader
from blocksig.engine.scheduler import Scheduler

log = logging.getLogger("blocksig.engine")

DEFAULT_TARGET_WORKERS = 30


@dataclass(frozen=True)
class SignatureResult:
    """Outcome of one `compute_signature` call."""

    signature: list[str]
    error: BlockError | None = None
    # Every recorded failure, in completion order.
    failures: tuple[BlockError, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def lowest_failure(self) -> BlockError | None:
        """Failure with the smallest block id; stable across runs, unlike `error`."""
        return min(self.failures, key=lambda e: e.block_id, default=None)


def compute_signature(
    reader: RangeReader,
    size: int,
    block_size: int,
    blocks_per_worker: int,
    *,
    max_workers: int = DEFAULT_TARGET_WORKERS,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> SignatureResult:
    """Hash `size` bytes of `reader` in blocks of `block_size` bytes.

    Args:
        reader: Shared source supporting concurrent `read_at` calls. Not closed here.
        size: Total stream length in bytes.
        block_size: Bytes per block (> 0).
        blocks_per_worker: Blocks per work item (>= 1); clamped to the block count.
        max_workers: Upper bound on concurrently running work items.
        chunk_size: Read granularity inside a block.

    Returns:
        SignatureResult with `len(signature) == ceil(size / block_size)`.

    Raises:
        ValueError: On a non-positive block size, negative size, or bad worker sizing.
    """
    total = block_count(size, block_size)
    buffer = SignatureBuffer(total)
    items = plan_work_items(total, blocks_per_worker)
    views = buffer.partition(items)
    errors = ErrorList()

    def _work(index: int, item: WorkItem) -> None:
        hash_blocks(reader, size, block_size, item, views[index], chunk_size)

    dispatched = Scheduler(max_workers).run(items, _work, errors)
    log.debug(
        "signature computed blocks=%d items=%d dispatched=%d failures=%d",
        total,
        len(items),
        dispatched,
        len(errors),
    )
    return SignatureResult(
        signature=buffer.to_list(),
        error=errors.first(),
        failures=errors.failures(),
    )


__all__ = ["DEFAULT_TARGET_WORKERS", "SignatureResult", "compute_signature"]
