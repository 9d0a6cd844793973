# ------------------------------------------------------------
# Module: blocksig/engine/hasher.py
# Purpose: Sequentially hash one work item's blocks via positioned reads.
# ------------------------------------------------------------

"""SHA-256 hashing of a contiguous block range.

This is the unit of concurrent work: one call per work item, blocks processed
in increasing id order, each digest written to the worker's own slots.

Responsibilities
----------------
- Read every block as an independent byte range, in bounded chunks.
- Start a fresh digest per block so no state crosses block boundaries.
- Stop at the first failing block and raise a `BlockError` carrying its id.
- Detect zero-byte reads of non-empty ranges instead of recording empty digests.
"""

from __future__ import annotations

import hashlib
import logging

from blocksig.engine.buffer import BlockSlots
from blocksig.engine.errors import BlockError, ZeroReadError
from blocksig.engine.geometry import block_length, block_offset
from blocksig.engine.partition import WorkItem
from blocksig.engine.readers import RangeReader

log = logging.getLogger("blocksig.engine.hasher")

DEFAULT_CHUNK_SIZE = 1024 * 1024


def hash_block(
    reader: RangeReader,
    offset: int,
    length: int,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> tuple[str, int]:
    """Hash up to `length` bytes starting at `offset`.

    Returns
    -------
    tuple[str, int]
        Lowercase hex digest and the number of bytes actually read. Reading
        stops early at end of stream.
    """
    h = hashlib.sha256()
    done = 0
    while done < length:
        chunk = reader.read_at(offset + done, min(chunk_size, length - done))
        if not chunk:
            break
        h.update(chunk)
        done += len(chunk)
    return h.hexdigest(), done


def hash_blocks(
    reader: RangeReader,
    size: int,
    block_size: int,
    item: WorkItem,
    slots: BlockSlots,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> None:
    """Hash blocks `[item.start, item.stop)` into `slots`.

    Raises
    ------
    BlockError
        On the first block whose read fails or returns no data. Digests of
        earlier blocks in the item are kept.
    """
    for block_id in item.block_ids():
        offset = block_offset(block_id, block_size)
        length = block_length(size, block_size, block_id)
        try:
            digest, nread = hash_block(reader, offset, length, chunk_size)
        # ValueError covers reads on a file closed underneath the worker.
        except (OSError, ValueError) as e:
            raise BlockError(block_id, e) from e
        if nread == 0:
            log.error(
                "block calculation problem block_id=%d offset=%d length=%d",
                block_id,
                offset,
                length,
            )
            raise BlockError(block_id, ZeroReadError("zero bytes read"))
        slots[block_id] = digest


__all__ = ["DEFAULT_CHUNK_SIZE", "hash_block", "hash_blocks"]
