# ------------------------------------------------------------
# Module: blocksig/engine/geometry.py
# Purpose: Pure block arithmetic for a stream of known length.
# ------------------------------------------------------------

"""Map a stream length and block size onto block ids and byte ranges.

Responsibilities
----------------
- Count the blocks covering a stream (`ceil(size / block_size)`).
- Resolve the byte offset and the (possibly truncated) length of a block.
"""

from __future__ import annotations


def _check(size: int, block_size: int) -> None:
    if block_size <= 0:
        raise ValueError(f"block_size must be positive, got {block_size}")
    if size < 0:
        raise ValueError(f"size must be non-negative, got {size}")


# Number of fixed-size blocks needed to cover `size` bytes.
def block_count(size: int, block_size: int) -> int:
    """Return `ceil(size / block_size)`; an empty stream has zero blocks."""
    _check(size, block_size)
    return -(-size // block_size)


def block_offset(block_id: int, block_size: int) -> int:
    return block_id * block_size


def block_length(size: int, block_size: int, block_id: int) -> int:
    """Return the byte length of `block_id`, truncated at the end of the stream.

    Notes
    -----
    - Only the final block may be shorter than `block_size`.
    - Ids at or past the end of the stream yield 0.
    """
    _check(size, block_size)
    remaining = size - block_offset(block_id, block_size)
    return max(0, min(block_size, remaining))


__all__ = ["block_count", "block_offset", "block_length"]
