"""Test: end-to-end properties of `compute_signature`.

Why:
    The engine hashes disjoint ranges on several threads; the resulting
    signature must not depend on how blocks were split between workers.
"""

import hashlib
import io

import pytest

from blocksig.engine import (
    BlockError,
    BytesRangeReader,
    FileRangeReader,
    compute_signature,
)

ABCDE_SHA256 = "36bbe50ed96841d10443bcb670d6554f0a34b761be67ec9c4a8ad2c0c44ca42c"
BS = 64 * 1024


class FailingReader:
    def read_at(self, offset, length):
        raise OSError("nope")


class FailFromReader:
    """Fails every read at or past `limit`; serves zeros before it."""

    def __init__(self, limit):
        self.limit = limit

    def read_at(self, offset, length):
        if offset >= self.limit:
            raise OSError(f"bad read at {offset}")
        return bytes(length)


class BrokenReader:
    def read_at(self, offset, length):
        raise RuntimeError("bug")


def _hashes(chunks):
    return [hashlib.sha256(c).hexdigest() for c in chunks]


@pytest.mark.parametrize("size", [0, 1, BS - 1, BS, BS + 1, 5 * BS + 17])
def test_length_is_block_count(size):
    result = compute_signature(BytesRangeReader(bytes(size)), size, BS, 2, max_workers=4)
    assert result.ok
    assert len(result.signature) == -(-size // BS)


def test_single_small_block_matches_known_digest():
    result = compute_signature(BytesRangeReader(b"abcde"), 5, 1024 * 1024, 1)
    assert result.signature == [ABCDE_SHA256]
    assert result.error is None


def test_exact_blocks_from_file(write_blocks, random_blocks):
    blocks = random_blocks(6, BS)
    path = write_blocks(blocks)
    with path.open("rb") as f:
        result = compute_signature(FileRangeReader(f), 6 * BS, BS, 1, max_workers=4)
    assert result.signature == _hashes(blocks)


def test_half_final_block(write_blocks, random_blocks):
    """6.5 blocks of data yield 7 digests; the 7th covers only the half block."""
    blocks = random_blocks(6, BS) + random_blocks(1, BS // 2)
    path = write_blocks(blocks)
    size = path.stat().st_size
    assert size == 6 * BS + BS // 2

    with path.open("rb") as f:
        result = compute_signature(FileRangeReader(f), size, BS, 1, max_workers=4)

    assert len(result.signature) == 7
    assert result.signature == _hashes(blocks)


def test_partitioning_does_not_change_digests(write_blocks, random_blocks):
    blocks = random_blocks(20, BS)
    path = write_blocks(blocks)
    size = 20 * BS

    with path.open("rb") as f1:
        one = compute_signature(FileRangeReader(f1), size, BS, 1, max_workers=8)
    with path.open("rb") as f2:
        hundred = compute_signature(FileRangeReader(f2), size, BS, 100, max_workers=8)

    assert one.signature == hundred.signature == _hashes(blocks)


def test_repeated_runs_are_identical(write_blocks, random_blocks):
    path = write_blocks(random_blocks(9, BS))
    size = path.stat().st_size
    runs = []
    for _ in range(3):
        with path.open("rb") as f:
            runs.append(compute_signature(FileRangeReader(f), size, BS, 2).signature)
    assert runs[0] == runs[1] == runs[2]


def test_memory_file_and_buffer_agree(write_blocks):
    """Lock-guarded seek/read, pread, and in-memory slicing give the same result."""
    data = bytes(range(10))
    path = write_blocks([data])

    mem = compute_signature(BytesRangeReader(data), 10, 1, 3)
    stream_reader = FileRangeReader(io.BytesIO(data))
    assert not stream_reader.positioned
    streamed = compute_signature(stream_reader, 10, 1, 3)
    with path.open("rb") as f:
        on_disk = compute_signature(FileRangeReader(f), 10, 1, 3)

    expected = _hashes([bytes([b]) for b in data])
    assert mem.signature == streamed.signature == on_disk.signature == expected


def test_empty_stream():
    result = compute_signature(BytesRangeReader(b""), 0, BS, 1)
    assert result.signature == []
    assert result.error is None
    assert result.failures == ()


def test_failing_reader_reports_block_zero():
    result = compute_signature(FailingReader(), 1, 1, 1)
    assert isinstance(result.error, BlockError)
    assert result.error.block_id == 0
    # Full length even on failure; unreached slots stay empty.
    assert result.signature == [""]
    assert not result.ok


def test_failure_stops_further_dispatch():
    """With one worker, nothing is dispatched after the first failed item."""
    result = compute_signature(FailingReader(), 10, 1, 1, max_workers=1)
    assert result.error.block_id == 0
    assert len(result.failures) == 1
    assert result.signature == [""] * 10


def test_partial_result_on_failure():
    """Items before the failing one complete; the failure names its block."""
    size = 8 * 4
    result = compute_signature(FailFromReader(limit=12), size, 4, 1, max_workers=1)
    assert result.error.block_id == 3
    assert result.lowest_failure.block_id == 3
    assert result.signature[:3] == [hashlib.sha256(bytes(4)).hexdigest()] * 3
    assert result.signature[3:] == [""] * 5


def test_lowest_failure_over_concurrent_failures():
    result = compute_signature(FailingReader(), 40, 1, 1, max_workers=8)
    assert result.error is not None
    assert result.lowest_failure.block_id == min(e.block_id for e in result.failures)


def test_unexpected_worker_errors_propagate():
    with pytest.raises(RuntimeError):
        compute_signature(BrokenReader(), 10, 2, 1, max_workers=2)


@pytest.mark.parametrize(
    ("block_size", "per_worker"),
    [(0, 1), (-4, 1), (4, 0)],
)
def test_invalid_arguments(block_size, per_worker):
    with pytest.raises(ValueError):
        compute_signature(BytesRangeReader(b"abcd"), 4, block_size, per_worker)
