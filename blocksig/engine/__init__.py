"""Parallel fixed-size block hashing engine."""

from blocksig.engine.errors import (
    BlockError,
    ConfigurationError,
    InvalidBlockSizeError,
    ModeConflictError,
    SignatureError,
    SignatureFormatError,
    ZeroReadError,
)
from blocksig.engine.geometry import block_count
from blocksig.engine.partition import WorkItem, blocks_per_worker
from blocksig.engine.readers import BytesRangeReader, FileRangeReader, RangeReader
from blocksig.engine.signature import SignatureResult, compute_signature

__all__ = [
    "BlockError",
    "BytesRangeReader",
    "ConfigurationError",
    "FileRangeReader",
    "InvalidBlockSizeError",
    "ModeConflictError",
    "RangeReader",
    "SignatureError",
    "SignatureFormatError",
    "SignatureResult",
    "WorkItem",
    "ZeroReadError",
    "block_count",
    "blocks_per_worker",
    "compute_signature",
]
