# ------------------------------------------------------------
# Module: blocksig/services/signature.py
# Purpose: Glue between transport adapters (CLI, HTTP) and the hashing engine.
# ------------------------------------------------------------

"""Service layer for signature computation.

Keeps the CLI and HTTP controllers thin: both hand over a stream, its length,
and a block size in MiB; this module validates, sizes the work, runs the
engine, and logs the outcome.

Responsibilities
----------------
- Parse and bound block sizes given in MiB.
- Derive per-worker block counts from the configured worker target.
- Hash files and uploaded streams, logging full failure detail server-side.
- Persist signatures for file mode.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import BinaryIO

from blocksig.core.config import Settings, settings as default_settings
from blocksig.engine import (
    FileRangeReader,
    InvalidBlockSizeError,
    SignatureResult,
    block_count,
    blocks_per_worker,
    compute_signature,
)
from blocksig.io.signature_file import write_signature
from blocksig.utils.timing import log_timer

log = logging.getLogger("blocksig.services.signature")

MIB = 1024 * 1024

_INT_RE = re.compile(r"[+-]?[0-9]+")


def parse_block_size_mb(raw: str | None) -> int:
    """Parse a form/CLI block size string as an integer number of MiB."""
    # Plain ASCII digits only; int() alone would accept "1_0", padding, and
    # non-ASCII digits.
    if raw is None or not _INT_RE.fullmatch(raw):
        raise InvalidBlockSizeError(f"unexpected block size format: {raw!r}")
    return int(raw)


def block_size_bytes(block_size_mb: int, settings: Settings | None = None) -> int:
    """Convert a MiB block size to bytes, enforcing `1..MAX_BLOCK_SIZE_MB`."""
    cfg = settings or default_settings
    if not 1 <= block_size_mb <= cfg.MAX_BLOCK_SIZE_MB:
        raise InvalidBlockSizeError(
            f"unsupported block size {block_size_mb} MiB "
            f"(allowed 1..{cfg.MAX_BLOCK_SIZE_MB})"
        )
    return block_size_mb * MIB


def sign_stream(
    fileobj: BinaryIO,
    size: int,
    block_size: int,
    settings: Settings | None = None,
) -> SignatureResult:
    """Hash an open binary stream of known `size`; the caller keeps ownership."""
    cfg = settings or default_settings
    per_worker = blocks_per_worker(block_count(size, block_size), cfg.TARGET_WORKERS)
    with log_timer("hash-stream", log, size=size, block_size=block_size):
        result = compute_signature(
            FileRangeReader(fileobj),
            size,
            block_size,
            per_worker,
            max_workers=cfg.TARGET_WORKERS,
            chunk_size=cfg.READ_CHUNK_BYTES,
        )
    if result.error is not None:
        log.error(
            "hash failed blocks=%d failures=%d first=%s",
            len(result.signature),
            len(result.failures),
            result.error,
            exc_info=result.error,
        )
    return result


def sign_file(
    input_path: str | Path,
    output_path: str | Path,
    block_size_mb: int,
    settings: Settings | None = None,
) -> SignatureResult:
    """Hash `input_path` and write the signature file to `output_path`.

    Raises:
        InvalidBlockSizeError: Block size outside the configured bounds.
        OSError: Input cannot be opened/sized or output cannot be written.
        BlockError: A block could not be read; nothing is written in that case.
    """
    cfg = settings or default_settings
    block_size = block_size_bytes(block_size_mb, cfg)
    src = Path(input_path)
    with src.open("rb") as f:
        size = os.fstat(f.fileno()).st_size
        result = sign_stream(f, size, block_size, cfg)
    if result.error is not None:
        raise result.error

    count = write_signature(output_path, result.signature)
    log.info("signature written path=%s blocks=%d", output_path, count)
    return result


__all__ = [
    "MIB",
    "block_size_bytes",
    "parse_block_size_mb",
    "sign_file",
    "sign_stream",
]
