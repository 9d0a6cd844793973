# ------------------------------------------------------------
# Module: blocksig/engine/readers.py
# Purpose: Random-access range readers shared by concurrent block workers.
# ------------------------------------------------------------

"""Positioned-read adapters over files and in-memory buffers.

Every worker reads its own byte ranges from one shared source, so the source
must tolerate concurrent `read_at` calls without external locking.

Responsibilities
----------------
- Declare the `RangeReader` protocol consumed by the block hasher.
- Wrap binary file objects, preferring `os.pread` on a real descriptor.
- Fall back to `seek` + `read` under a lock for descriptor-less streams.
- Wrap `bytes`/`bytearray`/`memoryview` payloads with zero-copy slicing.
- Measure the length of a seekable stream without consuming it.
"""

from __future__ import annotations

import io
import os
import threading
from typing import BinaryIO, Protocol


# Protocol for any source that can serve an arbitrary byte range.
class RangeReader(Protocol):
    # Return up to `length` bytes starting at `offset`; b"" at end of stream.
    def read_at(self, offset: int, length: int) -> bytes: ...


class BytesRangeReader:
    """Range reader over an in-memory payload (immutable, lock-free)."""

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._view = memoryview(data)

    def __len__(self) -> int:
        return self._view.nbytes

    def read_at(self, offset: int, length: int) -> bytes:
        return self._view[offset : offset + length].tobytes()


class FileRangeReader:
    """Range reader over a binary file object owned by the caller.

    Notes
    -----
    - With a usable file descriptor, reads go through `os.pread`, which never
      moves the shared file position and is safe under concurrency.
    - Otherwise `seek` + `read` pairs are serialized with a lock.
    - The reader never closes the file; lifecycle stays with the caller.
    """

    def __init__(self, fileobj: BinaryIO) -> None:
        self._file = fileobj
        self._lock = threading.Lock()
        self._fd = _descriptor(fileobj) if hasattr(os, "pread") else None

    @property
    def positioned(self) -> bool:
        """True when reads use `os.pread` instead of the locked fallback."""
        return self._fd is not None

    def read_at(self, offset: int, length: int) -> bytes:
        if self._fd is not None:
            return os.pread(self._fd, length, offset)
        with self._lock:
            self._file.seek(offset)
            return self._file.read(length)


def _descriptor(fileobj: BinaryIO) -> int | None:
    try:
        fd = fileobj.fileno()
    except (AttributeError, OSError, io.UnsupportedOperation):
        return None
    # Buffered writers may hold bytes not yet visible to pread.
    flush = getattr(fileobj, "flush", None)
    if flush is not None:
        flush()
    return fd


# Size a seekable stream, restoring its position afterwards.
def stream_size(fileobj: BinaryIO) -> int:
    """Return the total length of a seekable binary stream in bytes."""
    pos = fileobj.tell()
    try:
        return fileobj.seek(0, io.SEEK_END)
    finally:
        fileobj.seek(pos)


__all__ = ["RangeReader", "BytesRangeReader", "FileRangeReader", "stream_size"]
