# ------------------------------------------------------------
# Module: blocksig/io/signature_file.py
# Purpose: Read and write signatures as one hex digest per line.
# ------------------------------------------------------------

"""Line-oriented signature file codec.

Format: UTF-8 text, one lowercase SHA-256 hex digest per line in block id
order, every line newline-terminated. No header: the block size used to
produce a file is not recorded in it.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path

from blocksig.engine.errors import SignatureFormatError

_DIGEST_RE = re.compile(r"[0-9a-f]{64}")


def write_signature(path: str | Path, signature: Iterable[str]) -> int:
    """Write `signature` to `path`, replacing any existing file.

    Returns the number of digests written. I/O failures propagate as `OSError`.
    """
    n = 0
    with Path(path).open("w", encoding="utf-8", newline="\n") as f:
        for digest in signature:
            f.write(digest + "\n")
            n += 1
    return n


def read_signature(path: str | Path) -> list[str]:
    """Parse a signature file back into its ordered list of digests."""
    out: list[str] = []
    with Path(path).open("r", encoding="utf-8", newline="") as f:
        for lineno, line in enumerate(f, start=1):
            if not line.endswith("\n"):
                raise SignatureFormatError(f"line {lineno}: missing newline terminator")
            digest = line[:-1]
            if not _DIGEST_RE.fullmatch(digest):
                raise SignatureFormatError(
                    f"line {lineno}: expected 64 lowercase hex chars, got {digest[:80]!r}"
                )
            out.append(digest)
    return out


__all__ = ["read_signature", "write_signature"]
