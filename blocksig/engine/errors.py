# ------------------------------------------------------------
# Module: blocksig/engine/errors.py
# Purpose: Typed exceptions for configuration, block access, and codec failures.
# ------------------------------------------------------------

"""Exception types for the signature engine and its adapters.

Responsibilities
----------------
- Provide a base `SignatureError` for catch-all handling.
- Reject bad configuration (block size, CLI modes) before any hashing starts.
- Tie stream-access failures to the block id where they occurred.
- Flag internal invariant violations (zero-byte reads) distinctly.
"""

from __future__ import annotations


class SignatureError(Exception):
    """Base class for signature failures."""


class ConfigurationError(SignatureError, ValueError):
    """Raised for invalid settings or arguments, before hashing starts."""


class InvalidBlockSizeError(ConfigurationError):
    """Raised when a block size is malformed or outside the supported range."""


class ModeConflictError(ConfigurationError):
    """Raised when mutually exclusive run modes are requested together."""


class ZeroReadError(SignatureError):
    """A block range that must be non-empty read zero bytes without an I/O error."""


class SignatureFormatError(SignatureError, ValueError):
    """Raised when a signature file cannot be parsed."""


class BlockError(SignatureError):
    """Failure to read or hash a single block.

    Notes
    -----
    - `block_id` identifies where the failure happened, not the lowest failing block.
    - `cause` is the underlying exception; it is also chained as `__cause__`.
    """

    def __init__(self, block_id: int, cause: BaseException) -> None:
        super().__init__(block_id, cause)
        self.block_id = block_id
        self.cause = cause
        self.__cause__ = cause

    def __str__(self) -> str:
        return f"block {self.block_id} error: {self.cause}"


__all__ = [
    "SignatureError",
    "ConfigurationError",
    "InvalidBlockSizeError",
    "ModeConflictError",
    "ZeroReadError",
    "SignatureFormatError",
    "BlockError",
]
