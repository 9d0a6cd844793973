# ------------------------------------------------------------
# Module: blocksig/api/models.py
# Purpose: Public response contract for the signature endpoint.
# ------------------------------------------------------------
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# Wire messages returned in `error`; part of the public API.
ERR_BLOCK_SIZE_FORMAT = "Unexpected format of block size"
ERR_BLOCK_SIZE_RANGE = "Unsupported block size"
ERR_READ_DATA = "Unable to read data"
ERR_HASH = "Unable to hash input file"


# Every outcome (success or failure) is reported inside this body with HTTP 200.
class SignatureResponse(BaseModel):
    """Result of `POST /signature`.

    Note:
        - On success `error` is empty and `signature` holds one digest per block.
        - On failure `signature` is empty and `error` holds a short, fixed message.
    """

    model_config = ConfigDict(extra="forbid")

    error: str = ""
    signature: list[str] = Field(default_factory=list)

    @classmethod
    def failure(cls, message: str) -> SignatureResponse:
        return cls(error=message, signature=[])


__all__ = [
    "ERR_BLOCK_SIZE_FORMAT",
    "ERR_BLOCK_SIZE_RANGE",
    "ERR_HASH",
    "ERR_READ_DATA",
    "SignatureResponse",
]
