# ------------------------------------------------------------
# Module: blocksig/api/signature.py
# Purpose: Multipart upload endpoint that returns a block signature as JSON.
# ------------------------------------------------------------

"""Expose the hashing engine over HTTP.

Responsibilities
----------------
- Accept a multipart form with `blocksize` (MiB) and `data` (file payload).
- Validate the block size before touching the payload.
- Hash the upload off the event loop and return the digests.
- Report every failure as a 200 JSON body with a fixed message; details stay
  in the server log and are never echoed to the client.
"""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Request
from starlette.datastructures import FormData, UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException

from blocksig.core.config import Settings, settings as default_settings
from blocksig.engine import InvalidBlockSizeError
from blocksig.engine.readers import stream_size
from blocksig.services.signature import block_size_bytes, parse_block_size_mb, sign_stream

from .models import (
    ERR_BLOCK_SIZE_FORMAT,
    ERR_BLOCK_SIZE_RANGE,
    ERR_HASH,
    ERR_READ_DATA,
    SignatureResponse,
)

router = APIRouter()
log = logging.getLogger("blocksig.api.signature")


def _settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or default_settings


@router.post("", response_model=SignatureResponse)
async def create_signature(request: Request) -> SignatureResponse:
    """
    Hash an uploaded file in fixed-size blocks.

    Form fields:
        blocksize: integer block size in MiB, 1..MAX_BLOCK_SIZE_MB.
        data: the file to hash.

    Example Response:
        {"error": "", "signature": ["36bbe50e...ca42c"]}
    """
    cfg = _settings(request)
    try:
        form = await request.form()
    except StarletteHTTPException as e:
        log.warning("unable to parse form: %s", e.detail)
        return SignatureResponse.failure(ERR_READ_DATA)

    try:
        return await _sign_form(form, cfg)
    finally:
        # Spooled upload files are released as soon as hashing is done.
        await form.close()


async def _sign_form(form: FormData, cfg: Settings) -> SignatureResponse:
    raw = form.get("blocksize")
    try:
        block_size_mb = parse_block_size_mb(raw if isinstance(raw, str) else None)
    except InvalidBlockSizeError as e:
        log.warning("%s", e)
        return SignatureResponse.failure(ERR_BLOCK_SIZE_FORMAT)
    try:
        block_size = block_size_bytes(block_size_mb, cfg)
    except InvalidBlockSizeError as e:
        log.warning("%s", e)
        return SignatureResponse.failure(ERR_BLOCK_SIZE_RANGE)

    data = form.get("data")
    if not isinstance(data, UploadFile):
        log.warning("unable to read data: missing file field 'data'")
        return SignatureResponse.failure(ERR_READ_DATA)

    try:
        size = data.size if data.size is not None else stream_size(data.file)
    except OSError:
        log.exception("unable to read data filename=%s", data.filename)
        return SignatureResponse.failure(ERR_READ_DATA)

    # Hashing is blocking, CPU- and I/O-bound; keep it off the event loop.
    try:
        result = await asyncio.to_thread(sign_stream, data.file, size, block_size, cfg)
    except Exception:
        # Spooling to disk or a worker bug; still a 200 body, detail stays in the log.
        log.exception("unable to hash input file filename=%s", data.filename)
        return SignatureResponse.failure(ERR_HASH)
    if result.error is not None:
        log.error("unable to hash input file filename=%s: %s", data.filename, result.error)
        return SignatureResponse.failure(ERR_HASH)

    log.info(
        "signature ok filename=%s size=%d blocks=%d",
        data.filename,
        size,
        len(result.signature),
    )
    return SignatureResponse(error="", signature=result.signature)
