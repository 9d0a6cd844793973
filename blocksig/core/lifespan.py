# ------------------------------------------------------------
# Module: blocksig/core/lifespan.py
# Purpose: Manage FastAPI startup and shutdown lifecycle events.
# ------------------------------------------------------------

"""FastAPI lifespan context for startup and shutdown events.

Responsibilities
----------------
- Log startup/shutdown with the effective hashing configuration.
- Log timings and errors for operational monitoring.
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI

from blocksig.utils.timing import ms_since

logger = logging.getLogger("blocksig.lifespan")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and shutdown phases around the application's lifetime."""
    t0 = time.perf_counter()
    cfg = app.state.settings
    logger.info(
        "startup begin target_workers=%d max_block_size_mb=%d",
        cfg.TARGET_WORKERS,
        cfg.MAX_BLOCK_SIZE_MB,
    )
    logger.info("startup ok duration_ms=%.1f", ms_since(t0))
    try:
        yield
    finally:
        logger.info("shutdown ok")
