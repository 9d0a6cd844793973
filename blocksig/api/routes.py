# ------------------------------------------------------------
# Module: blocksig/api/routes.py
# Purpose: Compose and expose the service's FastAPI routers.
# ------------------------------------------------------------

"""Central composition root for HTTP routing.

The service serves a single endpoint, `POST /signature`.
"""

from __future__ import annotations

from fastapi import APIRouter

from blocksig.api.signature import router as signature_router

router: APIRouter = APIRouter()

router.include_router(signature_router, prefix="/signature", tags=["signature"])
