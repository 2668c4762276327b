"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /healthz always returns 200 {"status": "ok"} if the process is up
    - GET /readyz returns 503 if the database is unreachable

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from
      the load balancer
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from qa_api.api.dependencies import get_db_manager
from qa_api.infrastructure.database import DatabaseSessionManager

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/healthz", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {"status": "ok"}


@router.get("/readyz")
async def readiness_check(
    db: DatabaseSessionManager = Depends(get_db_manager),
):
    """Readiness probe — includes database connectivity."""
    if not await db.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready"},
        )
    return {"status": "ready"}
