"""Health Probes: liveness and readiness for the container orchestrator.

Invariants:
    - GET /api/v1/health/ is 200 whenever the process can answer
    - GET /api/v1/health/ready is 503 unless the database answers SELECT 1
    - The fic lookup service is reported but never gates readiness: a FicHub
      outage only affects GET /v1/fics, which already answers UPSTREAM_ERROR
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from ficai_signals.infrastructure import database, fichub_client

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_NAME = "ficai-signals"
SERVICE_VERSION = "0.2.0"


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    return {"status": "healthy", "service": SERVICE_NAME, "version": SERVICE_VERSION}


@router.get("/ready")
async def readiness_check():
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        logger.warning("Readiness check failed: database unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    fichub_state = "configured" if fichub_client.fichub_client else "not_initialized"
    return {
        "status": "ready",
        "checks": {"database": "healthy", "fichub": fichub_state},
    }
