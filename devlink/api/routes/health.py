"""Health Routes — liveness and readiness probes.

Invariants:
    - GET /api/health/ never touches storage: 200 while the process serves requests
    - GET /api/health/ready answers 503 until the database round-trips a ping
"""

import logging
import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse

import devlink.infrastructure.database as database
from devlink import __version__

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/")
async def liveness():
    return {"status": "healthy", "service": "devlink-api", "version": __version__}


@router.get("/ready")
async def readiness():
    manager = database.db_manager
    started = time.perf_counter()
    db_ok = manager is not None and await manager.health_check()
    if not db_ok:
        logger.warning("Readiness check failed", extra={"path": "/api/health/ready"})
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {
        "status": "ready",
        "checks": {"database": "healthy"},
        "latency_ms": round((time.perf_counter() - started) * 1000, 2),
    }
