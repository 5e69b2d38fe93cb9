"""Health Routes: liveness and readiness probes.

Invariants:
    - GET /health answers 200 while the process serves requests
    - GET /health/ready answers 503 until the database round-trips
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app import __version__
from app.infrastructure import database

router = APIRouter(prefix="/health", tags=["health"])

SERVICE_NAME = "workout-tracker-api"


@router.get("")
async def health_check():
    return {"status": "healthy", "service": SERVICE_NAME, "version": __version__}


@router.get("/ready")
async def readiness_check():
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
