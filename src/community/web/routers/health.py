"""Liveness and readiness endpoints."""

from fastapi import APIRouter, Response

from community.web.deps import AppDep

router = APIRouter(tags=["health"])


@router.get("/health", summary="Health check", operation_id="health")
async def health_check(app: AppDep, response: Response) -> dict[str, str]:
    connected = await app.is_database_ready()
    if not connected:
        response.status_code = 503
    return {"status": "ok" if connected else "degraded", "database": "connected" if connected else "disconnected"}


@router.get("/ready", summary="Readiness check", operation_id="ready")
async def readiness_check(app: AppDep, response: Response) -> dict[str, str]:
    if await app.is_database_ready():
        return {"status": "ready"}
    response.status_code = 503
    return {"status": "not ready", "reason": "database not connected"}
