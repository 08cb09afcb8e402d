# ============================================================================
# HEALTH CHECK ROUTER
# ============================================================================
# STATUS: Infrastructure - FastAPI health check endpoints
# PURPOSE: Liveness, readiness and detailed health endpoints
# ============================================================================
"""
Health Check Router

    GET /livez               200 while the process runs, no checks
    GET /readyz              required checks; 503 if any is unhealthy
    GET /health              every check, status code from the aggregate
    GET /health/{check_name} one check; 404 for an unknown name

Aggregate codes: 200 healthy, 206 degraded, 503 unhealthy.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from __version__ import BUILD_DATE, __version__
from health.core import HealthStatus
from health.executor import HealthCheckExecutor

health_router = APIRouter(tags=["Health"])


@health_router.get("/livez")
async def liveness_probe():
    return {"status": "alive", "version": __version__, "build_date": BUILD_DATE}


@health_router.get("/readyz")
async def readiness_probe():
    result = await HealthCheckExecutor().execute_required()

    if result.status == HealthStatus.UNHEALTHY:
        failing = {
            name: check.to_dict()
            for name, check in result.checks.items()
            if check.status == HealthStatus.UNHEALTHY
        }
        return JSONResponse(status_code=503, content={"status": "not_ready", "checks": failing})

    return {"status": "ready", "checks_passed": len(result.checks)}


@health_router.get("/health")
async def full_health_check():
    result = await HealthCheckExecutor().execute_all()
    body = {**result.to_dict(), "version": __version__, "build_date": BUILD_DATE}
    return JSONResponse(status_code=result.status.http_code, content=body)


@health_router.get("/health/{check_name}")
async def single_health_check(check_name: str):
    result = await HealthCheckExecutor().execute_single(check_name)
    if result is None:
        return JSONResponse(status_code=404, content={"error": f"Health check not found: {check_name}"})
    return JSONResponse(status_code=result.status.http_code, content=result.to_dict())


__all__ = [
    "health_router",
]
