"""
Health check endpoints.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
import redis.asyncio as redis

from config import settings

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """
    Health check endpoint.
    Reports store readiness and whether the rate-limit backend is reachable.
    """
    storage = getattr(request.app.state, "storage", None)
    health_status = {
        "status": "healthy",
        "api": "up",
        "storage": "up" if storage is not None else "uninitialized",
        "redis": "unknown",
    }
    if storage is None:
        health_status["status"] = "degraded"

    # Redis only backs rate limiting; the API keeps working without it.
    try:
        r = redis.from_url(settings.REDIS_URL)
        await r.ping()
        await r.aclose()
        health_status["redis"] = "up"
    except Exception as e:
        health_status["redis"] = f"down: {str(e)}"

    return health_status


@router.get("/health/ready")
async def readiness_check(request: Request):
    """Kubernetes-style readiness probe."""
    if getattr(request.app.state, "storage", None) is None:
        return JSONResponse(
            status_code=503,
            content={"ready": False, "missing": ["storage"]},
        )
    return {"ready": True}


@router.get("/health/live")
async def liveness_check():
    """Kubernetes-style liveness probe."""
    return {"alive": True}
