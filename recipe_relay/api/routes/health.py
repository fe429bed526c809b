"""Health check endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, Request

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check() -> Dict[str, str]:
    """Liveness check."""
    return {"status": "healthy"}


@router.get("/ready")
async def readiness_check(request: Request) -> Dict[str, Any]:
    """
    Readiness check for Cloud Run.
    Reports which route groups this instance serves.
    """
    return {
        "status": "ready",
        "enabled_routes": list(request.app.state.enabled_routes),
    }
