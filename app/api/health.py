"""Health check endpoints"""

from fastapi import APIRouter, Depends

from app.db.session import ping
from app.runtime import MeditationRuntime, get_runtime

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/")
async def health_check(runtime: MeditationRuntime = Depends(get_runtime)):
    """Basic health check endpoint"""
    storage_ok = ping(runtime.engine)
    return {
        "status": "healthy" if storage_ok else "degraded",
        "service": "meditation-backend",
        "storage": "ok" if storage_ok else "unavailable",
    }
