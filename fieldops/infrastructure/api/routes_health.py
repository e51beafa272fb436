"""Health check endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy import text

from fieldops.config import settings
from fieldops.infrastructure.api.dependencies import Repositories, get_repositories

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(repos: Repositories = Depends(get_repositories)):
    """Check API and data pool connectivity."""
    try:
        if repos.session is not None:
            result = await repos.session.execute(text("SELECT 1"))
            result.scalar()
        else:
            await repos.assignments.get_all()
        store_status = "connected"
    except Exception as e:
        store_status = f"error: {e}"

    return {
        "status": "ok" if store_status == "connected" else "degraded",
        "backend": settings.data_backend,
        "store": store_status,
        "service": "FieldOps Dispatch",
    }
