"""
Health check endpoints
"""

from datetime import datetime
from typing import Dict, Union

from fastapi import APIRouter, Depends

from theme_contributor.api.dependencies import get_context
from theme_contributor.config.settings import get_settings
from theme_contributor.core.context import ThemeContributorContext

router = APIRouter()
settings = get_settings()


@router.get("/")
async def health_check() -> Dict[str, str]:
    """Basic health check."""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "timestamp": datetime.utcnow().isoformat(),
    }


@router.get("/ready")
async def readiness_check(
    context: ThemeContributorContext = Depends(get_context),
) -> Dict[str, Union[str, int]]:
    """Readiness check including registry state."""
    stats = context.registry.get_registry_stats()
    
    return {
        "status": "degraded" if stats.skipped_contributors else "ready",
        "contributors": stats.total_contributors,
        "skipped_contributors": len(stats.skipped_contributors),
        "last_modified": context.freshness.get_last_modified(),
        "timestamp": datetime.utcnow().isoformat(),
    }
