"""
Health check endpoint.
"""

from fastapi import APIRouter

from perf_report.config import settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check():
    """Basic health check."""
    return {"status": "ok"}


@router.get("/health/detailed")
async def detailed_health():
    """Health check with the rendering settings in effect."""
    return {
        "status": "ok",
        "strict_group_lookup": settings.STRICT_GROUP_LOOKUP,
        "pagespeed_strategy": settings.PAGESPEED_STRATEGY,
        "pagespeed_api_key_configured": bool(settings.PAGESPEED_API_KEY)
    }
