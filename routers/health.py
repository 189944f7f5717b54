# routers/health.py

from fastapi import APIRouter, Depends

from core.capabilities import CapabilityCatalog
from core.config import settings
from core.icons import IconResolver
from dependencies.services import get_capability_catalog, get_icon_resolver

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


# -----------------------------------------------------
# GET /health/app
# Simple API health check for uptime monitors
# -----------------------------------------------------
@router.get("/app", summary="App health check")
async def health_app():
    """
    Lightweight health check for uptime monitors.
    """
    return {
        "service": settings.PROJECT_NAME,
        "status": "ok",
    }


# -----------------------------------------------------
# GET /health/caches
# Sizes of the session caches
# -----------------------------------------------------
@router.get("/caches", summary="Cache health check")
async def health_caches(
    catalog: CapabilityCatalog = Depends(get_capability_catalog),
    icons: IconResolver = Depends(get_icon_resolver),
):
    """
    Reports which buildings have cached capabilities and icon cache counts.
    No backend calls are made.
    """
    return {
        "status": "ok",
        "capabilities": {
            "cached_buildings": catalog.cached_building_ids(),
        },
        "icons": icons.cache_stats(),
    }
