# routers/capabilities.py

from fastapi import APIRouter, Depends, Query

from core.capabilities import CapabilityCatalog
from core.icons import IconResolver
from core.logging_config import logger
from dependencies.services import get_capability_catalog, get_icon_resolver
from models.enums import Role


router = APIRouter(
    prefix="/buildings",
    tags=["Capabilities"],
)


# ============================================================
# GET BUILDING CAPABILITIES
# ============================================================
@router.get(
    "/{building_id}/capabilities",
    summary="Building capabilities",
    description="""
    Enabled and available capabilities for a building, with resolved icons.

    **Caching:** One backend request per building; concurrent requests share it.
    Pass `refresh=true` to bypass the cache.
    **Fallback:** When the backend cannot be reached the role's default
    capabilities are returned with `fallback: true`.

    **Response:**
    - `enabled` / `available`: capability lists
    - `tiles`: capability tiles sorted by sort order
    - `keys`: enabled capability keys
    - `icons`: capability key → icon id
    """,
)
async def get_building_capabilities(
    building_id: int,
    role: Role = Query(Role.resident, description="Role used for the fallback list"),
    refresh: bool = False,
    include_available: bool = False,
    catalog: CapabilityCatalog = Depends(get_capability_catalog),
    icons: IconResolver = Depends(get_icon_resolver),
):
    response = await catalog.fetch(building_id, force_refresh=refresh)

    fallback = response is None
    if fallback:
        logger.warning(f"Serving default capabilities for building {building_id} (role {role})")
        response = catalog.fallback_response(role)

    tiles = catalog.sorted_tiles(response, include_available=include_available)

    return {
        "success": True,
        "building_id": building_id,
        "fallback": fallback,
        "enabled": response.enabled,
        "available": response.available,
        "tiles": tiles,
        "keys": sorted(response.enabled_keys),
        "icons": {
            tile.capability.key: (
                icons.resolve_from_api_icon_spec(tile.capability.icon)
                if tile.capability.icon is not None
                else icons.resolve(tile.capability.key)
            )
            for tile in tiles
        },
    }


@router.delete("/{building_id}/capabilities/cache", summary="Invalidate a building's capability cache")
def invalidate_building_capabilities(
    building_id: int,
    catalog: CapabilityCatalog = Depends(get_capability_catalog),
):
    catalog.invalidate(building_id)
    return {"success": True, "building_id": building_id}
