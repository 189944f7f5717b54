# routers/icons.py

from typing import Optional

from fastapi import APIRouter, Depends, Query

from core.icons import IconResolver, RGBColor
from core.logging_config import logger
from dependencies.services import get_icon_resolver
from models.capability import IconSpec


router = APIRouter(
    prefix="/icons",
    tags=["Icons"],
)


def _color_payload(color: Optional[RGBColor]) -> Optional[dict]:
    if color is None:
        return None
    return {"hex": color.hex, "red": color.red, "green": color.green, "blue": color.blue}


# -----------------------------------------------------
# GET /icons/resolve?name=
# Never fails: unknown names resolve to the fallback icon
# -----------------------------------------------------
@router.get("/resolve", summary="Resolve an icon name")
def resolve_icon(
    name: Optional[str] = Query(None, description="Icon name from the API or a capability key"),
    icons: IconResolver = Depends(get_icon_resolver),
):
    icon = icons.resolve(name)
    return {
        "name": name,
        "icon": icon,
        "resolved": icons.has_icon(name),
    }


# -----------------------------------------------------
# POST /icons/resolve
# Full API icon object: name + optional colors
# -----------------------------------------------------
@router.post("/resolve", summary="Resolve an API icon object")
def resolve_icon_spec(spec: IconSpec, icons: IconResolver = Depends(get_icon_resolver)):
    return {
        "icon": icons.resolve_from_api_icon_spec(spec),
        "color": _color_payload(icons.color_from_spec(spec)),
        "background_color": _color_payload(icons.background_color_from_spec(spec)),
    }


@router.get("/stats", summary="Icon cache statistics")
def icon_stats(icons: IconResolver = Depends(get_icon_resolver)):
    return icons.cache_stats()


@router.delete("/cache", summary="Clear the icon cache")
def clear_icon_cache(icons: IconResolver = Depends(get_icon_resolver)):
    cleared = len(icons.cache)
    icons.clear_cache()
    logger.info(f"Icon cache cleared ({cleared} entries)")
    return {"success": True, "cleared": cleared}
