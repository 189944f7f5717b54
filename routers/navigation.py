# routers/navigation.py

from typing import List

from fastapi import APIRouter, Depends, Query

from core.navigation import NavigationResolver
from core.route_guard import RouteAccessGuard
from core.route_utils import build_breadcrumbs, route_name_from_location, requires_auth
from core.utils import parse_capability_keys
from dependencies.services import get_navigation_resolver, get_route_guard
from models.enums import Role
from models.navigation import NavigationItem


router = APIRouter(
    prefix="/navigation",
    tags=["Navigation"],
)

# ============================================================
# VISIBLE ITEMS
# ============================================================
@router.get(
    "/items",
    response_model=List[NavigationItem],
    summary="Visible navigation items",
    description="""
    Navigation entries the role may see given the building's enabled capabilities,
    in master-list order.
    """,
)
def list_items(
    role: Role,
    capabilities: List[str] = Query([], description="Enabled capability keys (repeat or comma-separate)"),
    resolver: NavigationResolver = Depends(get_navigation_resolver),
):
    return resolver.visible_items(role, parse_capability_keys(capabilities))


@router.get("/items/primary", response_model=List[NavigationItem], summary="Primary navigation items")
def list_primary_items(
    role: Role,
    capabilities: List[str] = Query([], description="Enabled capability keys (repeat or comma-separate)"),
    resolver: NavigationResolver = Depends(get_navigation_resolver),
):
    return resolver.primary_items(role, parse_capability_keys(capabilities))


@router.get("/items/secondary", response_model=List[NavigationItem], summary="Secondary navigation items")
def list_secondary_items(
    role: Role,
    capabilities: List[str] = Query([], description="Enabled capability keys (repeat or comma-separate)"),
    resolver: NavigationResolver = Depends(get_navigation_resolver),
):
    return resolver.secondary_items(role, parse_capability_keys(capabilities))


# ============================================================
# ACCESS DECISION
# ============================================================
@router.get(
    "/access",
    summary="Route access decision",
    description="""
    Whether `role` may enter `route` with the given capabilities.

    **Response:**
    - `allowed`: Boolean decision
    - `redirect`: Landing route to use when not allowed (null when allowed)
    - `requires_auth`: False for public routes (/login, /register)
    """,
)
def check_access(
    route: str,
    role: Role,
    capabilities: List[str] = Query([], description="Enabled capability keys (repeat or comma-separate)"),
    guard: RouteAccessGuard = Depends(get_route_guard),
):
    keys = parse_capability_keys(capabilities)
    allowed = guard.can_enter(route, role, keys)
    return {
        "route": route,
        "role": role,
        "allowed": allowed,
        "redirect": None if allowed else guard.redirect_target(role),
        "route_name": route_name_from_location(route),
        "requires_auth": requires_auth(route),
    }


@router.get("/landing", summary="Landing route for a role")
def landing_route(role: Role, guard: RouteAccessGuard = Depends(get_route_guard)):
    return {"role": role, "route": guard.redirect_target(role)}


# ============================================================
# BREADCRUMBS
# ============================================================
@router.get("/breadcrumbs", summary="Breadcrumb trail for a location")
def breadcrumbs(location: str = Query(..., description="Current route, e.g. /defects/42")):
    return {"location": location, "breadcrumbs": build_breadcrumbs(location)}
