from fastapi import APIRouter, Depends, HTTPException

from core.api_client import BuildingApiClient
from core.errors import ApiError, AuthError, handle_api_error
from core.logging_config import logger
from core.roles import role_from_user_data
from core.route_guard import RouteAccessGuard
from dependencies.services import get_api_client, get_route_guard
from models.auth import LoginRequest


router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
)


# ============================================================
# LOGIN (proxied to the building-management backend)
# ============================================================
@router.post("/login", summary="Authenticate user and resolve session role")
async def login(
    payload: LoginRequest,
    client: BuildingApiClient = Depends(get_api_client),
    guard: RouteAccessGuard = Depends(get_route_guard),
):
    """
    Logs in against the backend and returns what the shell needs to start
    a session: tokens, the resolved role, the landing route and the
    building list. The first building is selected by default.
    """
    try:
        result = await client.login(payload.email, payload.password)
    except AuthError as e:
        logger.warning(f"Login attempt failed for {payload.email.strip().lower()}: {e.message}")
        raise handle_api_error(e, "Login")
    except ApiError as e:
        # Backend unreachable or misbehaving; never reported as bad credentials
        logger.error(f"Login backend failure: {e}")
        raise HTTPException(status_code=502, detail="Login failed")

    selected_building = result.buildings[0] if result.buildings else None
    role = role_from_user_data(result.user, selected_building)

    return {
        "access_token": result.access_token,
        "refresh_token": result.refresh_token,
        "token_type": result.token_type,
        "user": result.user,
        "role": role,
        "landing_route": guard.redirect_target(role),
        "buildings": result.buildings,
        "selected_building_id": selected_building.id if selected_building else None,
    }
