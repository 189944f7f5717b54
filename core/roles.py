from typing import Any, List, Mapping, Optional

from models.enums import Role


# ============================================
# CENTRALIZED ROLE → DEFAULT CAPABILITIES MAP
# Used when a building's capability list cannot be fetched.
# ============================================
ROLE_DEFAULT_CAPABILITIES = {

    # =====================================================
    # ADMIN: every building capability type, still
    # subject to building-specific filtering
    # =====================================================
    Role.admin: [
        "defects",
        "documents",
        "messaging",
        "intercom",
        "calendar_booking",
    ],


    # =====================================================
    # BUILDING MANAGER
    # =====================================================
    Role.building_manager: [
        "defects",
        "documents",
        "messaging",
        "intercom",
        "calendar_booking",
    ],


    # =====================================================
    # RESIDENT
    # =====================================================
    Role.resident: [
        "defects",
        "documents",
        "messaging",
        "intercom",
        "calendar_booking",
    ],


    # =====================================================
    # DEFECT USER: defects only
    # =====================================================
    Role.defect_user: [
        "defects",
    ],


    # =====================================================
    # STAFF: no intercom / bookings
    # =====================================================
    Role.staff: [
        "defects",
        "documents",
        "messaging",
    ],
}

MULTI_BUILDING_ROLES = frozenset({Role.admin, Role.building_manager})


# -----------------------------------------------------
# Role predicates
# -----------------------------------------------------
def is_admin(role: Role) -> bool:
    return role == Role.admin


def can_manage_buildings(role: Role) -> bool:
    return role in MULTI_BUILDING_ROLES


def can_access_multiple_buildings(role: Role) -> bool:
    return role in MULTI_BUILDING_ROLES


def is_defect_only(role: Role) -> bool:
    return role == Role.defect_user


def default_capabilities(role: Role) -> List[str]:
    """Fresh copy of the role's fallback capability keys."""
    return list(ROLE_DEFAULT_CAPABILITIES.get(role, []))


def can_access_capability(role: Role, capability: str) -> bool:
    return capability in ROLE_DEFAULT_CAPABILITIES.get(role, [])


# -----------------------------------------------------
# Role lookup
# -----------------------------------------------------
def role_from_key(key: Optional[str]) -> Optional[Role]:
    """Role for a backend key such as "defect_user"; None when unknown."""
    if not key:
        return None
    normalized = str(key).strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return Role(normalized)
    except ValueError:
        return None


def _field(source: Any, name: str) -> Any:
    if source is None:
        return None
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def role_from_user_data(user: Any, building: Any = None) -> Role:
    """
    Determine the session role at login.

    Order:
      1. explicit role on the building membership
      2. explicit role on the user
      3. is_admin flag → admin
      4. resident
    """
    for source in (building, user):
        role = role_from_key(_field(source, "role"))
        if role is not None:
            return role

    if _field(user, "is_admin"):
        return Role.admin

    return Role.resident
