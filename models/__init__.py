# -------------------------
# Enums
# -------------------------
from .enums import (
    BaseStrEnum,
    Role,
    CapabilityType,
    Platform,
)

# -------------------------
# Capability Models
# -------------------------
from .capability import (
    IconSpec,
    Capability,
    EnabledCapability,
    AvailableCapability,
    CapabilityTile,
    BuildingCapabilitiesResponse,
)

# -------------------------
# Navigation Models
# -------------------------
from .navigation import (
    NavigationItem,
    NavigationState,
)

# -------------------------
# Auth Models
# -------------------------
from .auth import (
    LoginRequest,
    LoginResult,
    UserRead,
    BuildingRead,
)


__all__ = [
    # enums
    "BaseStrEnum",
    "Role",
    "CapabilityType",
    "Platform",

    # capabilities
    "IconSpec",
    "Capability",
    "EnabledCapability",
    "AvailableCapability",
    "CapabilityTile",
    "BuildingCapabilitiesResponse",

    # navigation
    "NavigationItem",
    "NavigationState",

    # auth
    "LoginRequest",
    "LoginResult",
    "UserRead",
    "BuildingRead",
]
