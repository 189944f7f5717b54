from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# USER ROLE
# -----------------------------------------------------
class Role(BaseStrEnum):
    """Access level of the current session. One role is active per session."""

    admin = "admin"
    building_manager = "building_manager"
    resident = "resident"
    defect_user = "defect_user"
    staff = "staff"

    @property
    def display_name(self) -> str:
        return _ROLE_DISPLAY_NAMES[self]


_ROLE_DISPLAY_NAMES = {
    Role.admin: "Administrator",
    Role.building_manager: "Building Manager",
    Role.resident: "Resident",
    Role.defect_user: "Defect User",
    Role.staff: "Staff",
}


# -----------------------------------------------------
# CAPABILITY TYPE
# -----------------------------------------------------
class CapabilityType(BaseStrEnum):
    """How a capability is opened from the shell."""

    internal = "internal"
    external_app = "external_app"
    web_link = "web_link"
    hybrid = "hybrid"


# -----------------------------------------------------
# LAUNCH PLATFORM
# -----------------------------------------------------
class Platform(BaseStrEnum):
    """Keys of a capability's external launch targets."""

    ios = "ios"
    android = "android"
    web = "web"
