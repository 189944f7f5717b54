# models/navigation.py

from typing import AbstractSet, FrozenSet, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict

from models.capability import BuildingCapabilitiesResponse
from models.enums import Role


# -------------------------------------------------
# Static navigation entry
# -------------------------------------------------
class NavigationItem(BaseModel):
    """
    Menu entry declared at build time.
    Empty `allowed_roles` means every role may see it.
    """
    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    icon_key: str
    selected_icon_key: Optional[str] = None
    route: str
    required_capabilities: FrozenSet[str] = frozenset()
    allowed_roles: FrozenSet[Role] = frozenset()
    badge: Optional[int] = None
    is_enabled: bool = True
    children: Tuple["NavigationItem", ...] = ()

    def should_show(self, role: Role, available_capabilities: AbstractSet[str]) -> bool:
        if self.allowed_roles and role not in self.allowed_roles:
            return False

        if not self.required_capabilities <= frozenset(available_capabilities):
            return False

        return self.is_enabled

    def __str__(self):
        return f"NavigationItem(key: {self.key}, label: {self.label}, route: {self.route})"


# -------------------------------------------------
# Session snapshot (read-only view of NavigationSession)
# -------------------------------------------------
class NavigationState(BaseModel):
    role: Role
    available_capability_keys: List[str]
    capabilities: Optional[BuildingCapabilitiesResponse] = None
    current_route: str
    current_building_id: Optional[int] = None
    available_building_ids: List[int] = []
    visible_items: List[NavigationItem] = []
