# core/navigation.py

from typing import AbstractSet, Iterable, List, Optional, Sequence, Tuple

from models.enums import Role
from models.navigation import NavigationItem


# Roles that may use building-wide communication features
_COMMUNITY_ROLES = frozenset({Role.admin, Role.building_manager, Role.resident, Role.staff})
# Not available to defect-only users or basic staff
_RESIDENT_SERVICE_ROLES = frozenset({Role.admin, Role.building_manager, Role.resident})


# ============================================================
# MASTER NAVIGATION LIST (declaration order = display order)
# ============================================================
MASTER_NAVIGATION_ITEMS: Tuple[NavigationItem, ...] = (
    NavigationItem(
        key="dashboard",
        label="Dashboard",
        icon_key="dashboard_outlined",
        selected_icon_key="dashboard",
        route="/dashboard",
    ),
    NavigationItem(
        key="defects",
        label="Defects",
        icon_key="report_problem_outlined",
        selected_icon_key="report_problem",
        route="/defects",
        required_capabilities=frozenset({"defects"}),
    ),
    NavigationItem(
        key="documents",
        label="Documents",
        icon_key="folder_outlined",
        selected_icon_key="folder",
        route="/documents",
        required_capabilities=frozenset({"documents"}),
        allowed_roles=_COMMUNITY_ROLES,
    ),
    NavigationItem(
        key="messaging",
        label="Messages",
        icon_key="message_outlined",
        selected_icon_key="message",
        route="/messaging",
        required_capabilities=frozenset({"messaging"}),
        allowed_roles=_COMMUNITY_ROLES,
    ),
    NavigationItem(
        key="intercom",
        label="Intercom",
        icon_key="doorbell_outlined",
        selected_icon_key="doorbell",
        route="/intercom",
        required_capabilities=frozenset({"intercom"}),
        allowed_roles=_RESIDENT_SERVICE_ROLES,
    ),
    NavigationItem(
        key="calendar",
        label="Bookings",
        icon_key="calendar_today_outlined",
        selected_icon_key="calendar_today",
        route="/calendar",
        required_capabilities=frozenset({"calendar_booking"}),
        allowed_roles=_RESIDENT_SERVICE_ROLES,
    ),
    NavigationItem(
        key="settings",
        label="Settings",
        icon_key="settings_outlined",
        selected_icon_key="settings",
        route="/settings",
    ),
)

# Shown in the secondary area (drawer footer / overflow), not the main bar
SECONDARY_ITEM_KEYS = frozenset({"settings", "profile"})


class NavigationResolver:
    """
    Filters the master list down to what a role may see.

    Order is always the master list's declaration order; sorting capability
    tiles by sort order is the renderer's job.
    """

    def __init__(self, items: Sequence[NavigationItem] = MASTER_NAVIGATION_ITEMS):
        self._items = tuple(items)

    @property
    def items(self) -> Tuple[NavigationItem, ...]:
        return self._items

    def visible_items(self, role: Role, available_capability_keys: Iterable[str]) -> List[NavigationItem]:
        keys = _as_key_set(available_capability_keys)
        return [item for item in self._items if item.should_show(role, keys)]

    def primary_items(self, role: Role, available_capability_keys: Iterable[str]) -> List[NavigationItem]:
        return [
            item for item in self.visible_items(role, available_capability_keys)
            if item.key not in SECONDARY_ITEM_KEYS
        ]

    def secondary_items(self, role: Role, available_capability_keys: Iterable[str]) -> List[NavigationItem]:
        return [
            item for item in self.visible_items(role, available_capability_keys)
            if item.key in SECONDARY_ITEM_KEYS
        ]

    def defect_user_items(self) -> List[NavigationItem]:
        return self.visible_items(Role.defect_user, {"defects"})

    def find_item(self, key: str) -> Optional[NavigationItem]:
        for item in self._items:
            if item.key == key:
                return item
        return None

    def item_for_route(self, route: str) -> Optional[NavigationItem]:
        """Navigation entry whose route is `route` or a parent of it."""
        for item in self._items:
            if route == item.route or route.startswith(item.route + "/"):
                return item
        return None


def _as_key_set(keys: Iterable[str]) -> AbstractSet[str]:
    if isinstance(keys, (set, frozenset)):
        return keys
    return frozenset(keys or ())
