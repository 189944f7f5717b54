# core/session.py

"""
Session-scoped navigation state.

A NavigationSession is created at login, follows building switches and
capability loads, and is closed at logout. The capability key set is always
derived from the applied capability response, never stored on its own.
"""

from typing import FrozenSet, Iterable, List, Optional

from core.capabilities import CapabilityCatalog
from core.icons import IconResolver
from core.logging_config import logger
from core.navigation import NavigationResolver
from core.roles import can_access_multiple_buildings
from core.route_guard import RouteAccessGuard
from models.capability import BuildingCapabilitiesResponse
from models.enums import Role
from models.navigation import NavigationItem, NavigationState


class NavigationSession:
    def __init__(
        self,
        role: Role,
        catalog: CapabilityCatalog,
        resolver: Optional[NavigationResolver] = None,
        guard: Optional[RouteAccessGuard] = None,
        icons: Optional[IconResolver] = None,
        current_building_id: Optional[int] = None,
        available_building_ids: Iterable[int] = (),
    ):
        self._role = role
        self.catalog = catalog
        self.resolver = resolver or NavigationResolver()
        self.guard = guard or RouteAccessGuard()
        self.icons = icons or IconResolver()

        self.current_building_id = current_building_id
        self.available_building_ids: List[int] = list(available_building_ids)
        self.current_route = self.guard.redirect_target(role)

        self._capabilities: Optional[BuildingCapabilitiesResponse] = None
        self._used_fallback = False
        # Bumped on every building change; a fetch only applies if it still matches
        self._generation = 0
        self._closed = False

    # -------------------------------------------------
    # Derived state
    # -------------------------------------------------
    @property
    def role(self) -> Role:
        return self._role

    @property
    def capabilities(self) -> Optional[BuildingCapabilitiesResponse]:
        return self._capabilities

    @property
    def available_capability_keys(self) -> FrozenSet[str]:
        if self._capabilities is None:
            return frozenset()
        return self._capabilities.enabled_keys

    @property
    def using_fallback_capabilities(self) -> bool:
        return self._used_fallback

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def visible_items(self) -> List[NavigationItem]:
        return self.resolver.visible_items(self._role, self.available_capability_keys)

    @property
    def primary_items(self) -> List[NavigationItem]:
        return self.resolver.primary_items(self._role, self.available_capability_keys)

    @property
    def secondary_items(self) -> List[NavigationItem]:
        return self.resolver.secondary_items(self._role, self.available_capability_keys)

    def capability_label(self, key: str) -> str:
        return self.catalog.capability_label(key, self._capabilities)

    def capability_icon(self, key: str) -> str:
        """Icon from the API's metadata when present, else resolved from the key."""
        if self._capabilities is not None:
            capability = self._capabilities.get_enabled(key)
            if capability is not None and capability.icon is not None:
                return self.icons.resolve_from_api_icon_spec(capability.icon)
        return self.icons.resolve(key)

    def can_enter(self, route: str) -> bool:
        return self.guard.can_enter(route, self._role, self.available_capability_keys)

    # -------------------------------------------------
    # Capability loading
    # -------------------------------------------------
    async def load_capabilities(self, force_refresh: bool = False) -> bool:
        """
        Fetch and apply capabilities for the current building.

        Returns False when the result arrived for a session that has since
        been closed or moved to another building.
        """
        if self._closed:
            return False

        building_id = self.current_building_id
        generation = self._generation

        response = None
        if building_id is not None:
            response = await self.catalog.fetch(building_id, force_refresh=force_refresh)

        if self._closed or generation != self._generation:
            logger.debug(f"Dropping stale capability result for building {building_id}")
            return False

        if response is None:
            logger.info(f"Using default capabilities for role {self._role} (building {building_id})")
            self._apply(self.catalog.fallback_response(self._role), fallback=True)
        else:
            self._apply(response, fallback=False)
        return True

    def _apply(self, response: BuildingCapabilitiesResponse, fallback: bool):
        self._capabilities = response
        self._used_fallback = fallback
        self._recheck_current_route()

    def _recheck_current_route(self):
        if not self.can_enter(self.current_route):
            redirect = self.guard.redirect_target(self._role)
            logger.debug(f"Route {self.current_route} no longer accessible, redirecting to {redirect}")
            self.current_route = redirect

    # -------------------------------------------------
    # Session events
    # -------------------------------------------------
    async def switch_building(self, building_id: int) -> bool:
        if self._closed:
            return False
        if building_id == self.current_building_id:
            return True
        # First selection after login is open to every role
        if self.current_building_id is not None and not can_access_multiple_buildings(self._role):
            logger.warning(f"Role {self._role} cannot switch buildings")
            return False
        if self.available_building_ids and building_id not in self.available_building_ids:
            logger.warning(f"Building {building_id} is not available to this session")
            return False

        self.current_building_id = building_id
        self._generation += 1
        self._capabilities = None
        self._used_fallback = False
        return await self.load_capabilities()

    def navigate(self, route: str) -> str:
        """Record and return the route actually entered."""
        target = self.guard.resolve(route, self._role, self.available_capability_keys)
        if target != route:
            logger.debug(f"Access to {route} denied for {self._role}, redirecting to {target}")
        self.current_route = target
        return target

    def set_role(self, role: Role):
        self._role = role
        self._recheck_current_route()

    def close(self):
        """Logout. Pending capability loads will not touch this session."""
        self._closed = True
        self._generation += 1

    def snapshot(self) -> NavigationState:
        return NavigationState(
            role=self._role,
            available_capability_keys=sorted(self.available_capability_keys),
            capabilities=self._capabilities,
            current_route=self.current_route,
            current_building_id=self.current_building_id,
            available_building_ids=self.available_building_ids,
            visible_items=self.visible_items,
        )
