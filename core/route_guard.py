# core/route_guard.py

from typing import FrozenSet, Iterable, Mapping, Optional, Sequence, Tuple

from models.enums import Role


# ============================================================
# ROUTE → REQUIRED CAPABILITIES
# Matched by path prefix on segment boundaries; first match wins.
# Routes not listed here are open to every role.
# ============================================================
ROUTE_CAPABILITY_RULES: Tuple[Tuple[str, FrozenSet[str]], ...] = (
    ("/dashboard", frozenset()),
    ("/defects", frozenset({"defects"})),
    ("/documents", frozenset({"documents"})),
    ("/messaging", frozenset({"messaging"})),
    ("/intercom", frozenset({"intercom"})),
    ("/calendar", frozenset({"calendar_booking"})),
    ("/settings", frozenset()),
    ("/contact", frozenset()),
)

# Roles confined to a fixed set of route prefixes, on top of the capability rule
ROLE_ROUTE_ALLOW_LIST: Mapping[Role, Tuple[str, ...]] = {
    Role.defect_user: ("/defects", "/dashboard", "/settings"),
}

DEFAULT_LANDING_ROUTE = "/dashboard"
ROLE_LANDING_ROUTES: Mapping[Role, str] = {
    Role.defect_user: "/defects",
}


def normalize_route(route: Optional[str]) -> str:
    """Path only: no query, no fragment, leading slash, no trailing slash."""
    path = (route or "").split("#", 1)[0].split("?", 1)[0].strip()
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def route_matches(route: str, prefix: str) -> bool:
    return route == prefix or route.startswith(prefix.rstrip("/") + "/")


class RouteAccessGuard:
    """
    Stateless per-navigation access decision.

    A route may be entered when its mapped capabilities are all available
    and, for roles with an allow-list, it falls under one of the allowed
    prefixes. Callers redirect to `redirect_target(role)` otherwise.
    """

    def __init__(
        self,
        rules: Sequence[Tuple[str, FrozenSet[str]]] = ROUTE_CAPABILITY_RULES,
        role_allow_list: Mapping[Role, Tuple[str, ...]] = ROLE_ROUTE_ALLOW_LIST,
        landing_routes: Mapping[Role, str] = ROLE_LANDING_ROUTES,
    ):
        self._rules = tuple(rules)
        self._role_allow_list = role_allow_list
        self._landing_routes = landing_routes

    def required_capabilities(self, route: str) -> Optional[FrozenSet[str]]:
        """Capabilities mapped to `route`, or None when the route is unmapped."""
        path = normalize_route(route)
        for prefix, capabilities in self._rules:
            if route_matches(path, prefix):
                return capabilities
        return None

    def can_enter(self, route: str, role: Role, available_capability_keys: Iterable[str]) -> bool:
        path = normalize_route(route)

        required = self.required_capabilities(path)
        if required and not required <= frozenset(available_capability_keys or ()):
            return False

        allowed_prefixes = self._role_allow_list.get(role)
        if allowed_prefixes is not None:
            return any(route_matches(path, prefix) for prefix in allowed_prefixes)

        return True

    def redirect_target(self, role: Role) -> str:
        return self._landing_routes.get(role, DEFAULT_LANDING_ROUTE)

    def resolve(self, route: str, role: Role, available_capability_keys: Iterable[str]) -> str:
        """The route actually entered: `route` if allowed, else the role's landing route."""
        keys = frozenset(available_capability_keys or ())
        if self.can_enter(route, role, keys):
            return route
        return self.redirect_target(role)
