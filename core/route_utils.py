# core/route_utils.py

import re
from typing import Dict, List, Optional

from core.route_guard import normalize_route


ROUTE_NAMES = {
    "/dashboard": "dashboard",
    "/defects": "defects",
    "/defects/new": "defects-new",
    "/documents": "documents",
    "/messaging": "messaging",
    "/messaging/compose": "messaging-compose",
    "/intercom": "intercom",
    "/calendar": "calendar",
    "/calendar/book": "calendar-book",
    "/buildings": "buildings",
    "/buildings/add": "buildings-add",
    "/users": "users",
    "/users/add": "users-add",
    "/settings": "settings",
    "/contact": "contact",
    "/admin/audit-log": "admin-audit-log",
    "/admin/system-status": "admin-system-status",
}

PUBLIC_ROUTES = frozenset({"/login", "/register"})

BREADCRUMB_LABELS = {
    "dashboard": "Dashboard",
    "defects": "Defects",
    "documents": "Documents",
    "messaging": "Messages",
    "intercom": "Intercom",
    "calendar": "Calendar",
    "buildings": "Buildings",
    "users": "Users",
    "settings": "Settings",
    "contact": "Contact",
    "admin": "Admin",
    "new": "New",
    "add": "Add",
    "compose": "Compose",
    "book": "Book",
    "audit-log": "Audit Log",
    "system-status": "System Status",
}

_NUMERIC_SEGMENT = re.compile(r"^\d+$")


def route_name_from_location(location: str) -> Optional[str]:
    """Named route for an exact location, e.g. "/defects/new" → "defects-new"."""
    return ROUTE_NAMES.get(normalize_route(location))


def requires_auth(location: str) -> bool:
    return normalize_route(location) not in PUBLIC_ROUTES


def extract_id_from_location(location: str, base_route: str) -> Optional[str]:
    """"/defects/42" under "/defects" → "42"."""
    path = normalize_route(location)
    base = normalize_route(base_route)
    if not (path == base or path.startswith(base + "/")):
        return None

    parts = path.split("/")
    base_parts = base.split("/")
    if len(parts) > len(base_parts):
        return parts[len(base_parts)]
    return None


def _segment_label(segment: str) -> str:
    label = BREADCRUMB_LABELS.get(segment)
    if label:
        return label
    return " ".join(word[:1].upper() + word[1:] for word in segment.split("-"))


def build_breadcrumbs(location: str) -> List[Dict[str, str]]:
    breadcrumbs = []
    current_path = ""

    for segment in [part for part in normalize_route(location).split("/") if part]:
        current_path += f"/{segment}"

        # Numeric ids don't get their own crumb
        if _NUMERIC_SEGMENT.match(segment):
            continue

        breadcrumbs.append({"label": _segment_label(segment), "path": current_path})

    return breadcrumbs
