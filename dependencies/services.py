# dependencies/services.py

"""
FastAPI dependencies returning the app's shared navigation components.

The components are created once in main.create_app and stored on app.state;
tests swap them through app.dependency_overrides.
"""

from fastapi import Request

from core.api_client import BuildingApiClient
from core.capabilities import CapabilityCatalog
from core.icons import IconResolver
from core.navigation import NavigationResolver
from core.route_guard import RouteAccessGuard


def get_icon_resolver(request: Request) -> IconResolver:
    return request.app.state.icon_resolver


def get_navigation_resolver(request: Request) -> NavigationResolver:
    return request.app.state.navigation_resolver


def get_route_guard(request: Request) -> RouteAccessGuard:
    return request.app.state.route_guard


def get_capability_catalog(request: Request) -> CapabilityCatalog:
    return request.app.state.capability_catalog


def get_api_client(request: Request) -> BuildingApiClient:
    return request.app.state.api_client
