# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import json
import pytest
import httpx
from fastapi.testclient import TestClient
from typing import Generator

from main import create_app
from core.api_client import BuildingApiClient
from core.icons import IconResolver
from models.capability import BuildingCapabilitiesResponse


BACKEND_URL = "http://backend.test/api/v1"


@pytest.fixture
def capability_payload():
    """Capability list as the backend sends it."""
    return {
        "enabled": [
            {
                "id": 1,
                "reference": "messaging",
                "name": "Messages",
                "type": "internal",
                "icon": {"name": "message", "color": "#2196F3", "backgroundColor": "#E3F2FD"},
                "sortOrder": 2,
                "linkId": 11,
                "data": {"messagesCount": 3},
            },
            {
                "id": 2,
                "reference": "defects",
                "name": "Defects",
                "type": "internal",
                "icon": {"name": "build"},
                "sortOrder": 1,
                "linkId": 12,
                "data": [],
            },
            {
                "id": 3,
                "reference": "clipsal_wiser",
                "name": "Clipsal Wiser",
                "type": "external_app",
                "icon": {"name": "thermostat_rounded"},
                "apps": {"ios": "wiser://open", "web": "https://wiser.example.com"},
                "sortOrder": 3,
            },
        ],
        "available": [
            {
                "id": 4,
                "reference": "documents",
                "name": "Documents",
                "type": "internal",
            },
        ],
    }


@pytest.fixture
def capability_response(capability_payload) -> BuildingCapabilitiesResponse:
    return BuildingCapabilitiesResponse.model_validate(capability_payload)


class CountingFetcher:
    """Fake capability fetcher recording how often each building was requested."""

    def __init__(self, responses=None, error=None):
        self.responses = responses or {}
        self.error = error
        self.calls = []

    async def __call__(self, building_id: int) -> BuildingCapabilitiesResponse:
        self.calls.append(building_id)
        if self.error is not None:
            raise self.error
        return self.responses[building_id]

    def count(self, building_id: int) -> int:
        return self.calls.count(building_id)


@pytest.fixture
def counting_fetcher():
    return CountingFetcher


@pytest.fixture
def icon_resolver():
    """Resolver with its own empty cache."""
    return IconResolver()


@pytest.fixture
def backend_handler(capability_payload):
    """
    Default fake backend: one building (5) with capabilities, a login for
    resident@example.com / secret, everything else 404.
    """
    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if request.method == "GET" and path == "/api/v1/buildings/5/capabilities":
            return httpx.Response(200, json={"data": capability_payload})
        if request.method == "POST" and path == "/api/v1/auth/login":
            body = json.loads(request.content)
            if body.get("email") != "resident@example.com" or body.get("password") != "secret":
                return httpx.Response(401, json={"message": "Invalid credentials"})
            return httpx.Response(200, json={
                "access_token": "token-123",
                "token_type": "bearer",
                "user": {"id": 7, "email": "resident@example.com", "first_name": "Kai"},
                "buildings": [{"id": 5, "name": "Harbour View", "role": "resident"}],
            })
        return httpx.Response(404, json={"message": "Not found"})

    return handler


@pytest.fixture
def api_client(backend_handler) -> BuildingApiClient:
    return BuildingApiClient(
        base_url=BACKEND_URL,
        token="service-token",
        transport=httpx.MockTransport(backend_handler),
    )


@pytest.fixture(scope="function")
def app(api_client):
    """Create a test FastAPI application backed by the fake backend."""
    return create_app(api_client=api_client)


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client
