# core/api_client.py

"""
Async client for the building-management REST API.

Only the two calls the navigation layer consumes are implemented:
login and the per-building capability list.
"""

from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from core.config import settings
from core.errors import ApiError, AuthError, CapabilityFetchError, extract_api_error
from core.logging_config import logger
from models.auth import LoginResult
from models.capability import BuildingCapabilitiesResponse


class BuildingApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.token = token if token is not None else settings.API_TOKEN
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or settings.API_TIMEOUT_SECONDS,
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            transport=transport,
        )

    def _auth_headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    async def aclose(self):
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    # -------------------------------------------------
    # Transport
    # -------------------------------------------------
    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self._client.request(method, path, headers=self._auth_headers(), **kwargs)
        except httpx.HTTPError as e:
            raise ApiError(f"{method} {path} failed: {e}", original_error=e) from e

        body = None
        if response.content:
            try:
                body = response.json()
            except ValueError:
                body = None

        if response.is_error:
            raise ApiError(
                extract_api_error(body) or f"{method} {path} returned {response.status_code}",
                status_code=response.status_code,
                response_data=body,
            )

        return body

    # -------------------------------------------------
    # POST /auth/login
    # -------------------------------------------------
    async def login(self, email: str, password: str) -> LoginResult:
        try:
            data = await self._request(
                "POST",
                "/auth/login",
                json={"email": email.strip().lower(), "password": password},
            )
        except ApiError as e:
            if e.status_code == 401:
                raise AuthError("Invalid credentials", status_code=401) from e
            if e.status_code == 422:
                raise AuthError(
                    extract_api_error(e.response_data) or "Validation error",
                    status_code=422,
                    response_data=e.response_data,
                ) from e
            # Backend outage, not a credentials problem
            raise

        try:
            result = LoginResult.model_validate(data or {})
        except ValidationError as e:
            raise ApiError("Login failed: malformed response", original_error=e) from e

        logger.info(f"Logged in as user {result.user.id} ({len(result.buildings)} buildings)")
        return result

    # -------------------------------------------------
    # GET /buildings/{id}/capabilities
    # -------------------------------------------------
    async def get_building_capabilities(self, building_id: int) -> BuildingCapabilitiesResponse:
        path = f"/buildings/{building_id}/capabilities"
        try:
            data = await self._request("GET", path)
        except ApiError as e:
            raise CapabilityFetchError(
                e.message,
                status_code=e.status_code,
                response_data=e.response_data,
                original_error=e,
            ) from e

        # Backend wraps payloads in {"data": ...}; accept a bare body too
        payload = data.get("data", data) if isinstance(data, dict) else None
        if not isinstance(payload, dict):
            raise CapabilityFetchError(f"GET {path}: unexpected response body")

        try:
            return BuildingCapabilitiesResponse.model_validate(payload)
        except ValidationError as e:
            raise CapabilityFetchError(f"GET {path}: malformed capability list", original_error=e) from e
