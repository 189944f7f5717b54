# core/capabilities.py

"""
Per-building capability catalog.

`CapabilityCatalog.fetch(building_id)` returns the building's
BuildingCapabilitiesResponse, or None when it cannot be loaded. Results are
cached per building id, and concurrent fetches for the same id share a
single backend request.
"""

import asyncio
from typing import Awaitable, Callable, Dict, List, Optional

from core.cache import SimpleCache
from core.errors import extract_api_error
from core.logging_config import logger
from core.roles import default_capabilities
from models.capability import BuildingCapabilitiesResponse, CapabilityTile, EnabledCapability
from models.enums import Role


CapabilityFetcher = Callable[[int], Awaitable[BuildingCapabilitiesResponse]]

# Human labels used when the API has not supplied capability metadata
FALLBACK_CAPABILITY_LABELS = {
    "defects": "Defects",
    "messaging": "Messaging",
    "documents": "Documents",
    "calendar": "Calendar",
    "calendar_booking": "Bookings",
    "intercom": "Intercom",
    "2n_intercom": "2N Intercom",
    "clipsal_wiser": "Clipsal Wiser",
}


def format_capability_key(key: str) -> str:
    """"clipsal_wiser" → "Clipsal Wiser"."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in key.replace("_", " ").split(" ") if word)


def fallback_label(key: str) -> str:
    return FALLBACK_CAPABILITY_LABELS.get(key) or format_capability_key(key)


class CapabilityCatalog:
    """
    Capability lists keyed by building id.

    - a cached entry is returned without a request
    - a fetch for an id with a request already pending joins that request
    - a failed request yields None and is not cached
    """

    def __init__(self, fetcher: CapabilityFetcher, cache: Optional[SimpleCache] = None):
        self._fetcher = fetcher
        self._cache = cache if cache is not None else SimpleCache(name="capabilities")
        self._in_flight: Dict[int, asyncio.Future] = {}

    @staticmethod
    def _cache_key(building_id: int) -> str:
        return f"capabilities:{building_id}"

    # -------------------------------------------------
    # Fetch
    # -------------------------------------------------
    async def fetch(self, building_id: int, force_refresh: bool = False) -> Optional[BuildingCapabilitiesResponse]:
        if not force_refresh:
            cached = self._cache.get(self._cache_key(building_id))
            if cached is not None:
                logger.debug(f"Capability cache hit: building {building_id}")
                return cached

        pending = self._in_flight.get(building_id)
        if pending is None:
            pending = asyncio.ensure_future(self._load(building_id))
            self._in_flight[building_id] = pending
            pending.add_done_callback(lambda done: self._settle(building_id, done))
        else:
            logger.debug(f"Joining pending capability fetch: building {building_id}")

        # A cancelled waiter must not cancel the request other callers share
        return await asyncio.shield(pending)

    def _settle(self, building_id: int, done: asyncio.Future):
        if self._in_flight.get(building_id) is done:
            del self._in_flight[building_id]

    async def _load(self, building_id: int) -> Optional[BuildingCapabilitiesResponse]:
        try:
            response = await self._fetcher(building_id)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning(
                f"Capability fetch failed for building {building_id}: {extract_api_error(e)}"
            )
            return None

        if not isinstance(response, BuildingCapabilitiesResponse):
            logger.warning(f"Capability fetch for building {building_id} returned {type(response).__name__}")
            return None

        self._cache.set(self._cache_key(building_id), response)
        logger.debug(
            f"Capability cache miss, stored: building {building_id} "
            f"({len(response.enabled)} enabled, {len(response.available)} available)"
        )
        return response

    def is_pending(self, building_id: int) -> bool:
        return building_id in self._in_flight

    # -------------------------------------------------
    # Cache access
    # -------------------------------------------------
    def cached(self, building_id: int) -> Optional[BuildingCapabilitiesResponse]:
        return self._cache.get(self._cache_key(building_id))

    def invalidate(self, building_id: int):
        self._cache.delete(self._cache_key(building_id))

    def clear(self):
        """Drop every cached building. Pending requests still complete."""
        self._cache.clear()

    def cached_building_ids(self) -> List[int]:
        return sorted(int(str(key).split(":", 1)[1]) for key in self._cache.keys())

    # -------------------------------------------------
    # Fallbacks
    # -------------------------------------------------
    @staticmethod
    def fallback_response(role: Role) -> BuildingCapabilitiesResponse:
        """Enabled list made of the role's default capabilities, labelled locally."""
        return BuildingCapabilitiesResponse(
            enabled=[
                EnabledCapability(key=key, display_name=fallback_label(key), sort_order=index)
                for index, key in enumerate(default_capabilities(role))
            ],
            available=[],
        )

    @staticmethod
    def capability_label(key: str, response: Optional[BuildingCapabilitiesResponse] = None) -> str:
        if response is not None:
            capability = response.get_enabled(key)
            if capability is not None and capability.display_name:
                return capability.display_name
        return fallback_label(key)

    @staticmethod
    def sorted_tiles(response: Optional[BuildingCapabilitiesResponse], include_available: bool = False) -> List[CapabilityTile]:
        if response is None:
            return []
        if include_available:
            return response.all_sorted()
        return response.enabled_sorted()
