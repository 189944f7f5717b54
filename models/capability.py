# models/capability.py

from typing import Any, Dict, FrozenSet, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.enums import CapabilityType, Platform


# Available (not enabled) capabilities always render after enabled ones
AVAILABLE_SORT_ORDER = 999

EXTERNAL_CAPABILITY_TYPES = frozenset({
    CapabilityType.external_app,
    CapabilityType.web_link,
    CapabilityType.hybrid,
})


# -------------------------------------------------
# Icon descriptor sent by the API
# -------------------------------------------------
class IconSpec(BaseModel):
    """
    Mirrors the API icon object:
    {"name": "message", "color": "#2196F3", "backgroundColor": "#E3F2FD"}
    """
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    color: Optional[str] = None
    background_color: Optional[str] = Field(None, alias="backgroundColor")


# -------------------------------------------------
# Shared fields
# -------------------------------------------------
class Capability(BaseModel):
    """
    A backend-controlled feature of a building (defects, messaging, ...).
    Identity is `key` (the API's `reference`), unique per building.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    key: str = Field(..., alias="reference")
    display_name: str = Field(..., alias="name")
    description: Optional[str] = None
    type: CapabilityType = CapabilityType.internal
    category: Optional[str] = None
    icon: Optional[IconSpec] = None
    external_targets: Optional[Dict[str, str]] = Field(None, alias="apps")
    settings: Optional[Dict[str, Any]] = None
    sort_order: int = Field(AVAILABLE_SORT_ORDER, alias="sortOrder")
    dynamic_data: Optional[Dict[str, Any]] = Field(None, alias="data")

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type(cls, value):
        if isinstance(value, CapabilityType):
            return value
        normalized = str(value or "").strip().lower()
        if normalized in CapabilityType.list():
            return normalized
        return CapabilityType.internal

    @field_validator("external_targets", mode="before")
    @classmethod
    def keep_url_targets(cls, value):
        if not isinstance(value, dict):
            return None
        return {str(platform): url for platform, url in value.items() if isinstance(url, str) and url}

    @field_validator("dynamic_data", mode="before")
    @classmethod
    def empty_list_is_no_data(cls, value):
        # Laravel serializes an empty object as []
        if isinstance(value, dict):
            return value
        return None

    @property
    def launches_externally(self) -> bool:
        return self.type in EXTERNAL_CAPABILITY_TYPES

    def launch_url(self, platform: Union[Platform, str, None] = None) -> Optional[str]:
        """URL for the given platform, falling back to the web target."""
        targets = self.external_targets or {}
        url = None
        if platform is not None:
            url = targets.get(str(platform))
        return url or targets.get(Platform.web.value) or None


class EnabledCapability(Capability):
    """Capability currently enabled for the building."""

    sort_order: int = Field(0, alias="sortOrder")
    link_id: Optional[int] = Field(None, alias="linkId")


class AvailableCapability(Capability):
    """Capability that can be enabled but isn't currently active."""

    sort_order: int = Field(AVAILABLE_SORT_ORDER, alias="sortOrder")


# -------------------------------------------------
# Unified tile for UI rendering
# -------------------------------------------------
class CapabilityTile(BaseModel):
    capability: Capability
    is_enabled: bool
    sort_order: int
    link_id: Optional[int] = None
    data: Optional[Dict[str, Any]] = None

    @classmethod
    def from_enabled(cls, enabled: EnabledCapability) -> "CapabilityTile":
        return cls(
            capability=enabled,
            is_enabled=True,
            sort_order=enabled.sort_order,
            link_id=enabled.link_id,
            data=enabled.dynamic_data,
        )

    @classmethod
    def from_available(cls, available: AvailableCapability) -> "CapabilityTile":
        return cls(
            capability=available,
            is_enabled=False,
            sort_order=AVAILABLE_SORT_ORDER,
        )

    def badge_count(self, key: str) -> Optional[int]:
        """Badge count from dynamic data (e.g. messagesCount, openCount)."""
        value = (self.data or {}).get(key)
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value

    @property
    def is_external_app(self) -> bool:
        return self.capability.type == CapabilityType.external_app


# -------------------------------------------------
# GET /buildings/{id}/capabilities
# -------------------------------------------------
class BuildingCapabilitiesResponse(BaseModel):
    enabled: List[EnabledCapability] = []
    available: List[AvailableCapability] = []

    @field_validator("enabled", "available", mode="before")
    @classmethod
    def null_is_empty(cls, value):
        return value or []

    @property
    def enabled_keys(self) -> FrozenSet[str]:
        return frozenset(capability.key for capability in self.enabled)

    def get_enabled(self, key: str) -> Optional[EnabledCapability]:
        for capability in self.enabled:
            if capability.key == key:
                return capability
        return None

    def enabled_sorted(self) -> List[CapabilityTile]:
        tiles = [CapabilityTile.from_enabled(e) for e in self.enabled]
        return sorted(tiles, key=lambda tile: tile.sort_order)

    def all_sorted(self) -> List[CapabilityTile]:
        tiles = [CapabilityTile.from_enabled(e) for e in self.enabled]
        tiles.extend(CapabilityTile.from_available(a) for a in self.available)
        return sorted(tiles, key=lambda tile: tile.sort_order)
