# core/icons.py

"""
Icon resolution for capability and navigation entries.

The API names icons loosely ("messaging", "person_add", "lock_open_rounded").
`IconResolver.resolve` maps any such name to a Material icon id from a fixed
table and never fails: unknown names resolve to FALLBACK_ICON. Results,
including misses, are cached on the resolver's IconCache so each distinct
name is searched at most once.
"""

import re
from types import MappingProxyType
from threading import Lock
from typing import Any, Dict, Iterable, List, Mapping, NamedTuple, Optional, Set, Tuple, Union

from core.logging_config import logger
from models.capability import IconSpec


FALLBACK_ICON = "extension"

# Names the API uses that are not icon names themselves
ICON_ALIASES: Mapping[str, str] = MappingProxyType({
    # Communication & Social
    "messaging": "message",
    "chat": "chat_bubble",
    "forum": "forum",
    "announcement": "announcement",
    "notifications": "notifications",

    # Building & Maintenance
    "defects": "build",
    "maintenance": "handyman",
    "construction": "construction",
    "engineering": "engineering",
    "repair": "build_circle",

    # Documents & Files
    "documents": "description",
    "file_copy": "file_copy",
    "upload_file": "upload_file",
    "download": "download",

    # Calendar & Booking
    "calendar": "calendar_today",
    "schedule": "schedule",
    "book_online": "book_online",
    "booking": "event_available",

    # Intercom
    "voip": "dialer_sip",
    "intercom": "record_voice_over",
    "2n_intercom": "video_call",

    # Smart Home & IoT
    "smart_home": "home_work",
    "wiser": "thermostat",
    "clipsal_wiser": "thermostat",
    "mitsubishi_aircon": "ac_unit",
    "mitsubishi_air_con": "ac_unit",

    # Security & Access
    "key": "vpn_key",
    "2n_access": "lock_open",

    # External Apps & Integration
    "open_in_new": "open_in_new",
    "integration_instructions": "integration_instructions",

    # Utilities
    "local_gas_station": "local_gas_station",
    "network_check": "network_check",

    # Business & Management
    "admin_panel_settings": "admin_panel_settings",

    # Navigation
    "expand_more": "expand_more",
    "expand_less": "expand_less",
})

# Candidate name → Material icon id
MATERIAL_ICONS: Mapping[str, str] = MappingProxyType({
    # Icons seen in API responses
    "message": "message",
    "build": "build",
    "event": "event",
    "phone": "phone",
    "description": "description",
    "person_add": "person_add",
    "lock_open": "lock_open",
    "ac_unit": "ac_unit",
    "electric_bolt": "electric_bolt",
    "lightbulb": "lightbulb",

    # Common Material icons
    "access_alarm": "access_alarm",
    "access_time": "access_time",
    "accessibility": "accessibility",
    "accessible": "accessible",
    "account": "account_circle",
    "account_box": "account_box",
    "account_circle": "account_circle",
    "add": "add",
    "add_circle": "add_circle",
    "add_circle_outline": "add_circle_outline",
    "admin_panel_settings": "admin_panel_settings",
    "alarm": "alarm",
    "announcement": "announcement",
    "apps": "apps",
    "arrow_back": "arrow_back",
    "arrow_forward": "arrow_forward",
    "arrow_upward": "arrow_upward",
    "arrow_downward": "arrow_downward",
    "badge": "badge",
    "book_online": "book_online",
    "business": "business",
    "calendar": "calendar_today",
    "calendar_today": "calendar_today",
    "call": "call",
    "camera_alt": "camera_alt",
    "cancel": "cancel",
    "chat": "chat",
    "chat_bubble": "chat_bubble",
    "check": "check",
    "check_circle": "check_circle",
    "close": "close",
    "cloud": "cloud",
    "construction": "construction",
    "dashboard": "dashboard",
    "delete": "delete",
    "dialer_sip": "dialer_sip",
    "download": "download",
    "edit": "edit",
    "email": "email",
    "engineering": "engineering",
    "error": "error",
    "event_available": "event_available",
    "expand_less": "expand_less",
    "expand_more": "expand_more",
    "extension": "extension",
    "favorite": "favorite",
    "file_copy": "file_copy",
    "fingerprint": "fingerprint",
    "folder": "folder",
    "forum": "forum",
    "group": "group",
    "handyman": "handyman",
    "help": "help",
    "home": "home",
    "home_work": "home_work",
    "info": "info",
    "info_outline": "info_outline",
    "integration_instructions": "integration_instructions",
    "launch": "launch",
    "link": "link",
    "local_gas_station": "local_gas_station",
    "lock": "lock",
    "logout": "logout",
    "menu": "menu",
    "more_vert": "more_vert",
    "network_check": "network_check",
    "notifications": "notifications",
    "open_in_new": "open_in_new",
    "people": "people",
    "person": "person",
    "power": "power",
    "record_voice_over": "record_voice_over",
    "save": "save",
    "schedule": "schedule",
    "search": "search",
    "security": "security",
    "sensors": "sensors",
    "settings": "settings",
    "thermostat": "thermostat",
    "upload": "upload",
    "upload_file": "upload_file",
    "video_call": "video_call",
    "vpn_key": "vpn_key",
    "warning": "warning",
    "water_drop": "water_drop",
    "wifi": "wifi",

    # Building-services vocabulary
    "airplane_ticket": "airplane_ticket",
    "airport_shuttle": "airport_shuttle",
    "analytics": "analytics",
    "apartment": "apartment",
    "api": "api",
    "architecture": "architecture",
    "autorenew": "autorenew",
    "backup": "backup",
    "battery_full": "battery_full",
    "bluetooth": "bluetooth",
    "brightness_auto": "brightness_auto",
    "build_circle": "build_circle",
    "category": "category",
    "cell_tower": "cell_tower",
    "central_heating": "thermostat",
    "charging_station": "ev_station",
    "circle_notifications": "circle_notifications",
    "cleaning_services": "cleaning_services",
    "climate": "thermostat",
    "computer_icon": "computer",
    "contact_support": "contact_support",
    "device_hub": "device_hub",
    "devices": "devices",
    "doorbell": "doorbell",
    "electrical": "electrical_services",
    "elevator": "elevator",
    "energy": "bolt",
    "facilities": "business",
    "fitness": "fitness_center",
    "garage": "garage",
    "health": "health_and_safety",
    "heating": "thermostat",
    "hvac": "air",
    "iot": "sensors",
    "key": "key",
    "lights": "lightbulb_outline",
    "location": "location_on",
    "maintenance": "engineering",
    "monitoring": "monitor",
    "motion": "sensors",
    "parking": "local_parking",
    "pool": "pool",
    "recycling": "recycling",
    "roofing": "roofing",
    "safety": "safety_check",
    "smart_home": "home_work",
    "solar": "solar_power",
    "sprinkler": "water_drop",
    "utilities": "construction",
    "ventilation": "air",
    "water": "water",
    "windows": "window",

    # Outlined navigation icons
    "report_problem": "report_problem",
    "message_outlined": "message_outlined",
    "doorbell_outlined": "doorbell_outlined",
    "dashboard_outlined": "dashboard_outlined",
    "folder_outlined": "folder_outlined",
    "settings_outlined": "settings_outlined",
    "calendar_today_outlined": "calendar_today_outlined",
    "report_problem_outlined": "report_problem_outlined",
})

WARM_UP_ICONS = (
    "message", "build", "event", "phone", "description",
    "person_add", "lock_open", "ac_unit", "electric_bolt", "lightbulb",
)

STYLE_SUFFIXES = ("_icon", "_outlined", "_filled", "_rounded", "_sharp")
APPENDED_SUFFIXES = ("_outlined", "_rounded", "_sharp")

_HEX_COLOR = re.compile(r"^[0-9a-fA-F]{6}$")


class RGBColor(NamedTuple):
    red: int
    green: int
    blue: int

    @property
    def hex(self) -> str:
        return f"#{self.red:02X}{self.green:02X}{self.blue:02X}"


def normalize_icon_name(name: Any) -> str:
    if not isinstance(name, str):
        return ""
    return name.lower().strip()


def icon_name_variants(name: str) -> List[str]:
    """
    Candidate table keys for a normalized icon name, most specific first.

    name, name without style suffixes, that stem with each style suffix,
    name without underscores, then first and last token.
    """
    variants = [name]

    stem = name
    for suffix in STYLE_SUFFIXES:
        stem = stem.replace(suffix, "")
    variants.append(stem)
    variants.extend(f"{stem}{suffix}" for suffix in APPENDED_SUFFIXES)

    variants.append(name.replace("_", ""))

    if "_" in name:
        parts = name.split("_")
        variants.append(parts[0])
        variants.append(parts[-1])

    # Remove duplicates, keep order
    return [v for v in dict.fromkeys(variants) if v]


def parse_hex_color(value: Any) -> Optional[RGBColor]:
    """Parse "#RRGGBB" (the "#" is optional). Returns None for anything else."""
    if not isinstance(value, str):
        return None
    cleaned = value.strip().lstrip("#")
    if not _HEX_COLOR.match(cleaned):
        return None
    rgb = int(cleaned, 16)
    return RGBColor((rgb >> 16) & 0xFF, (rgb >> 8) & 0xFF, rgb & 0xFF)


class IconCache:
    """
    Positive results and known misses for an IconResolver.

    Thread-safe: sync icon endpoints run in FastAPI's thread pool.
    """

    def __init__(self):
        self.resolved: Dict[str, str] = {}
        self.failed: Set[str] = set()
        self._lock = Lock()

    def get(self, name: str) -> Optional[str]:
        with self._lock:
            return self.resolved.get(name)

    def is_failed(self, name: str) -> bool:
        with self._lock:
            return name in self.failed

    def store(self, name: str, icon: str):
        with self._lock:
            self.resolved[name] = icon

    def store_miss(self, name: str, fallback: str):
        with self._lock:
            self.failed.add(name)
            self.resolved[name] = fallback

    def names(self) -> List[str]:
        with self._lock:
            return list(self.resolved)

    def counts(self) -> Tuple[int, int]:
        """(cached, failed)"""
        with self._lock:
            return len(self.resolved), len(self.failed)

    def clear(self):
        with self._lock:
            self.resolved.clear()
            self.failed.clear()

    def __len__(self):
        with self._lock:
            return len(self.resolved)


IconSource = Union[IconSpec, Mapping[str, Any], None]


class IconResolver:
    """
    Total mapping from API icon names to icon ids.

    Resolution order:
      1. cached result
      2. known miss → fallback, no retry
      3. alias table
      4. name variants probed against MATERIAL_ICONS
      5. cache the hit, or record the miss and cache the fallback
    """

    def __init__(
        self,
        cache: Optional[IconCache] = None,
        fallback: str = FALLBACK_ICON,
        icons: Mapping[str, str] = MATERIAL_ICONS,
        aliases: Mapping[str, str] = ICON_ALIASES,
    ):
        self.cache = cache if cache is not None else IconCache()
        self.fallback = fallback
        self._icons = icons
        self._aliases = aliases

    # -------------------------------------------------
    # Name → icon id
    # -------------------------------------------------
    def resolve(self, name: Optional[str]) -> str:
        clean_name = normalize_icon_name(name)
        if not clean_name:
            return self.fallback

        cached = self.cache.get(clean_name)
        if cached is not None:
            return cached

        if self.cache.is_failed(clean_name):
            return self.fallback

        icon = self._lookup(clean_name)
        if icon is not None:
            self.cache.store(clean_name, icon)
            return icon

        logger.debug(f"Icon miss: {clean_name!r} → {self.fallback}")
        self.cache.store_miss(clean_name, self.fallback)
        return self.fallback

    def _lookup(self, clean_name: str) -> Optional[str]:
        target = self._aliases.get(clean_name, clean_name)
        for variant in icon_name_variants(target):
            icon = self._icons.get(variant)
            if icon is not None:
                return icon
        return None

    def has_icon(self, name: Optional[str]) -> bool:
        """True when `name` maps to a real table entry, even one equal to the fallback id."""
        clean_name = normalize_icon_name(name)
        if not clean_name:
            return False
        self.resolve(clean_name)
        return not self.cache.is_failed(clean_name)

    # -------------------------------------------------
    # API icon objects
    # -------------------------------------------------
    @staticmethod
    def _spec_value(spec: IconSource, attribute: str, api_key: str) -> Any:
        if spec is None:
            return None
        if isinstance(spec, IconSpec):
            return getattr(spec, attribute)
        if isinstance(spec, Mapping):
            return spec.get(api_key, spec.get(attribute))
        return None

    def resolve_from_api_icon_spec(self, spec: IconSource) -> str:
        return self.resolve(self._spec_value(spec, "name", "name"))

    def color_from_spec(self, spec: IconSource) -> Optional[RGBColor]:
        return parse_hex_color(self._spec_value(spec, "color", "color"))

    def background_color_from_spec(self, spec: IconSource) -> Optional[RGBColor]:
        return parse_hex_color(self._spec_value(spec, "background_color", "backgroundColor"))

    # -------------------------------------------------
    # Cache management
    # -------------------------------------------------
    def warm_up(self, names: Iterable[str] = WARM_UP_ICONS) -> int:
        """Resolve `names` ahead of first use. Returns how many resolved to a real icon."""
        return sum(1 for name in names if self.has_icon(name))

    def clear_cache(self):
        self.cache.clear()

    def cached_icon_names(self) -> List[str]:
        return self.cache.names()

    def cache_stats(self) -> Dict[str, Any]:
        cached, failed = self.cache.counts()
        return {
            "cached_icons": cached,
            "failed_lookups": failed,
            "aliases": len(self._aliases),
            "available_icons": len(self._icons),
            "cache_hit_rate": 0.0 if cached == 0 else (cached - failed) / cached,
        }
