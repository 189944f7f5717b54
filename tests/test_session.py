# tests/test_session.py

"""
Tests for session-scoped navigation state: capability loading, fallbacks,
building switches and logout.
"""

import asyncio

import pytest

from core.capabilities import CapabilityCatalog
from core.errors import CapabilityFetchError
from core.session import NavigationSession
from models.capability import BuildingCapabilitiesResponse
from models.enums import Role


def _response(*keys: str) -> BuildingCapabilitiesResponse:
    return BuildingCapabilitiesResponse.model_validate({
        "enabled": [{"reference": key, "name": key.title()} for key in keys],
    })


def _keys(items):
    return [item.key for item in items]


@pytest.mark.asyncio
async def test_load_applies_capabilities(counting_fetcher):
    catalog = CapabilityCatalog(fetcher=counting_fetcher({5: _response("defects", "messaging")}))
    session = NavigationSession(Role.resident, catalog, current_building_id=5)

    assert session.available_capability_keys == frozenset()
    assert await session.load_capabilities() is True

    assert session.available_capability_keys == frozenset({"defects", "messaging"})
    assert session.using_fallback_capabilities is False
    assert _keys(session.visible_items) == ["dashboard", "defects", "messaging", "settings"]


@pytest.mark.asyncio
async def test_keys_always_follow_applied_response(counting_fetcher):
    fetcher = counting_fetcher({5: _response("defects")})
    catalog = CapabilityCatalog(fetcher=fetcher)
    session = NavigationSession(Role.resident, catalog, current_building_id=5)
    await session.load_capabilities()

    fetcher.responses[5] = _response("defects", "documents")
    await session.load_capabilities(force_refresh=True)

    assert session.available_capability_keys == session.capabilities.enabled_keys
    assert session.available_capability_keys == frozenset({"defects", "documents"})


@pytest.mark.asyncio
async def test_failed_fetch_falls_back_to_role_defaults(counting_fetcher):
    fetcher = counting_fetcher(error=CapabilityFetchError("offline"))
    catalog = CapabilityCatalog(fetcher=fetcher)
    session = NavigationSession(Role.staff, catalog, current_building_id=5)

    assert await session.load_capabilities() is True

    assert session.using_fallback_capabilities is True
    assert session.available_capability_keys == frozenset({"defects", "documents", "messaging"})
    assert catalog.cached(5) is None


@pytest.mark.asyncio
async def test_no_building_uses_fallback(counting_fetcher):
    fetcher = counting_fetcher()
    session = NavigationSession(Role.defect_user, CapabilityCatalog(fetcher=fetcher))

    await session.load_capabilities()

    assert fetcher.calls == []
    assert session.available_capability_keys == frozenset({"defects"})
    assert session.current_route == "/defects"


@pytest.mark.asyncio
async def test_result_after_close_is_dropped():
    release = asyncio.Event()

    async def slow_fetcher(building_id: int):
        await release.wait()
        return _response("defects")

    session = NavigationSession(Role.resident, CapabilityCatalog(fetcher=slow_fetcher), current_building_id=5)

    load = asyncio.ensure_future(session.load_capabilities())
    await asyncio.sleep(0)
    session.close()
    release.set()

    assert await load is False
    assert session.capabilities is None
    assert session.is_closed


@pytest.mark.asyncio
async def test_result_for_previous_building_is_dropped():
    releases = {5: asyncio.Event(), 7: asyncio.Event()}

    async def slow_fetcher(building_id: int):
        await releases[building_id].wait()
        return _response("defects") if building_id == 5 else _response("messaging")

    session = NavigationSession(
        Role.admin,
        CapabilityCatalog(fetcher=slow_fetcher),
        current_building_id=5,
        available_building_ids=[5, 7],
    )

    first_load = asyncio.ensure_future(session.load_capabilities())
    await asyncio.sleep(0)
    switch = asyncio.ensure_future(session.switch_building(7))
    await asyncio.sleep(0)

    releases[5].set()
    assert await first_load is False
    assert session.capabilities is None

    releases[7].set()
    assert await switch is True
    assert session.current_building_id == 7
    assert session.available_capability_keys == frozenset({"messaging"})


@pytest.mark.asyncio
async def test_navigation_redirects_when_not_allowed(counting_fetcher):
    catalog = CapabilityCatalog(fetcher=counting_fetcher({5: _response("defects", "messaging")}))
    session = NavigationSession(Role.resident, catalog, current_building_id=5)
    await session.load_capabilities()

    assert session.navigate("/calendar") == "/dashboard"
    assert session.current_route == "/dashboard"
    assert session.navigate("/messaging") == "/messaging"
    assert session.can_enter("/documents") is False


@pytest.mark.asyncio
async def test_current_route_rechecked_after_capabilities_change(counting_fetcher):
    fetcher = counting_fetcher({5: _response("messaging"), 7: _response("defects")})
    session = NavigationSession(
        Role.building_manager,
        CapabilityCatalog(fetcher=fetcher),
        current_building_id=5,
    )
    await session.load_capabilities()
    session.navigate("/messaging/compose")

    await session.switch_building(7)

    assert session.current_route == "/dashboard"


@pytest.mark.asyncio
async def test_switch_building_refused_for_single_building_roles(counting_fetcher):
    fetcher = counting_fetcher({5: _response("defects"), 7: _response("messaging")})
    session = NavigationSession(Role.resident, CapabilityCatalog(fetcher=fetcher), current_building_id=5)
    await session.load_capabilities()

    assert await session.switch_building(7) is False
    assert session.current_building_id == 5
    assert fetcher.count(7) == 0


@pytest.mark.asyncio
async def test_first_building_selection_open_to_all_roles(counting_fetcher):
    fetcher = counting_fetcher({5: _response("defects")})
    session = NavigationSession(Role.resident, CapabilityCatalog(fetcher=fetcher))

    assert await session.switch_building(5) is True
    assert session.available_capability_keys == frozenset({"defects"})


@pytest.mark.asyncio
async def test_switch_building_outside_available_list(counting_fetcher):
    fetcher = counting_fetcher({5: _response("defects"), 9: _response("defects")})
    session = NavigationSession(
        Role.admin,
        CapabilityCatalog(fetcher=fetcher),
        current_building_id=5,
        available_building_ids=[5, 7],
    )

    assert await session.switch_building(9) is False
    assert await session.switch_building(5) is True
    assert fetcher.count(9) == 0


@pytest.mark.asyncio
async def test_closed_session_ignores_events(counting_fetcher):
    fetcher = counting_fetcher({5: _response("defects")})
    session = NavigationSession(Role.admin, CapabilityCatalog(fetcher=fetcher), current_building_id=5)
    session.close()

    assert await session.load_capabilities() is False
    assert await session.switch_building(7) is False
    assert fetcher.calls == []


@pytest.mark.asyncio
async def test_set_role_rechecks_route(counting_fetcher):
    catalog = CapabilityCatalog(fetcher=counting_fetcher({5: _response("defects", "documents")}))
    session = NavigationSession(Role.resident, catalog, current_building_id=5)
    await session.load_capabilities()
    session.navigate("/documents")

    session.set_role(Role.defect_user)

    assert session.current_route == "/defects"


@pytest.mark.asyncio
async def test_labels_icons_and_snapshot(counting_fetcher, capability_response):
    catalog = CapabilityCatalog(fetcher=counting_fetcher({5: capability_response}))
    session = NavigationSession(Role.resident, catalog, current_building_id=5, available_building_ids=[5])
    await session.load_capabilities()

    assert session.capability_label("messaging") == "Messages"
    assert session.capability_icon("clipsal_wiser") == "thermostat"
    assert session.capability_icon("intercom") == "record_voice_over"

    state = session.snapshot()
    assert state.current_building_id == 5
    assert state.available_capability_keys == ["clipsal_wiser", "defects", "messaging"]
    assert [item.key for item in state.visible_items] == _keys(session.visible_items)
