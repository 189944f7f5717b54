# tests/test_roles.py

"""
Tests for role predicates, default capabilities and role lookup at login.
"""

import pytest

from core.roles import (
    can_access_capability,
    can_access_multiple_buildings,
    can_manage_buildings,
    default_capabilities,
    is_admin,
    is_defect_only,
    role_from_key,
    role_from_user_data,
)
from models.auth import BuildingRead, UserRead
from models.enums import Role


def test_role_predicates():
    assert is_admin(Role.admin)
    assert not is_admin(Role.building_manager)
    assert can_manage_buildings(Role.building_manager)
    assert not can_manage_buildings(Role.resident)
    assert can_access_multiple_buildings(Role.admin)
    assert not can_access_multiple_buildings(Role.staff)
    assert is_defect_only(Role.defect_user)


def test_default_capabilities():
    assert default_capabilities(Role.defect_user) == ["defects"]
    assert "intercom" not in default_capabilities(Role.staff)
    assert can_access_capability(Role.resident, "calendar_booking")
    assert not can_access_capability(Role.staff, "calendar_booking")


def test_default_capabilities_returns_a_copy():
    keys = default_capabilities(Role.resident)
    keys.append("pool")

    assert "pool" not in default_capabilities(Role.resident)


@pytest.mark.parametrize(
    "key,expected",
    [
        ("defect_user", Role.defect_user),
        ("Building-Manager", Role.building_manager),
        (" building manager ", Role.building_manager),
        ("ADMIN", Role.admin),
        ("owner", None),
        ("", None),
        (None, None),
    ],
)
def test_role_from_key(key, expected):
    assert role_from_key(key) == expected


def test_role_from_user_data_prefers_building_role():
    user = UserRead(id=1, email="a@example.com", is_admin=True, role="staff")
    building = BuildingRead(id=5, name="Harbour View", role="defect_user")

    assert role_from_user_data(user, building) == Role.defect_user
    assert role_from_user_data(user) == Role.staff


def test_role_from_user_data_with_plain_dicts():
    assert role_from_user_data({"is_admin": True}) == Role.admin
    assert role_from_user_data({"role": "unknown"}, {"role": None}) == Role.resident
    assert role_from_user_data({}) == Role.resident


def test_role_display_names():
    assert Role.building_manager.display_name == "Building Manager"
    assert str(Role.defect_user) == "defect_user"
