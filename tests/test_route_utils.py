# tests/test_route_utils.py

"""
Tests for route naming, breadcrumbs and public-route helpers.
"""

from core.route_utils import (
    build_breadcrumbs,
    extract_id_from_location,
    requires_auth,
    route_name_from_location,
)
from core.utils import parse_capability_keys


def test_route_names():
    assert route_name_from_location("/defects/new") == "defects-new"
    assert route_name_from_location("/calendar/book/") == "calendar-book"
    assert route_name_from_location("/defects/42") is None


def test_public_routes_skip_auth():
    assert requires_auth("/login") is False
    assert requires_auth("/register?ref=mail") is False
    assert requires_auth("/dashboard") is True


def test_extract_id_from_location():
    assert extract_id_from_location("/defects/42", "/defects") == "42"
    assert extract_id_from_location("/defects/42/edit", "/defects/") == "42"
    assert extract_id_from_location("/defects", "/defects") is None
    assert extract_id_from_location("/documents/3", "/defects") is None


def test_breadcrumbs_skip_numeric_segments():
    crumbs = build_breadcrumbs("/defects/42/edit")

    assert crumbs == [
        {"label": "Defects", "path": "/defects"},
        {"label": "Edit", "path": "/defects/42/edit"},
    ]


def test_breadcrumbs_known_and_unknown_labels():
    crumbs = build_breadcrumbs("/admin/system-status")
    assert [c["label"] for c in crumbs] == ["Admin", "System Status"]

    crumbs = build_breadcrumbs("/buildings/floor-plans")
    assert crumbs[-1] == {"label": "Floor Plans", "path": "/buildings/floor-plans"}


def test_breadcrumbs_for_root():
    assert build_breadcrumbs("/") == []


def test_parse_capability_keys():
    assert parse_capability_keys(["defects,messaging", " documents ", "defects", ""]) == [
        "defects",
        "messaging",
        "documents",
    ]
    assert parse_capability_keys(None) == []
