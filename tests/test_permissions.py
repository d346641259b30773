# tests/test_permissions.py

"""
Tests for role → permission flattening and the profile endpoint.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch

from core.errors import ProfileNotFound
from core.permissions import fetch_user_profile, flatten_role_grants
from supabase_mocks import make_query, make_supabase


def grant(pid, resource, action, description=None):
    return {"permissions": {"id": pid, "resource": resource, "action": action, "description": description}}


def link(role_id, name, *grants):
    return {
        "role_id": role_id,
        "roles": {
            "id": role_id,
            "name": name,
            "description": f"{name} role",
            "role_permissions": list(grants),
        },
    }


def test_flatten_removes_duplicate_capabilities_across_roles():
    user_roles = [
        link("r1", "admin", grant("p1", "members", "manage", "first"), grant("p2", "accounts", "manage")),
        link("r2", "staff", grant("p3", "members", "manage", "second"), grant("p4", "reports", "view")),
    ]

    roles, permissions = flatten_role_grants(user_roles)

    assert [r["name"] for r in roles] == ["admin", "staff"]
    pairs = [(p["resource"], p["action"]) for p in permissions]
    assert len(pairs) == len(set(pairs))
    assert set(pairs) == {("members", "manage"), ("accounts", "manage"), ("reports", "view")}

    members = next(p for p in permissions if p["resource"] == "members")
    assert members["description"] == "first"


def test_flatten_deduplicates_roles_by_id():
    user_roles = [
        link("r1", "admin", grant("p1", "members", "manage")),
        link("r1", "admin", grant("p1", "members", "manage")),
    ]

    roles, permissions = flatten_role_grants(user_roles)

    assert len(roles) == 1
    assert len(permissions) == 1
    assert set(roles[0]) == {"id", "name", "description"}


def test_flatten_skips_missing_joins():
    roles, permissions = flatten_role_grants([{"role_id": "r1", "roles": None}, None])
    assert roles == []
    assert permissions == []

    assert flatten_role_grants(None) == ([], [])


def test_fetch_user_profile_builds_roles_and_permissions():
    row = {
        "id": "u1",
        "email": "u1@example.org",
        "full_name": "User One",
        "is_active": True,
        "menu_access": ["members"],
        "sub_menu_access": {"members": ["list"]},
        "component_access": [],
        "user_roles": [link("r1", "staff", grant("p1", "members", "manage"))],
    }
    users = make_query([row])

    with patch("core.permissions.get_supabase_client", return_value=make_supabase(users=users)):
        profile = fetch_user_profile("u1")

    assert "user_roles" not in profile
    assert profile["role_ids"] == ["r1"]
    assert profile["permissions"][0]["resource"] == "members"
    assert profile["menu_access"] == ["members"]
    users.eq.assert_called_with("id", "u1")


def test_fetch_user_profile_missing_row_is_hard_failure():
    users = make_query([])

    with patch("core.permissions.get_supabase_client", return_value=make_supabase(users=users)):
        with pytest.raises(ProfileNotFound):
            fetch_user_profile("ghost")


def test_profile_endpoint_returns_404_without_profile_row(client: TestClient, as_admin):
    users = make_query([])

    with patch("core.permissions.get_supabase_client", return_value=make_supabase(users=users)):
        response = client.get("/auth/profile")

    assert response.status_code == 404
    assert response.json() == {"error": "User profile not found"}


def test_profile_endpoint_success(client: TestClient, as_admin):
    users = make_query([{
        "id": as_admin.id,
        "email": as_admin.email,
        "user_roles": [link("r1", "admin", grant("p1", "users", "manage"))],
    }])

    with patch("core.permissions.get_supabase_client", return_value=make_supabase(users=users)):
        response = client.get("/auth/profile")

    assert response.status_code == 200
    profile = response.json()["profile"]
    assert profile["roles"][0]["name"] == "admin"
    assert profile["permissions"] == [
        {"id": "p1", "resource": "users", "action": "manage", "description": None}
    ]
