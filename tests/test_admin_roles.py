# tests/test_admin_roles.py

"""
Tests for role and permission administration.
"""

from fastapi.testclient import TestClient
from unittest.mock import patch
from postgrest.exceptions import APIError

from supabase_mocks import make_query, make_supabase

PERMISSION = {"id": "p1", "resource": "members", "action": "manage", "description": None}


# ============================================================
# Roles
# ============================================================
def test_list_roles_flattens_permissions(client: TestClient, as_admin):
    roles = make_query([
        {"id": "r1", "name": "staff", "role_permissions": [{"permissions": PERMISSION}, {"permissions": None}]},
    ])
    db = make_supabase(roles=roles)

    with patch("routers.admin_roles.get_supabase_client", return_value=db):
        response = client.get("/admin-roles")

    assert response.status_code == 200
    assert response.json() == {"roles": [{"id": "r1", "name": "staff", "permissions": [PERMISSION]}]}


def test_create_role_with_permissions(client: TestClient, as_admin):
    roles = make_query([{"id": "r1", "name": "staff"}], [{"id": "r1", "name": "staff",
                                                         "role_permissions": [{"permissions": PERMISSION}]}])
    db = make_supabase(roles=roles)

    with patch("routers.admin_roles.get_supabase_client", return_value=db):
        response = client.post("/admin-roles", json={"name": "staff", "permission_ids": ["p1"]})

    assert response.status_code == 201
    assert response.json()["role"]["permissions"] == [PERMISSION]
    roles.insert.assert_called_once_with({"name": "staff"})
    db.rpc.assert_called_once_with(
        "replace_role_permissions", {"p_role_id": "r1", "p_permission_ids": ["p1"]}
    )


def test_create_role_is_removed_when_grants_are_rejected(client: TestClient, as_admin):
    roles = make_query([{"id": "r1", "name": "staff"}], [{"id": "r1"}])
    db = make_supabase(roles=roles)
    db.rpc.return_value.execute.side_effect = APIError(
        {"message": "insert or update violates foreign key constraint", "code": "23503"}
    )

    with patch("routers.admin_roles.get_supabase_client", return_value=db):
        response = client.post("/admin-roles", json={"name": "staff", "permission_ids": ["bogus"]})

    assert response.status_code == 400
    assert response.json() == {"error": "Failed to assign role permissions: Invalid reference"}
    roles.delete.assert_called_once()
    roles.eq.assert_called_with("id", "r1")


def test_update_role_replaces_permission_set(client: TestClient, as_admin):
    roles = make_query([{"id": "r1"}], [{"id": "r1", "name": "staff", "role_permissions": []}])
    db = make_supabase(roles=roles)

    with patch("routers.admin_roles.get_supabase_client", return_value=db):
        response = client.put("/admin-roles/r1", json={"permission_ids": ["p2", "p3", "p2"]})

    assert response.status_code == 200
    roles.update.assert_not_called()
    db.rpc.assert_called_once_with(
        "replace_role_permissions", {"p_role_id": "r1", "p_permission_ids": ["p2", "p3"]}
    )


def test_rejected_permission_set_keeps_existing_grants(client: TestClient, as_admin):
    """
    The swap runs inside replace_role_permissions, so a bad id rolls the whole
    swap back. The handler never deletes grant rows itself.
    """
    roles = make_query([{"id": "r1"}])
    role_permissions = make_query()
    db = make_supabase(roles=roles, role_permissions=role_permissions)
    db.rpc.return_value.execute.side_effect = APIError(
        {"message": "insert or update violates foreign key constraint", "code": "23503"}
    )

    with patch("routers.admin_roles.get_supabase_client", return_value=db):
        response = client.put("/admin-roles/r1", json={"permission_ids": ["bogus"]})

    assert response.status_code == 400
    assert response.json() == {"error": "Failed to assign role permissions: Invalid reference"}
    role_permissions.delete.assert_not_called()
    role_permissions.insert.assert_not_called()


def test_update_role_clearing_permissions(client: TestClient, as_admin):
    roles = make_query([{"id": "r1"}], [{"id": "r1", "name": "staff", "role_permissions": []}])
    db = make_supabase(roles=roles)

    with patch("routers.admin_roles.get_supabase_client", return_value=db):
        response = client.put("/admin-roles/r1", json={"permission_ids": []})

    assert response.json()["role"]["permissions"] == []
    db.rpc.assert_called_once_with(
        "replace_role_permissions", {"p_role_id": "r1", "p_permission_ids": []}
    )


def test_update_unknown_role_is_404(client: TestClient, as_admin):
    db = make_supabase(roles=make_query([]))

    with patch("routers.admin_roles.get_supabase_client", return_value=db):
        response = client.put("/admin-roles/missing", json={"description": "x"})

    assert response.status_code == 404
    assert response.json() == {"error": "Role not found"}


# ============================================================
# Permissions
# ============================================================
def test_create_duplicate_permission_is_refused(client: TestClient, as_admin):
    permissions = make_query([{"id": "p1"}])
    db = make_supabase(permissions=permissions)

    with patch("routers.admin_permissions.get_supabase_client", return_value=db):
        response = client.post("/admin-permissions", json={"resource": "members", "action": "manage"})

    assert response.status_code == 400
    assert response.json() == {"error": "Permission 'members:manage' already exists"}
    permissions.insert.assert_not_called()


def test_create_permission(client: TestClient, as_admin):
    permissions = make_query([], [PERMISSION])
    db = make_supabase(permissions=permissions)

    with patch("routers.admin_permissions.get_supabase_client", return_value=db):
        response = client.post("/admin-permissions", json={"resource": "members", "action": "manage"})

    assert response.status_code == 201
    assert response.json() == {"permission": PERMISSION}


def test_rename_permission_checks_uniqueness_against_others(client: TestClient, as_admin):
    permissions = make_query([PERMISSION], [], [{**PERMISSION, "action": "view"}])
    db = make_supabase(permissions=permissions)

    with patch("routers.admin_permissions.get_supabase_client", return_value=db):
        response = client.put("/admin-permissions/p1", json={"action": "view"})

    assert response.status_code == 200
    assert response.json()["permission"]["action"] == "view"
    permissions.neq.assert_called_once_with("id", "p1")
    permissions.update.assert_called_once_with({"action": "view"})


def test_description_change_skips_uniqueness_check(client: TestClient, as_admin):
    permissions = make_query([{**PERMISSION, "description": "Manage members"}])
    db = make_supabase(permissions=permissions)

    with patch("routers.admin_permissions.get_supabase_client", return_value=db):
        response = client.put("/admin-permissions/p1", json={"description": "Manage members"})

    assert response.status_code == 200
    permissions.neq.assert_not_called()


def test_list_permissions_sorted(client: TestClient, as_admin):
    permissions = make_query([PERMISSION])
    db = make_supabase(permissions=permissions)

    with patch("routers.admin_permissions.get_supabase_client", return_value=db):
        response = client.get("/admin-permissions")

    assert response.json() == {"permissions": [PERMISSION]}
    assert [c.args for c in permissions.order.call_args_list] == [("resource",), ("action",)]
