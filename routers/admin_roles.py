# routers/admin_roles.py

from typing import List

from fastapi import APIRouter, Depends

from dependencies.auth import requires_role
from core.errors import NO_DATA_FOUND, NotFound, extract_supabase_error, handle_supabase_error, supabase_error_code
from core.permissions import ADMIN_ONLY, MANAGE
from core.supabase_client import get_supabase_client
from core.supabase_helpers import delete_row, fetch_one_or_404, insert_row, update_row
from core.utils import sanitize, partial_update
from core.logging_config import logger
from models.role import RoleCreate, RoleUpdate

router = APIRouter(
    prefix="/admin-roles",
    tags=["Admin: Roles"],
    dependencies=[Depends(requires_role(ADMIN_ONLY, ("roles", MANAGE)))],
)

TABLE = "roles"
SELECT = "*, role_permissions(permissions(id, resource, action, description))"


# ============================================================
# Helpers
# ============================================================
def shape_role(row: dict) -> dict:
    """Replace the role_permissions join rows with a flat permissions list."""
    role = dict(row)
    grants = role.pop("role_permissions", None) or []
    role["permissions"] = [g["permissions"] for g in grants if g and g.get("permissions")]
    return role


def replace_role_permissions(client, role_id: str, permission_ids: List[str]):
    """
    Swap the role's grants for the given set in one transaction.
    A rejected id leaves the previous grants in place.
    """
    params = {"p_role_id": role_id, "p_permission_ids": list(dict.fromkeys(permission_ids))}
    try:
        client.rpc("replace_role_permissions", params).execute()
    except Exception as e:
        if supabase_error_code(e) == NO_DATA_FOUND:
            raise NotFound("Role not found")
        raise handle_supabase_error(e, "Failed to assign role permissions")


# ============================================================
# LIST ROLES
# ============================================================
@router.get("", summary="List roles with their permissions")
def list_roles():
    client = get_supabase_client()
    result = (
        client.table(TABLE)
        .select(SELECT)
        .order("name")
        .execute()
    )
    return {"roles": [shape_role(r) for r in result.data or []]}


@router.get("/{role_id}", summary="Get a role")
def get_role(role_id: str):
    client = get_supabase_client()
    return {"role": shape_role(fetch_one_or_404(client, TABLE, SELECT, role_id, "Role"))}


# ============================================================
# CREATE ROLE
# ============================================================
@router.post("", status_code=201, summary="Create a role")
def create_role(payload: RoleCreate):
    client = get_supabase_client()
    data = sanitize(payload.model_dump(exclude={"permission_ids"}, exclude_none=True))

    created = insert_row(client, TABLE, data, "Failed to create role")
    if payload.permission_ids:
        try:
            replace_role_permissions(client, created["id"], payload.permission_ids)
        except Exception:
            # Don't keep a role whose grants were rejected
            try:
                client.table(TABLE).delete().eq("id", created["id"]).execute()
            except Exception as cleanup_err:
                logger.error(f"Orphaned role {created['id']}: {extract_supabase_error(cleanup_err)}")
            raise

    logger.info(f"Role created: {created['name']}")
    return {"role": shape_role(fetch_one_or_404(client, TABLE, SELECT, created["id"], "Role"))}


# ============================================================
# UPDATE ROLE
# ============================================================
@router.put("/{role_id}", summary="Update a role")
def update_role(role_id: str, payload: RoleUpdate):
    updates = partial_update(payload, non_nullable=("name", "permission_ids"))
    client = get_supabase_client()
    permission_ids = updates.pop("permission_ids", None)

    if updates:
        update_row(client, TABLE, role_id, updates, "Failed to update role", "Role")
    else:
        fetch_one_or_404(client, TABLE, "id", role_id, "Role")

    if permission_ids is not None:
        replace_role_permissions(client, role_id, permission_ids)

    return {"role": shape_role(fetch_one_or_404(client, TABLE, SELECT, role_id, "Role"))}


# ============================================================
# DELETE ROLE (user and permission links cascade)
# ============================================================
@router.delete("/{role_id}", summary="Delete a role")
def delete_role(role_id: str):
    client = get_supabase_client()
    delete_row(client, TABLE, role_id, "Failed to delete role", "Role")

    logger.info(f"Role deleted: {role_id}")
    return {"message": "Role deleted successfully"}
