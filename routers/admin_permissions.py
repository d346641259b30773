# routers/admin_permissions.py

from typing import Optional

from fastapi import APIRouter, Depends

from dependencies.auth import requires_role
from core.errors import ValidationFailed
from core.permissions import ADMIN_ONLY, MANAGE
from core.supabase_client import get_supabase_client
from core.supabase_helpers import delete_row, fetch_one_or_404, insert_row, update_row
from core.utils import sanitize, partial_update
from core.logging_config import logger
from models.permission import PermissionCreate, PermissionUpdate

router = APIRouter(
    prefix="/admin-permissions",
    tags=["Admin: Permissions"],
    dependencies=[Depends(requires_role(ADMIN_ONLY, ("permissions", MANAGE)))],
)

TABLE = "permissions"


# ============================================================
# Helper: (resource, action) must stay unique
# ============================================================
def ensure_unique_capability(client, resource: str, action: str, exclude_id: Optional[str] = None):
    query = (
        client.table(TABLE)
        .select("id")
        .eq("resource", resource)
        .eq("action", action)
    )
    if exclude_id:
        query = query.neq("id", exclude_id)

    if query.limit(1).execute().data:
        raise ValidationFailed(f"Permission '{resource}:{action}' already exists")


# ============================================================
# LIST PERMISSIONS
# ============================================================
@router.get("", summary="List permissions")
def list_permissions():
    client = get_supabase_client()
    result = (
        client.table(TABLE)
        .select("*")
        .order("resource")
        .order("action")
        .execute()
    )
    return {"permissions": result.data or []}


@router.get("/{permission_id}", summary="Get a permission")
def get_permission(permission_id: str):
    client = get_supabase_client()
    return {"permission": fetch_one_or_404(client, TABLE, "*", permission_id, "Permission")}


# ============================================================
# CREATE PERMISSION
# ============================================================
@router.post("", status_code=201, summary="Create a permission")
def create_permission(payload: PermissionCreate):
    client = get_supabase_client()
    data = sanitize(payload.model_dump(exclude_none=True))

    ensure_unique_capability(client, data["resource"], data["action"])

    created = insert_row(client, TABLE, data, "Failed to create permission")
    logger.info(f"Permission created: {created['resource']}:{created['action']}")
    return {"permission": created}


# ============================================================
# UPDATE PERMISSION
# ============================================================
@router.put("/{permission_id}", summary="Update a permission")
def update_permission(permission_id: str, payload: PermissionUpdate):
    updates = partial_update(payload, non_nullable=("resource", "action"))
    client = get_supabase_client()

    if "resource" in updates or "action" in updates:
        current = fetch_one_or_404(client, TABLE, "*", permission_id, "Permission")
        ensure_unique_capability(
            client,
            updates.get("resource", current["resource"]),
            updates.get("action", current["action"]),
            exclude_id=permission_id,
        )

    updated = update_row(
        client, TABLE, permission_id, updates,
        "Failed to update permission", "Permission",
    )
    return {"permission": updated}


# ============================================================
# DELETE PERMISSION (role grants cascade)
# ============================================================
@router.delete("/{permission_id}", summary="Delete a permission")
def delete_permission(permission_id: str):
    client = get_supabase_client()
    delete_row(client, TABLE, permission_id, "Failed to delete permission", "Permission")

    logger.info(f"Permission deleted: {permission_id}")
    return {"message": "Permission deleted successfully"}
