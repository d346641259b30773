# routers/admin_users.py

from typing import List

from fastapi import APIRouter, Depends

from dependencies.auth import CurrentUser, get_current_user, requires_role
from core.errors import (
    NO_DATA_FOUND,
    NotFound,
    ValidationFailed,
    extract_supabase_error,
    handle_supabase_error,
    supabase_error_code,
)
from core.password_policy import validate_password
from core.permissions import ADMIN_ONLY, MANAGE
from core.supabase_client import get_supabase_client
from core.supabase_helpers import delete_row, fetch_one_or_404, insert_row, update_row
from core.utils import partial_update
from core.logging_config import logger
from models.user import UserCreate, UserUpdate

router = APIRouter(
    prefix="/admin-users",
    tags=["Admin: Users"],
    dependencies=[Depends(requires_role(ADMIN_ONLY, ("users", MANAGE)))],
)

TABLE = "users"
SELECT = "*, user_roles(role_id, roles(id, name, description))"

# Supabase has no "disable" flag; a long ban stands in for deactivation
DEACTIVATED_BAN = "876000h"
REACTIVATED_BAN = "none"


# -----------------------------------------------------
# Helpers
# -----------------------------------------------------
def shape_user(row: dict) -> dict:
    user = dict(row)
    links = user.pop("user_roles", None) or []
    roles = [link["roles"] for link in links if link and link.get("roles")]
    user["roles"] = roles
    user["role_ids"] = [r["id"] for r in roles]
    return user


def replace_user_roles(client, user_id: str, role_ids: List[str]):
    """All-or-nothing swap of the user's role links (replace_user_roles in the database)."""
    params = {"p_user_id": user_id, "p_role_ids": list(dict.fromkeys(role_ids))}
    try:
        client.rpc("replace_user_roles", params).execute()
    except Exception as e:
        if supabase_error_code(e) == NO_DATA_FOUND:
            raise NotFound("User not found")
        raise handle_supabase_error(e, "Failed to assign user roles")


def set_auth_user_active(client, user_id: str, is_active: bool):
    ban = REACTIVATED_BAN if is_active else DEACTIVATED_BAN
    try:
        client.auth.admin.update_user_by_id(user_id, {"ban_duration": ban})
    except Exception as e:
        raise handle_supabase_error(e, "Failed to change user status")


# -----------------------------------------------------
# LIST USERS
# -----------------------------------------------------
@router.get("", summary="Admin: List dashboard users")
def list_users():
    client = get_supabase_client()
    result = (
        client.table(TABLE)
        .select(SELECT)
        .order("created_at", desc=True)
        .execute()
    )
    return {"users": [shape_user(u) for u in result.data or []]}


@router.get("/{user_id}", summary="Admin: Get a dashboard user")
def get_user(user_id: str):
    client = get_supabase_client()
    return {"user": shape_user(fetch_one_or_404(client, TABLE, SELECT, user_id, "User"))}


# -----------------------------------------------------
# CREATE USER
# -----------------------------------------------------
@router.post("", status_code=201, summary="Admin: Create dashboard user")
def create_user(payload: UserCreate):
    policy = validate_password(payload.password)
    if not policy["is_valid"]:
        raise ValidationFailed(policy["message"])

    client = get_supabase_client()
    email = payload.email.strip().lower()

    try:
        auth_resp = client.auth.admin.create_user(
            {
                "email": email,
                "password": payload.password,
                "email_confirm": True,
                "user_metadata": {"full_name": payload.full_name},
            }
        )
    except Exception as e:
        raise handle_supabase_error(e, "Failed to create auth user")

    auth_user = auth_resp.user
    profile = {
        "id": auth_user.id,
        "email": email,
        "full_name": payload.full_name.strip(),
        "menu_access": payload.menu_access,
        "sub_menu_access": payload.sub_menu_access,
        "component_access": payload.component_access,
        "needs_password_reset": payload.needs_password_reset,
        "is_active": True,
    }

    try:
        insert_row(client, TABLE, profile, "Failed to create user profile")
        if payload.role_ids:
            replace_user_roles(client, auth_user.id, payload.role_ids)
    except Exception:
        # Don't leave an auth user without a profile row behind
        try:
            client.auth.admin.delete_user(auth_user.id)
        except Exception as cleanup_err:
            logger.error(
                f"Orphaned auth user {auth_user.id}: {extract_supabase_error(cleanup_err)}"
            )
        raise

    logger.info(f"User created: {email}")
    return {"user": shape_user(fetch_one_or_404(client, TABLE, SELECT, auth_user.id, "User"))}


# -----------------------------------------------------
# UPDATE USER
# -----------------------------------------------------
@router.put("/{user_id}", summary="Admin: Update dashboard user")
def update_user(user_id: str, payload: UserUpdate):
    updates = partial_update(
        payload,
        non_nullable=(
            "full_name", "role_ids", "menu_access", "sub_menu_access",
            "component_access", "is_active", "needs_password_reset",
        ),
    )
    client = get_supabase_client()
    role_ids = updates.pop("role_ids", None)

    fetch_one_or_404(client, TABLE, "id", user_id, "User")

    # The gate reads the auth ban, so it changes before the profile row does
    if "is_active" in updates:
        set_auth_user_active(client, user_id, updates["is_active"])

    if updates:
        update_row(client, TABLE, user_id, updates, "Failed to update user", "User")

    if role_ids is not None:
        replace_user_roles(client, user_id, role_ids)

    return {"user": shape_user(fetch_one_or_404(client, TABLE, SELECT, user_id, "User"))}


# -----------------------------------------------------
# DELETE USER
# -----------------------------------------------------
@router.delete("/{user_id}", summary="Admin: Delete dashboard user")
def delete_user(user_id: str, current_user: CurrentUser = Depends(get_current_user)):
    if user_id == current_user.id:
        raise ValidationFailed("You cannot delete your own account")

    client = get_supabase_client()
    delete_row(client, TABLE, user_id, "Failed to delete user", "User")

    try:
        client.auth.admin.delete_user(user_id)
    except Exception as e:
        raise handle_supabase_error(e, "Failed to delete auth user")

    logger.info(f"User deleted: {user_id}")
    return {"message": "User deleted successfully"}
