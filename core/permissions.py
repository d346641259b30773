# core/permissions.py

from typing import List, Tuple

from core.errors import ProfileNotFound
from core.supabase_client import get_supabase_client


# ============================================
# NESTED SELECTS (role → permission grants)
# ============================================
ROLE_GRANTS_SELECT = (
    "roles("
    "id, name, description, "
    "role_permissions(permissions(id, resource, action, description))"
    ")"
)

PROFILE_SELECT = (
    "id, email, full_name, is_active, needs_password_reset, "
    "menu_access, sub_menu_access, component_access, created_at, updated_at, "
    f"user_roles(role_id, {ROLE_GRANTS_SELECT})"
)

# Role gate per resource router
ADMIN_ONLY = ["admin"]
ADMIN_OR_STAFF = ["admin", "staff"]

# Capability each dashboard section (and, if enforced, each router) requires
MANAGE = "manage"


# -----------------------------------------------------
# Flatten user_roles → (roles, permissions)
# -----------------------------------------------------
def flatten_role_grants(user_roles: list) -> Tuple[List[dict], List[dict]]:
    """
    Two dedup passes over the nested join rows:
      • roles by id
      • permissions by (resource, action); first occurrence wins, later
        descriptions for the same pair are dropped
    """
    roles: List[dict] = []
    permissions: List[dict] = []
    seen_roles = set()
    seen_capabilities = set()

    for link in user_roles or []:
        role = (link or {}).get("roles")
        if not role:
            continue

        if role["id"] not in seen_roles:
            seen_roles.add(role["id"])
            roles.append({
                "id": role["id"],
                "name": role.get("name"),
                "description": role.get("description"),
            })

        for grant in role.get("role_permissions") or []:
            perm = (grant or {}).get("permissions")
            if not perm:
                continue

            key = (perm["resource"], perm["action"])
            if key in seen_capabilities:
                continue

            seen_capabilities.add(key)
            permissions.append({
                "id": perm.get("id"),
                "resource": perm["resource"],
                "action": perm["action"],
                "description": perm.get("description"),
            })

    return roles, permissions


# -----------------------------------------------------
# Role grants for the authorization gate
# -----------------------------------------------------
def fetch_role_grants(user_id: str) -> Tuple[List[dict], List[dict]]:
    client = get_supabase_client()
    result = (
        client.table("user_roles")
        .select(ROLE_GRANTS_SELECT)
        .eq("user_id", user_id)
        .execute()
    )
    return flatten_role_grants(result.data)


# -----------------------------------------------------
# Full profile (user row + roles + permissions)
# -----------------------------------------------------
def fetch_user_profile(user_id: str) -> dict:
    """
    Resolved on every call, never cached.
    A principal without a `users` row is a hard failure.
    """
    client = get_supabase_client()
    rows = (
        client.table("users")
        .select(PROFILE_SELECT)
        .eq("id", user_id)
        .limit(1)
        .execute()
    ).data

    if not rows:
        raise ProfileNotFound()

    profile = dict(rows[0])
    roles, permissions = flatten_role_grants(profile.pop("user_roles", None))

    profile["roles"] = roles
    profile["role_ids"] = [r["id"] for r in roles]
    profile["permissions"] = permissions
    return profile
