# dashboard_client/access.py

from typing import Optional

from core.authorizer import Authorizer


# ============================================================
# Dashboard route → required (resource, action)
# ============================================================
# None means "any signed-in user"; ADMIN_ONLY means the coarse admin flag.
ADMIN_ONLY = "admin"

ROUTE_REQUIREMENTS = {
    "/dashboard": ("dashboard", "access"),
    "/admin": ADMIN_ONLY,
    "/admin/users": ("users", "manage"),
    "/admin/roles": ("roles", "manage"),
    "/admin/permissions": ("permissions", "manage"),
    "/members": ("members", "manage"),
    "/bank-accounts": ("bank_accounts", "manage"),
    "/account-types": ("account_types", "manage"),
    "/accounts": ("accounts", "manage"),
    "/reports": ("reports", "view"),
    "/transactions": ("transactions", "create"),
    "/profile": None,
}


def can_view_route(profile: Optional[dict], path: str) -> bool:
    """
    Advisory UX gate: whether the dashboard should render `path`.
    The server's role gate stays the enforcement boundary.
    """
    authorizer = Authorizer.from_profile(profile)
    if not profile or not authorizer.is_active:
        return False

    requirement = ROUTE_REQUIREMENTS.get(path.rstrip("/") or "/")
    if requirement is None:
        return True
    if authorizer.is_admin:
        return True
    if requirement == ADMIN_ONLY:
        return False

    return authorizer.has_capability(*requirement)


# ============================================================
# Per-user personalization lists (stored on the user row)
# ============================================================
# These only choose what to show. They grant nothing on the server.

def has_menu_access(profile: Optional[dict], menu: str) -> bool:
    return menu in ((profile or {}).get("menu_access") or [])


def has_sub_menu_access(profile: Optional[dict], menu: str, item: str) -> bool:
    sub_menus = (profile or {}).get("sub_menu_access") or {}
    return item in (sub_menus.get(menu) or [])


def has_component_access(profile: Optional[dict], component: str) -> bool:
    return component in ((profile or {}).get("component_access") or [])
