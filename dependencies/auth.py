from typing import Optional, List, Tuple
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel

from core.authorizer import Authorizer
from core.config import settings
from core.errors import Forbidden, Unauthenticated
from core.logging_config import logger
from core.permissions import fetch_role_grants
from core.supabase_client import get_supabase_client


# Missing header is answered with our own 401, not FastAPI's default
bearer_scheme = HTTPBearer(auto_error=False)


# ============================================================
# Current User Model (authenticated principal)
# ============================================================
class CurrentUser(BaseModel):
    id: str
    email: str
    is_active: bool = True


# ============================================================
# AUTH DECODING (Supabase: validates JWT)
# ============================================================
def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> CurrentUser:

    if not credentials or not credentials.credentials:
        logger.warning("Missing authorization header")
        raise Unauthenticated("Missing authorization header")

    token = credentials.credentials
    client = get_supabase_client()

    # ---------------------------------------------------------
    # Validate JWT via Supabase GoTrue
    # ---------------------------------------------------------
    try:
        auth_resp = client.auth.get_user(token)
    except Exception as e:
        logger.warning(f"Authentication failed: {type(e).__name__}")
        raise Unauthenticated()

    auth_user = getattr(auth_resp, "user", None)
    if not auth_user or not auth_user.email:
        logger.warning("Authentication failed: no user for token")
        raise Unauthenticated()

    # Deactivated accounts are banned at the auth layer
    return CurrentUser(
        id=auth_user.id,
        email=auth_user.email,
        is_active=not getattr(auth_user, "banned_until", None),
    )


# ============================================================
# AUTHORIZER (role names + flattened capabilities)
# ============================================================
def get_authorizer(current_user: CurrentUser = Depends(get_current_user)) -> Authorizer:
    try:
        roles, permissions = fetch_role_grants(current_user.id)
    except Exception as e:
        logger.error(f"Permission check failed for {current_user.id}: {e}")
        raise Forbidden("Unable to verify permissions")

    return Authorizer.from_grants(roles, permissions, is_active=current_user.is_active)


def _role_label(allowed_roles: List[str]) -> str:
    return " or ".join(r.capitalize() for r in allowed_roles)


# ============================================================
# ROLE GATE (+ optional capability enforcement)
# ============================================================
def requires_role(allowed_roles: List[str], capability: Optional[Tuple[str, str]] = None):
    """
    Usage:
        router = APIRouter(dependencies=[Depends(requires_role(["admin"], ("members", "manage")))])

    The role-name check always runs. The capability is only enforced
    server-side when settings.ENFORCE_CAPABILITIES is on.
    """
    label = _role_label(allowed_roles)

    def checker(authorizer: Authorizer = Depends(get_authorizer)) -> Authorizer:
        if not authorizer.is_active:
            raise Forbidden("Account is inactive")

        if not authorizer.has_any_role(allowed_roles):
            logger.warning(f"Role check failed: {authorizer!r} needs {allowed_roles}")
            raise Forbidden(f"Insufficient permissions. {label} role required.")

        if capability and settings.ENFORCE_CAPABILITIES and not authorizer.has_capability(*capability):
            resource, action = capability
            logger.warning(f"Capability check failed: {authorizer!r} needs {resource}:{action}")
            raise Forbidden(f"Insufficient permissions: '{resource}:{action}' required")

        return authorizer

    return checker
