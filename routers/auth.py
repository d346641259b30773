from fastapi import APIRouter, Depends

from core.errors import ValidationFailed, handle_supabase_error
from core.password_policy import validate_password
from core.permissions import fetch_user_profile
from core.supabase_client import get_supabase_client
from core.logging_config import logger
from dependencies.auth import get_current_user, CurrentUser
from models.auth import PasswordValidationRequest, PasswordUpdateRequest


router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
)


# ============================================================
# CURRENT USER PROFILE (roles + flattened permissions)
# ============================================================
@router.get("/profile", summary="Current user profile with roles and permissions")
def read_profile(current_user: CurrentUser = Depends(get_current_user)):
    """
    Resolved on every call. The dashboard decides which sections to show
    from `permissions` and the menu/sub-menu/component lists.
    """
    return {"profile": fetch_user_profile(current_user.id)}


# ============================================================
# PASSWORD POLICY CHECK (no auth; used on the signup/reset forms)
# ============================================================
@router.post("/validate-password", summary="Check a password against the policy")
def check_password(payload: PasswordValidationRequest):
    return validate_password(payload.password)


# ============================================================
# UPDATE OWN PASSWORD
# ============================================================
@router.post("/update-password", summary="Change the current user's password")
def update_password(
    payload: PasswordUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
):
    policy = validate_password(payload.new_password)
    if not policy["is_valid"]:
        raise ValidationFailed(policy["message"])

    client = get_supabase_client()

    try:
        client.auth.admin.update_user_by_id(
            current_user.id,
            {"password": payload.new_password},
        )
    except Exception as e:
        raise handle_supabase_error(e, "Failed to update password")

    user = {"id": current_user.id, "email": current_user.email}
    if payload.clear_needs_password_reset:
        try:
            result = (
                client.table("users")
                .update({"needs_password_reset": False})
                .eq("id", current_user.id)
                .execute()
            )
        except Exception as e:
            raise handle_supabase_error(e, "Failed to clear password reset flag")
        if result.data:
            user = result.data[0]

    logger.info(f"Password updated for {current_user.email}")
    return {"message": "Password updated successfully", "user": user}
