# models/user.py

from typing import Dict, List, Optional
from pydantic import BaseModel, EmailStr, Field


# ===============================================================
# DASHBOARD USER MODELS (auth user + public.users profile row)
# ===============================================================

class UserCreate(BaseModel):
    """
    Used when an admin creates a dashboard user.
    menu/sub-menu/component lists personalize the dashboard only.
    """
    email: EmailStr
    password: str = Field(..., min_length=1)
    full_name: str = Field(..., min_length=1)
    role_ids: List[str] = []
    menu_access: List[str] = []
    sub_menu_access: Dict[str, List[str]] = {}
    component_access: List[str] = []
    needs_password_reset: bool = True


class UserUpdate(BaseModel):
    """Partial update (admin only). role_ids replaces all assignments."""
    full_name: Optional[str] = None
    role_ids: Optional[List[str]] = None
    menu_access: Optional[List[str]] = None
    sub_menu_access: Optional[Dict[str, List[str]]] = None
    component_access: Optional[List[str]] = None
    is_active: Optional[bool] = None
    needs_password_reset: Optional[bool] = None
