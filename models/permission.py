# models/permission.py

from typing import Optional
from pydantic import BaseModel, Field


class PermissionCreate(BaseModel):
    """Atomic capability, unique on (resource, action)."""
    resource: str = Field(..., min_length=1)
    action: str = Field(..., min_length=1)
    description: Optional[str] = None


class PermissionUpdate(BaseModel):
    resource: Optional[str] = None
    action: Optional[str] = None
    description: Optional[str] = None
