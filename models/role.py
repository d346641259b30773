# models/role.py

from typing import List, Optional
from pydantic import BaseModel, Field


class RoleCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    permission_ids: List[str] = []


class RoleUpdate(BaseModel):
    """permission_ids, when present, replaces the role's grants."""
    name: Optional[str] = None
    description: Optional[str] = None
    permission_ids: Optional[List[str]] = None
