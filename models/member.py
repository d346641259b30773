# models/member.py

from typing import Optional
from pydantic import BaseModel, EmailStr, Field
from models.enums import MemberStatus


class MemberCreate(BaseModel):
    """Create member model."""
    full_name: str = Field(..., min_length=1, description="Member's full name (required)")
    contact_email: EmailStr = Field(..., description="Contact email (required)")
    phone_number: Optional[str] = None
    address: Optional[str] = None
    user_id: Optional[str] = Field(None, description="Linked dashboard user, if any")
    status: Optional[MemberStatus] = None


class MemberUpdate(BaseModel):
    """Update member model - all fields optional."""
    full_name: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    user_id: Optional[str] = None
    status: Optional[MemberStatus] = None
