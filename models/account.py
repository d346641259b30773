# models/account.py

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field
from models.enums import AccountStatus


class AccountCreate(BaseModel):
    """
    Opens an account for a member.
    processing_fee_paid is not accepted here; it is derived from the
    account type's fee when the row is inserted.
    """
    member_id: str = Field(..., min_length=1)
    account_type_id: str = Field(..., min_length=1)
    account_number: str = Field(..., min_length=1)
    balance: Optional[float] = None
    open_date: Optional[datetime] = None
    status: Optional[AccountStatus] = None


class AccountUpdate(BaseModel):
    member_id: Optional[str] = None
    account_type_id: Optional[str] = None
    account_number: Optional[str] = None
    balance: Optional[float] = None
    open_date: Optional[datetime] = None
    status: Optional[AccountStatus] = None
    processing_fee_paid: Optional[bool] = None
