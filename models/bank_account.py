# models/bank_account.py

from typing import Optional
from pydantic import BaseModel, Field


class BankAccountCreate(BaseModel):
    """Custodial bank account holding pooled funds."""
    name: str = Field(..., min_length=1)
    account_number: str = Field(..., min_length=1)
    description: Optional[str] = None


class BankAccountUpdate(BaseModel):
    name: Optional[str] = None
    account_number: Optional[str] = None
    description: Optional[str] = None
