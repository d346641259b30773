# models/account_type.py

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class AccountTypeCreate(BaseModel):
    """Product definition (savings, fixed deposit, ...) backed by one bank account."""
    name: str = Field(..., min_length=1)
    bank_account_id: str = Field(..., min_length=1)
    description: Optional[str] = None
    min_balance: Optional[float] = Field(None, ge=0)
    profit_rate: Optional[float] = Field(None, description="Percentage")
    processing_fee: Optional[float] = Field(None, ge=0)
    withdrawal_rules: Optional[Dict[str, Any]] = None


class AccountTypeUpdate(BaseModel):
    name: Optional[str] = None
    bank_account_id: Optional[str] = None
    description: Optional[str] = None
    min_balance: Optional[float] = Field(None, ge=0)
    profit_rate: Optional[float] = None
    processing_fee: Optional[float] = Field(None, ge=0)
    withdrawal_rules: Optional[Dict[str, Any]] = None
