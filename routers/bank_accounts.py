# routers/bank_accounts.py

from decimal import Decimal

from fastapi import APIRouter, Depends

from dependencies.auth import requires_role
from core.permissions import ADMIN_ONLY, MANAGE
from core.supabase_client import get_supabase_client
from core.supabase_helpers import (
    delete_row,
    ensure_no_dependents,
    fetch_one_or_404,
    insert_row,
    update_row,
)
from core.utils import sanitize, partial_update
from core.logging_config import logger
from models.bank_account import BankAccountCreate, BankAccountUpdate

router = APIRouter(
    prefix="/bank-accounts",
    tags=["Bank Accounts"],
    dependencies=[Depends(requires_role(ADMIN_ONLY, ("bank_accounts", MANAGE)))],
)

TABLE = "bank_accounts"
SELECT = "*"

# Balances are numeric(14, 2)
CENTS = Decimal("0.01")


# ============================================================
# LIST BANK ACCOUNTS
# ============================================================
@router.get("", summary="List bank accounts")
def list_bank_accounts():
    client = get_supabase_client()
    result = (
        client.table(TABLE)
        .select(SELECT)
        .order("name")
        .execute()
    )
    return {"bank_accounts": result.data or []}


# ============================================================
# FUNDS SUMMARY
# ============================================================
@router.get("/{bank_account_id}/summary", summary="Total funds held for a bank account")
def bank_account_summary(bank_account_id: str):
    """
    Sums the balance of every account whose account type is backed by this
    bank account. Recomputed on every call.
    """
    client = get_supabase_client()
    rows = (
        client.table("accounts")
        .select("balance, account_types!inner(bank_account_id)")
        .eq("account_types.bank_account_id", bank_account_id)
        .execute()
    ).data or []

    total = sum((Decimal(str(row.get("balance") or 0)) for row in rows), Decimal("0"))
    total_funds = float(total.quantize(CENTS))

    return {"bank_account_id": bank_account_id, "total_funds": total_funds}


# ============================================================
# GET BANK ACCOUNT
# ============================================================
@router.get("/{bank_account_id}", summary="Get a bank account")
def get_bank_account(bank_account_id: str):
    client = get_supabase_client()
    row = fetch_one_or_404(client, TABLE, SELECT, bank_account_id, "Bank account")
    return {"bank_account": row}


# ============================================================
# CREATE BANK ACCOUNT
# ============================================================
@router.post("", status_code=201, summary="Create a bank account")
def create_bank_account(payload: BankAccountCreate):
    client = get_supabase_client()
    data = sanitize(payload.model_dump(exclude_none=True))

    created = insert_row(client, TABLE, data, "Failed to create bank account")
    logger.info(f"Bank account created: {created['id']}")

    return {"bank_account": created}


# ============================================================
# UPDATE BANK ACCOUNT
# ============================================================
@router.put("/{bank_account_id}", summary="Update a bank account")
def update_bank_account(bank_account_id: str, payload: BankAccountUpdate):
    updates = partial_update(payload, non_nullable=("name", "account_number"))
    client = get_supabase_client()

    updated = update_row(
        client, TABLE, bank_account_id, updates,
        "Failed to update bank account", "Bank account",
    )
    return {"bank_account": updated}


# ============================================================
# DELETE BANK ACCOUNT
# ============================================================
@router.delete("/{bank_account_id}", summary="Delete a bank account")
def delete_bank_account(bank_account_id: str):
    client = get_supabase_client()

    ensure_no_dependents(
        client, "account_types", "bank_account_id", bank_account_id,
        "Cannot delete bank account: it is linked to existing account types.",
    )
    delete_row(client, TABLE, bank_account_id, "Failed to delete bank account", "Bank account")

    logger.info(f"Bank account deleted: {bank_account_id}")
    return {"message": "Bank account deleted successfully"}
