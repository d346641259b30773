# routers/account_types.py

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
from models.account_type import AccountTypeCreate, AccountTypeUpdate

router = APIRouter(
    prefix="/account-types",
    tags=["Account Types"],
    dependencies=[Depends(requires_role(ADMIN_ONLY, ("account_types", MANAGE)))],
)

TABLE = "account_types"
SELECT = "*, bank_accounts(id, name, account_number)"


# ============================================================
# LIST ACCOUNT TYPES
# ============================================================
@router.get("", summary="List account types")
def list_account_types():
    client = get_supabase_client()
    result = (
        client.table(TABLE)
        .select(SELECT)
        .order("name")
        .execute()
    )
    return {"account_types": result.data or []}


# ============================================================
# GET ACCOUNT TYPE
# ============================================================
@router.get("/{account_type_id}", summary="Get an account type")
def get_account_type(account_type_id: str):
    client = get_supabase_client()
    row = fetch_one_or_404(client, TABLE, SELECT, account_type_id, "Account type")
    return {"account_type": row}


# ============================================================
# CREATE ACCOUNT TYPE
# ============================================================
@router.post("", status_code=201, summary="Create an account type")
def create_account_type(payload: AccountTypeCreate):
    client = get_supabase_client()
    data = sanitize(payload.model_dump(exclude_none=True))

    created = insert_row(client, TABLE, data, "Failed to create account type")
    logger.info(f"Account type created: {created['id']}")

    return {"account_type": fetch_one_or_404(client, TABLE, SELECT, created["id"], "Account type")}


# ============================================================
# UPDATE ACCOUNT TYPE
# ============================================================
@router.put("/{account_type_id}", summary="Update an account type")
def update_account_type(account_type_id: str, payload: AccountTypeUpdate):
    updates = partial_update(
        payload,
        non_nullable=("name", "bank_account_id", "min_balance", "profit_rate", "processing_fee"),
    )
    client = get_supabase_client()

    update_row(
        client, TABLE, account_type_id, updates,
        "Failed to update account type", "Account type",
    )
    return {"account_type": fetch_one_or_404(client, TABLE, SELECT, account_type_id, "Account type")}


# ============================================================
# DELETE ACCOUNT TYPE
# ============================================================
@router.delete("/{account_type_id}", summary="Delete an account type")
def delete_account_type(account_type_id: str):
    client = get_supabase_client()

    ensure_no_dependents(
        client, "accounts", "account_type_id", account_type_id,
        "Cannot delete account type: it is linked to existing accounts.",
    )
    delete_row(client, TABLE, account_type_id, "Failed to delete account type", "Account type")

    logger.info(f"Account type deleted: {account_type_id}")
    return {"message": "Account type deleted successfully"}
