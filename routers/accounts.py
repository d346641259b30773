# routers/accounts.py

from fastapi import APIRouter, Depends

from dependencies.auth import requires_role
from core.errors import NO_DATA_FOUND, NotFound, handle_supabase_error, supabase_error_code
from core.permissions import ADMIN_OR_STAFF, MANAGE
from core.supabase_client import get_supabase_client
from core.supabase_helpers import delete_row, fetch_one_or_404, update_row
from core.utils import sanitize, partial_update
from core.logging_config import logger
from models.account import AccountCreate, AccountUpdate

router = APIRouter(
    prefix="/accounts",
    tags=["Accounts"],
    dependencies=[Depends(requires_role(ADMIN_OR_STAFF, ("accounts", MANAGE)))],
)

TABLE = "accounts"
SELECT = (
    "*, "
    "members(id, full_name, contact_email), "
    "account_types(id, name, description, processing_fee, bank_accounts(id, name))"
)


# ============================================================
# LIST ACCOUNTS (most recently opened first)
# ============================================================
@router.get("", summary="List member accounts")
def list_accounts():
    client = get_supabase_client()
    result = (
        client.table(TABLE)
        .select(SELECT)
        .order("open_date", desc=True)
        .execute()
    )
    return {"accounts": result.data or []}


# ============================================================
# GET ACCOUNT
# ============================================================
@router.get("/{account_id}", summary="Get an account")
def get_account(account_id: str):
    client = get_supabase_client()
    return {"account": fetch_one_or_404(client, TABLE, SELECT, account_id, "Account")}


# ============================================================
# OPEN ACCOUNT
# ============================================================
@router.post("", status_code=201, summary="Open an account for a member")
def create_account(payload: AccountCreate):
    """
    The fee flag is decided inside the database: open_member_account reads the
    account type's processing_fee and inserts the row in one transaction, so
    processing_fee_paid is true iff that fee is zero at insert time.
    """
    client = get_supabase_client()
    data = sanitize(payload.model_dump(mode="json"))

    params = {
        "p_member_id": data["member_id"],
        "p_account_type_id": data["account_type_id"],
        "p_account_number": data["account_number"],
        "p_balance": data.get("balance"),
        "p_open_date": data.get("open_date"),
        "p_status": data.get("status"),
    }

    try:
        result = client.rpc("open_member_account", params).execute()
    except Exception as e:
        if supabase_error_code(e) == NO_DATA_FOUND:
            raise NotFound("Account type not found")
        raise handle_supabase_error(e, "Failed to create account")

    created = result.data[0] if isinstance(result.data, list) else result.data
    if not created:
        raise RuntimeError("open_member_account returned no row")

    logger.info(
        f"Account opened: {created['id']} "
        f"(processing_fee_paid={created.get('processing_fee_paid')})"
    )
    return {"account": fetch_one_or_404(client, TABLE, SELECT, created["id"], "Account")}


# ============================================================
# UPDATE ACCOUNT
# ============================================================
@router.put("/{account_id}", summary="Update an account")
def update_account(account_id: str, payload: AccountUpdate):
    updates = partial_update(
        payload,
        non_nullable=(
            "member_id", "account_type_id", "account_number",
            "balance", "open_date", "status", "processing_fee_paid",
        ),
    )
    client = get_supabase_client()

    update_row(client, TABLE, account_id, updates, "Failed to update account", "Account")
    return {"account": fetch_one_or_404(client, TABLE, SELECT, account_id, "Account")}


# ============================================================
# DELETE ACCOUNT
# ============================================================
@router.delete("/{account_id}", summary="Delete an account")
def delete_account(account_id: str):
    client = get_supabase_client()
    delete_row(client, TABLE, account_id, "Failed to delete account", "Account")

    logger.info(f"Account deleted: {account_id}")
    return {"message": "Account deleted successfully"}
