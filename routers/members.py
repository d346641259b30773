# routers/members.py

from fastapi import APIRouter, Depends

from dependencies.auth import requires_role
from core.permissions import ADMIN_OR_STAFF, MANAGE
from core.supabase_client import get_supabase_client
from core.supabase_helpers import delete_row, fetch_one_or_404, insert_row, update_row
from core.utils import sanitize, partial_update
from core.logging_config import logger
from models.member import MemberCreate, MemberUpdate

router = APIRouter(
    prefix="/members",
    tags=["Members"],
    dependencies=[Depends(requires_role(ADMIN_OR_STAFF, ("members", MANAGE)))],
)

TABLE = "members"
SELECT = "*, accounts(*)"


# ============================================================
# LIST MEMBERS (newest first)
# ============================================================
@router.get("", summary="List members with their accounts")
def list_members():
    client = get_supabase_client()
    result = (
        client.table(TABLE)
        .select(SELECT)
        .order("created_at", desc=True)
        .execute()
    )
    return {"members": result.data or []}


# ============================================================
# GET MEMBER
# ============================================================
@router.get("/{member_id}", summary="Get a member")
def get_member(member_id: str):
    client = get_supabase_client()
    return {"member": fetch_one_or_404(client, TABLE, SELECT, member_id, "Member")}


# ============================================================
# CREATE MEMBER
# ============================================================
@router.post("", status_code=201, summary="Enroll a member")
def create_member(payload: MemberCreate):
    client = get_supabase_client()
    data = sanitize(payload.model_dump(mode="json", exclude_none=True))

    created = insert_row(client, TABLE, data, "Failed to create member")
    logger.info(f"Member created: {created['id']}")

    return {"member": fetch_one_or_404(client, TABLE, SELECT, created["id"], "Member")}


# ============================================================
# UPDATE MEMBER
# ============================================================
@router.put("/{member_id}", summary="Update a member")
def update_member(member_id: str, payload: MemberUpdate):
    updates = partial_update(payload, non_nullable=("full_name", "contact_email", "status"))
    client = get_supabase_client()

    update_row(client, TABLE, member_id, updates, "Failed to update member", "Member")
    return {"member": fetch_one_or_404(client, TABLE, SELECT, member_id, "Member")}


# ============================================================
# DELETE MEMBER
# ============================================================
@router.delete("/{member_id}", summary="Delete a member")
def delete_member(member_id: str):
    client = get_supabase_client()
    delete_row(client, TABLE, member_id, "Failed to delete member", "Member")

    logger.info(f"Member deleted: {member_id}")
    return {"message": "Member deleted successfully"}
