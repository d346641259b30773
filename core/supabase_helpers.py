# core/supabase_helpers.py

from typing import Optional

from supabase import Client

from core.errors import NotFound, ReferentialConflict, handle_supabase_error
from core.logging_config import logger


# =================================================================
#  SHARED ROW HELPERS used by every resource router
# =================================================================

def fetch_one(client: Client, table: str, select: str, row_id: str) -> Optional[dict]:
    """Single row by id with the router's join shape, or None."""
    rows = (
        client.table(table)
        .select(select)
        .eq("id", row_id)
        .limit(1)
        .execute()
    ).data
    return rows[0] if rows else None


def fetch_one_or_404(client: Client, table: str, select: str, row_id: str, label: str) -> dict:
    row = fetch_one(client, table, select, row_id)
    if not row:
        raise NotFound(f"{label} not found")
    return row


def ensure_no_dependents(client: Client, table: str, column: str, row_id: str, message: str):
    """
    Referential guard run before a physical delete.
    Raises ReferentialConflict if any row of `table` still points at `row_id`.
    """
    linked = (
        client.table(table)
        .select("id")
        .eq(column, row_id)
        .limit(1)
        .execute()
    ).data

    if linked:
        logger.info(f"Delete refused: {table}.{column} still references {row_id}")
        raise ReferentialConflict(message)


def insert_row(client: Client, table: str, data: dict, operation: str) -> dict:
    try:
        result = client.table(table).insert(data).execute()
    except Exception as e:
        raise handle_supabase_error(e, operation)

    if not result.data:
        raise RuntimeError(f"{operation}: insert returned no row")
    return result.data[0]


def update_row(client: Client, table: str, row_id: str, updates: dict, operation: str, label: str) -> dict:
    try:
        result = (
            client.table(table)
            .update(updates)
            .eq("id", row_id)
            .execute()
        )
    except Exception as e:
        raise handle_supabase_error(e, operation)

    if not result.data:
        raise NotFound(f"{label} not found")
    return result.data[0]


def delete_row(client: Client, table: str, row_id: str, operation: str, label: str):
    try:
        result = (
            client.table(table)
            .delete()
            .eq("id", row_id)
            .execute()
        )
    except Exception as e:
        raise handle_supabase_error(e, operation)

    if not result.data:
        raise NotFound(f"{label} not found")
