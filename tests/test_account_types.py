# tests/test_account_types.py

"""
Tests for account type endpoints.
"""

from fastapi.testclient import TestClient
from unittest.mock import patch

from supabase_mocks import make_query, make_supabase

BANK = {"id": "b1", "name": "Main Pool", "account_number": "001-777"}


def test_create_account_type_returns_joined_bank_account(client: TestClient, as_admin):
    inserted = {"id": "at1", "name": "Fixed 1yr", "bank_account_id": "b1", "processing_fee": 25}
    account_types = make_query([inserted], [{**inserted, "bank_accounts": BANK}])
    db = make_supabase(account_types=account_types)

    with patch("routers.account_types.get_supabase_client", return_value=db):
        response = client.post(
            "/account-types",
            json={"name": "Fixed 1yr", "bank_account_id": "b1", "processing_fee": 25},
        )

    assert response.status_code == 201
    body = response.json()["account_type"]
    assert body["processing_fee"] == 25
    assert body["bank_accounts"] == BANK
    account_types.insert.assert_called_once_with(
        {"name": "Fixed 1yr", "bank_account_id": "b1", "processing_fee": 25.0}
    )


def test_create_account_type_requires_bank_account(client: TestClient, as_admin):
    response = client.post("/account-types", json={"name": "Savings"})

    assert response.status_code == 400
    assert "bank_account_id" in response.json()["error"]


def test_create_account_type_rejects_negative_fee(client: TestClient, as_admin):
    response = client.post(
        "/account-types",
        json={"name": "Savings", "bank_account_id": "b1", "processing_fee": -1},
    )
    assert response.status_code == 400


def test_list_account_types_ordered_by_name(client: TestClient, as_admin):
    account_types = make_query([{"id": "at1", "name": "Savings", "bank_accounts": BANK}])
    db = make_supabase(account_types=account_types)

    with patch("routers.account_types.get_supabase_client", return_value=db):
        response = client.get("/account-types")

    assert response.status_code == 200
    assert len(response.json()["account_types"]) == 1
    account_types.select.assert_called_once_with("*, bank_accounts(id, name, account_number)")
    account_types.order.assert_called_once_with("name")


def test_update_account_type_withdrawal_rules(client: TestClient, as_admin):
    rules = {"max_per_month": 2, "notice_days": 30}
    account_types = make_query([{"id": "at1"}], [{"id": "at1", "withdrawal_rules": rules}])
    db = make_supabase(account_types=account_types)

    with patch("routers.account_types.get_supabase_client", return_value=db):
        response = client.put("/account-types/at1", json={"withdrawal_rules": rules})

    assert response.status_code == 200
    assert response.json()["account_type"]["withdrawal_rules"] == rules
    account_types.update.assert_called_once_with({"withdrawal_rules": rules})


def test_delete_account_type_with_accounts_is_refused(client: TestClient, as_admin):
    accounts = make_query([{"id": "a1"}])
    account_types = make_query()
    db = make_supabase(accounts=accounts, account_types=account_types)

    with patch("routers.account_types.get_supabase_client", return_value=db):
        response = client.delete("/account-types/at1")

    assert response.status_code == 400
    assert response.json() == {"error": "Cannot delete account type: it is linked to existing accounts."}
    account_types.delete.assert_not_called()


def test_delete_account_type_without_accounts(client: TestClient, as_admin):
    accounts = make_query([])
    account_types = make_query([{"id": "at1"}], [])
    db = make_supabase(accounts=accounts, account_types=account_types)

    with patch("routers.account_types.get_supabase_client", return_value=db):
        deleted = client.delete("/account-types/at1")
        fetched = client.get("/account-types/at1")

    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Account type deleted successfully"}
    assert fetched.status_code == 404


def test_delete_unknown_account_type_is_404(client: TestClient, as_admin):
    db = make_supabase(accounts=make_query([]), account_types=make_query([]))

    with patch("routers.account_types.get_supabase_client", return_value=db):
        response = client.delete("/account-types/missing")

    assert response.status_code == 404
