# dashboard_client/api.py

from typing import Optional

import requests

from core.logging_config import logger


# Only the bank-account list aborts on its own; every other call waits
BANK_ACCOUNTS_LIST_TIMEOUT = 30


class ApiError(Exception):
    """Non-2xx answer from the API; `message` is the server's `error` string."""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message


# ============================================================
# Base client (one bearer token, one requests.Session)
# ============================================================
class ApiClient:
    """
    Thin typed wrappers over the HTTP handlers. No retries, no caching.

        api = ApiClient("https://api.example.org", token)
        api.members.list()["members"]
    """

    def __init__(self, base_url: str, token: Optional[str] = None, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

        self.users = ResourceApi(self, "/admin-users")
        self.roles = ResourceApi(self, "/admin-roles")
        self.permissions = ResourceApi(self, "/admin-permissions")
        self.members = ResourceApi(self, "/members")
        self.bank_accounts = BankAccountsApi(self, "/bank-accounts")
        self.account_types = ResourceApi(self, "/account-types")
        self.accounts = ResourceApi(self, "/accounts")

    def request(self, method: str, path: str, json: Optional[dict] = None, timeout: Optional[float] = None) -> dict:
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")

        response = self.session.request(method, url, json=json, timeout=timeout)

        try:
            data = response.json()
        except ValueError:
            data = {}

        if not response.ok:
            raise ApiError(response.status_code, data.get("error") or "Request failed")

        return data

    # -------------------------------------------------
    # Auth
    # -------------------------------------------------
    def fetch_profile(self) -> dict:
        return self.request("GET", "/auth/profile")["profile"]

    def validate_password(self, password: str) -> dict:
        return self.request("POST", "/auth/validate-password", json={"password": password})

    def update_password(self, new_password: str, clear_needs_password_reset: bool = False) -> dict:
        return self.request(
            "POST",
            "/auth/update-password",
            json={
                "new_password": new_password,
                "clear_needs_password_reset": clear_needs_password_reset,
            },
        )


# ============================================================
# Resource wrappers
# ============================================================
class ResourceApi:
    """list / get / create / update / delete for one handler group."""

    def __init__(self, client: ApiClient, path: str):
        self.client = client
        self.path = path

    def list(self) -> dict:
        return self.client.request("GET", self.path)

    def get(self, row_id: str) -> dict:
        return self.client.request("GET", f"{self.path}/{row_id}")

    def create(self, data: dict) -> dict:
        return self.client.request("POST", self.path, json=data)

    def update(self, row_id: str, data: dict) -> dict:
        return self.client.request("PUT", f"{self.path}/{row_id}", json=data)

    def delete(self, row_id: str) -> dict:
        return self.client.request("DELETE", f"{self.path}/{row_id}")


class BankAccountsApi(ResourceApi):

    def list(self) -> dict:
        return self.client.request("GET", self.path, timeout=BANK_ACCOUNTS_LIST_TIMEOUT)

    def summary(self, bank_account_id: str) -> dict:
        return self.client.request("GET", f"{self.path}/{bank_account_id}/summary")
