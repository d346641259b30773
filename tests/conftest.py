# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient
from typing import Generator

from main import create_app
from core.authorizer import Authorizer
from dependencies.auth import CurrentUser, get_authorizer, get_current_user


ALL_CAPABILITIES = [
    (resource, "manage")
    for resource in (
        "users", "roles", "permissions", "members",
        "bank_accounts", "account_types", "accounts",
    )
]


@pytest.fixture(scope="function")
def app():
    """Create a test FastAPI application instance."""
    return create_app()


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def safe_client(app) -> Generator[TestClient, None, None]:
    """Test client that returns 500 responses instead of re-raising."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def mock_current_user():
    return CurrentUser(id="admin-user-id", email="admin@example.org")


def _sign_in(app, user, authorizer):
    app.dependency_overrides[get_current_user] = lambda: user
    app.dependency_overrides[get_authorizer] = lambda: authorizer


@pytest.fixture
def as_admin(app, mock_current_user):
    """Pretend auth already succeeded with an admin holding every capability."""
    _sign_in(app, mock_current_user, Authorizer(roles=["admin"], capabilities=ALL_CAPABILITIES))
    yield mock_current_user
    app.dependency_overrides = {}


@pytest.fixture
def as_staff(app):
    """Staff user: may manage members and accounts, nothing admin-only."""
    user = CurrentUser(id="staff-user-id", email="staff@example.org")
    _sign_in(app, user, Authorizer(roles=["staff"], capabilities=[("members", "manage")]))
    yield user
    app.dependency_overrides = {}
