"""Shared test fixtures.

Provides environment defaults, a FastAPI ``test_client``, an authenticated
session patched into the auth dependency, and Supabase table mocks.
"""

import os
from collections.abc import Generator
from datetime import date
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-service-key")
os.environ.setdefault("GOOGLE_SPREADSHEET_ID", "sheet-123")

from app.models.auth import Session  # noqa: E402
from app.models.profile import UserProfile  # noqa: E402

USER_ID = "7d0c5a4e-0000-4000-8000-000000000001"
AUTH_HEADERS = {"Authorization": "Bearer user-token"}


def chainable_table_mock() -> MagicMock:
    """Return a mock that supports fluent chaining."""
    m = MagicMock()
    for method in ("select", "insert", "update", "eq", "limit", "order"):
        getattr(m, method).return_value = m
    return m


def make_profile(**overrides: object) -> UserProfile:
    """Return a profile for ``USER_ID`` with optional overrides."""
    data: dict[str, object] = {
        "id": USER_ID,
        "first_name": "Anna",
        "last_name": "Bianchi",
        "email": "anna@x.it",
        "school": "Liceo Test",
        "dob": date(2005, 3, 1),
        "last_checkin": None,
    }
    data.update(overrides)
    return UserProfile(**data)


@pytest.fixture()
def session() -> Session:
    return Session(user_id=USER_ID, email="anna@x.it", access_token="user-token")


@pytest.fixture()
def authenticated(session: Session) -> Generator[Session, None, None]:
    """Make ``require_session`` accept ``AUTH_HEADERS``."""
    with patch("app.dependencies.auth.get_session", return_value=session):
        yield session


@pytest.fixture()
def unauthenticated() -> Generator[MagicMock, None, None]:
    """Make every bearer token invalid."""
    with patch("app.dependencies.auth.get_session", return_value=None) as mock_get:
        yield mock_get


@pytest.fixture()
def mock_profiles_table() -> Generator[MagicMock, None, None]:
    """Patch the profile store's Supabase client with a chainable table mock."""
    client = MagicMock()
    table = chainable_table_mock()
    client.table.return_value = table
    with patch("app.services.profiles.get_supabase", return_value=client):
        yield table


@pytest.fixture(autouse=True)
def _clean_state() -> Generator[None, None, None]:
    """Reset process-wide scanner sessions and the cached Sheets credentials."""
    from app.db.sheets import reset_credentials
    from app.services.scanner import reset_scan_sessions

    reset_scan_sessions()
    reset_credentials()
    yield
    reset_scan_sessions()
    reset_credentials()


@pytest.fixture()
def test_client() -> Generator[TestClient, None, None]:
    """Provide a FastAPI TestClient."""
    from app.main import app

    with TestClient(app) as client:
        yield client
