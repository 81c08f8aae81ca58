"""Google service-account credential for the Sheets mirror.

``get_credentials()`` returns a lazily-initialized, process-wide
``google.oauth2.service_account.Credentials`` built from
``GOOGLE_SERVICE_ACCOUNT_KEY``.  ``get_access_token()`` refreshes it when the
token is missing or about to expire and returns the bearer token.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.service_account import Credentials

from app.core.config import settings
from app.core.constants import SHEETS_SCOPE
from app.core.exceptions import MirrorError

logger = logging.getLogger(__name__)

_credentials: Credentials | None = None


def _load_service_account() -> dict[str, Any]:
    """Parse ``GOOGLE_SERVICE_ACCOUNT_KEY`` into a dict.

    Raises ``MirrorError`` if the key is missing or malformed.
    """
    raw = settings.GOOGLE_SERVICE_ACCOUNT_KEY.strip()
    if not raw:
        raise MirrorError("Google service account key is not configured")
    try:
        info = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MirrorError(f"Invalid Google service account key: {exc}") from exc
    if not isinstance(info, dict):
        raise MirrorError("Invalid Google service account key: expected a JSON object")
    return info


def get_credentials() -> Credentials:
    """Return the singleton service-account credentials, creating them on first call."""
    global _credentials
    if _credentials is None:
        info = _load_service_account()
        try:
            _credentials = Credentials.from_service_account_info(info, scopes=[SHEETS_SCOPE])
        except (ValueError, TypeError) as exc:
            raise MirrorError(f"Invalid Google service account key: {exc}") from exc
    return _credentials


async def get_access_token() -> str:
    """Return a valid Sheets access token, refreshing the credentials when needed."""
    credentials = get_credentials()
    if not credentials.valid:
        try:
            # google-auth refreshes over blocking HTTP.
            await asyncio.to_thread(credentials.refresh, Request())
        except GoogleAuthError as exc:
            raise MirrorError(
                f"Google token refresh failed ({type(exc).__name__}): {exc}"
            ) from exc
        logger.info(
            "sheets_token_refreshed",
            extra={"expiry": credentials.expiry.isoformat() if credentials.expiry else None},
        )
    return credentials.token


def reset_credentials() -> None:
    """Forget the cached credentials and their token."""
    global _credentials
    _credentials = None
