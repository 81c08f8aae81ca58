"""Session/auth gate backed by Supabase auth.

Credential storage and verification stay with Supabase; this module only maps
its responses to ``Session`` objects and refuses to go further without one.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from app.core.exceptions import AuthError, CredentialError
from app.db.supabase import get_supabase, new_auth_client
from app.models.auth import Session

logger = logging.getLogger(__name__)


def _to_session(raw_session: Any, user: Any) -> Session:
    """Build a ``Session`` from a Supabase session and user."""
    expires_at: datetime | None = None
    raw_expiry = getattr(raw_session, "expires_at", None)
    if raw_expiry:
        expires_at = datetime.fromtimestamp(int(raw_expiry), tz=timezone.utc)
    return Session(
        user_id=str(user.id),
        email=getattr(user, "email", None),
        access_token=raw_session.access_token,
        refresh_token=getattr(raw_session, "refresh_token", None),
        expires_at=expires_at,
    )


def sign_up(email: str, password: str) -> tuple[str, Session | None]:
    """Create a credential and return ``(user_id, session)``.

    The session is None when the project requires e-mail confirmation before
    the first sign-in.  Raises ``CredentialError`` with the provider's message
    (duplicate e-mail, weak password, ...).
    """
    client = new_auth_client()
    try:
        response = client.auth.sign_up({"email": email, "password": password})
    except Exception as exc:
        logger.info("sign_up_rejected", extra={"email": email, "error_message": str(exc)})
        raise CredentialError(str(exc)) from exc

    user = response.user
    if user is None or not user.id:
        raise CredentialError("Errore nella creazione dell'account.")

    session = _to_session(response.session, user) if response.session else None
    logger.info("sign_up_completed", extra={"user_id": str(user.id), "has_session": session is not None})
    return str(user.id), session


def authenticate(email: str, password: str) -> Session:
    """Sign in with e-mail and password.

    Raises ``AuthError`` for empty or invalid credentials.
    """
    if not email or not password:
        raise AuthError("Credenziali non valide. Controlla email e password.")

    client = new_auth_client()
    try:
        response = client.auth.sign_in_with_password({"email": email, "password": password})
    except Exception as exc:
        logger.info("sign_in_rejected", extra={"email": email, "error_message": str(exc)})
        raise AuthError("Credenziali non valide. Controlla email e password.") from exc

    if response.session is None or response.user is None:
        raise AuthError("Credenziali non valide. Controlla email e password.")
    return _to_session(response.session, response.user)


def get_session(access_token: str | None) -> Session | None:
    """Resolve a bearer token to a ``Session``, or None if it is not valid."""
    if not access_token:
        return None
    try:
        response = get_supabase().auth.get_user(access_token)
    except Exception as exc:
        logger.info("session_lookup_failed", extra={"error_message": str(exc)})
        return None

    user = getattr(response, "user", None) if response else None
    if user is None:
        return None
    return Session(
        user_id=str(user.id),
        email=getattr(user, "email", None),
        access_token=access_token,
    )


def sign_out(session: Session) -> None:
    """Invalidate the session at the provider.

    Raises ``AuthError`` if the provider rejects the token.
    """
    try:
        get_supabase().auth.admin.sign_out(session.access_token)
    except Exception as exc:
        logger.warning(
            "sign_out_failed",
            extra={"user_id": session.user_id, "error_message": str(exc)},
        )
        raise AuthError(f"Logout failed: {exc}") from exc
    logger.info("sign_out_completed", extra={"user_id": session.user_id})
