"""Scanner sessions guarding against duplicate decodes.

A camera session can report the same code several times before it is torn
down.  Each open session carries a one-shot claim: the first decode acquires
it (non-blocking) and every later decode in that session is refused until the
session is closed and a new one opened.  Closing a session that never decoded
cancels it with no side effects.

State lives in this process, guarded by ``threading.Lock``.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

from app.core.config import settings
from app.core.exceptions import ScanSessionNotFound

logger = logging.getLogger(__name__)


@dataclass
class ScanSession:
    id: UUID
    user_id: str
    opened_at: datetime
    _claim: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def claim(self) -> bool:
        """Take the one-shot decode claim; False if already taken."""
        return self._claim.acquire(blocking=False)

    @property
    def decoded(self) -> bool:
        return self._claim.locked()


_sessions: dict[UUID, ScanSession] = {}
_registry_lock = threading.Lock()


def _prune_expired(now: datetime) -> None:
    """Drop sessions older than the configured TTL. Caller holds the lock."""
    cutoff = now - timedelta(seconds=settings.SCAN_SESSION_TTL_SECONDS)
    for session_id in [s.id for s in _sessions.values() if s.opened_at < cutoff]:
        del _sessions[session_id]


def open_scan_session(user_id: str) -> ScanSession:
    """Open a new scan session for *user_id*."""
    now = datetime.now(timezone.utc)
    session = ScanSession(id=uuid4(), user_id=user_id, opened_at=now)
    with _registry_lock:
        _prune_expired(now)
        _sessions[session.id] = session
    logger.info("scan_session_opened", extra={"scan_session_id": str(session.id), "user_id": user_id})
    return session


def get_scan_session(session_id: UUID, user_id: str) -> ScanSession:
    """Return the open session *session_id* owned by *user_id*.

    Raises ``ScanSessionNotFound`` for unknown ids and for sessions of other
    users.
    """
    with _registry_lock:
        session = _sessions.get(session_id)
    if session is None or session.user_id != user_id:
        raise ScanSessionNotFound(str(session_id))
    return session


def close_scan_session(session_id: UUID, user_id: str) -> bool:
    """Tear down a session.

    Returns True if the session was cancelled before any decode.
    """
    session = get_scan_session(session_id, user_id)
    with _registry_lock:
        _sessions.pop(session_id, None)
    cancelled = not session.decoded
    logger.info(
        "scan_session_closed",
        extra={"scan_session_id": str(session_id), "cancelled": cancelled},
    )
    return cancelled


def reset_scan_sessions() -> None:
    """Forget every open session."""
    with _registry_lock:
        _sessions.clear()
