"""Check-in workflow.

1. Take the current time as the check-in timestamp (UTC, ``...Z``).
2. Write it to the profile's ``last_checkin`` (authoritative).
3. Best-effort update of the mirror row's check-in cell.

A profile failure is raised and the mirror is not touched.  A mirror failure,
including ``RowNotFound`` for users whose registration row was never
appended, is only reported in ``CheckinResult.mirror``.  Timestamps come from
the server clock; ordering across concurrent check-ins is last write wins.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from uuid import UUID

from app.core.exceptions import DuplicateDecode, ValidationError
from app.models.auth import Session
from app.models.checkin import CheckinResult
from app.models.enums import MirrorOperation
from app.services import profiles, scanner, sheets
from app.services.mirror import run_mirror_write

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Serialize *moment* as ISO-8601 UTC with a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc = moment.astimezone(timezone.utc).replace(microsecond=0)
    return utc.isoformat().replace("+00:00", "Z")


async def check_in(
    session: Session,
    payload: str,
    now: Callable[[], datetime] = _utcnow,
) -> CheckinResult:
    """Record a check-in for the session's user.

    *payload* is the decoded scan; any non-empty string triggers a check-in.
    Raises ``ValidationError`` for an empty payload and
    ``ProfilePersistError`` if the profile update fails.
    """
    if not payload:
        raise ValidationError("payload", "Codice QR non valido")

    timestamp = format_timestamp(now())
    user_id = session.user_id

    profile = profiles.update_last_checkin(user_id, timestamp)

    mirror = await run_mirror_write(
        MirrorOperation.update_checkin,
        session,
        user_id,
        lambda: sheets.update_checkin_timestamp(user_id, timestamp),
    )

    logger.info(
        "checkin_completed",
        extra={
            "user_id": user_id,
            "timestamp": timestamp,
            "mirror_status": mirror.status.value,
        },
    )
    return CheckinResult(
        user_id=user_id,
        timestamp=timestamp,
        profile=profile,
        mirror=mirror,
    )


async def check_in_from_scan(
    session: Session,
    scan_session_id: UUID,
    payload: str,
    now: Callable[[], datetime] = _utcnow,
) -> CheckinResult:
    """Check in from a decode event of an open scan session.

    Only the first decode of a scan session runs the workflow; later ones
    raise ``DuplicateDecode`` without side effects.  Once claimed, the
    check-in runs to completion and is not retried, even if it fails.
    """
    scan_session = scanner.get_scan_session(scan_session_id, session.user_id)

    if not payload:
        raise ValidationError("payload", "Codice QR non valido")

    if not scan_session.claim():
        logger.info(
            "duplicate_decode_ignored",
            extra={"scan_session_id": str(scan_session_id), "user_id": session.user_id},
        )
        raise DuplicateDecode(str(scan_session_id))

    return await check_in(session, payload, now=now)
