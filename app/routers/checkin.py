"""Check-in endpoints.

POST   /                               -- check in with a decoded payload.
POST   /scan-sessions                  -- open a scanner session.
POST   /scan-sessions/{id}/decode      -- report a decode; only the first counts.
DELETE /scan-sessions/{id}             -- tear down (or cancel) a session.
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from app.core.exceptions import (
    DuplicateDecode,
    ProfilePersistError,
    ScanSessionNotFound,
    ValidationError,
)
from app.dependencies.auth import require_session
from app.models.auth import Session
from app.models.checkin import CheckinRequest, CheckinResult, ScanSessionOut
from app.services.checkin import check_in, check_in_from_scan
from app.services.scanner import close_scan_session, open_scan_session

logger = logging.getLogger(__name__)

router = APIRouter()


def _profile_failure(exc: ProfilePersistError) -> HTTPException:
    logger.error(
        "checkin_profile_failed",
        extra={"user_id": exc.user_id, "error_message": exc.message},
    )
    return HTTPException(status_code=500, detail="Errore nel salvataggio del check-in")


@router.post("", response_model=CheckinResult)
async def create_checkin(
    body: CheckinRequest,
    session: Session = Depends(require_session),
) -> CheckinResult:
    """Check in the authenticated user."""
    try:
        return await check_in(session, body.payload)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc
    except ProfilePersistError as exc:
        raise _profile_failure(exc) from exc


@router.post("/scan-sessions", response_model=ScanSessionOut, status_code=201)
async def create_scan_session(
    session: Session = Depends(require_session),
) -> ScanSessionOut:
    """Open a scanner session for the authenticated user."""
    scan_session = open_scan_session(session.user_id)
    return ScanSessionOut(id=scan_session.id, opened_at=scan_session.opened_at)


@router.post("/scan-sessions/{scan_session_id}/decode", response_model=CheckinResult)
async def decode_scan(
    scan_session_id: UUID,
    body: CheckinRequest,
    session: Session = Depends(require_session),
) -> CheckinResult:
    """Report a decode event; duplicates within the session answer 409."""
    try:
        return await check_in_from_scan(session, scan_session_id, body.payload)
    except ScanSessionNotFound as exc:
        raise HTTPException(status_code=404, detail=exc.message) from exc
    except DuplicateDecode as exc:
        raise HTTPException(status_code=409, detail=exc.message) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc
    except ProfilePersistError as exc:
        raise _profile_failure(exc) from exc


@router.delete("/scan-sessions/{scan_session_id}")
async def delete_scan_session(
    scan_session_id: UUID,
    session: Session = Depends(require_session),
) -> dict[str, Any]:
    """Close the scanner session."""
    try:
        cancelled = close_scan_session(scan_session_id, session.user_id)
    except ScanSessionNotFound as exc:
        raise HTTPException(status_code=404, detail=exc.message) from exc
    return {"id": str(scan_session_id), "cancelled": cancelled}
