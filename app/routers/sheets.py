"""Spreadsheet sync endpoints used by the front end.

POST /register -- append the registration row of a user.
POST /checkin  -- write a check-in timestamp into the user's row.

Both require a session (401 before the body is looked at), answer 400 when a
field is missing and 500 when the mirror write fails.  They are the explicit,
caller-driven counterpart of the best-effort writes done by the workflows.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from app.core.exceptions import MirrorError
from app.dependencies.auth import require_session
from app.models.auth import Session
from app.models.sheets import SheetRow
from app.models.sync import CheckinSyncRequest, RegisterSyncRequest, SyncResponse
from app.services.sheets import append_user_row, update_checkin_timestamp

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=SyncResponse)
async def register_sync(
    body: RegisterSyncRequest,
    session: Session = Depends(require_session),
) -> SyncResponse:
    """Append a registration row to the mirror sheet."""
    missing = body.missing_fields()
    if missing:
        raise HTTPException(
            status_code=400,
            detail=f"Campi obbligatori mancanti: {', '.join(missing)}",
        )

    row = SheetRow(
        uid=body.uid,
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
        school=body.school,
        dob=body.dob,
    )
    try:
        await append_user_row(row)
    except MirrorError as exc:
        logger.error(
            "register_sync_failed",
            extra={"uid": body.uid, "caller": session.user_id, "error_message": exc.message},
        )
        raise HTTPException(
            status_code=500,
            detail="Errore nella sincronizzazione con Google Sheets",
        ) from exc

    return SyncResponse(success=True)


@router.post("/checkin", response_model=SyncResponse)
async def checkin_sync(
    body: CheckinSyncRequest,
    session: Session = Depends(require_session),
) -> SyncResponse:
    """Write a check-in timestamp into the user's mirror row."""
    missing = body.missing_fields()
    if missing:
        raise HTTPException(
            status_code=400,
            detail="UID e timestamp sono obbligatori",
        )

    try:
        await update_checkin_timestamp(body.uid, body.timestamp)
    except MirrorError as exc:
        logger.error(
            "checkin_sync_failed",
            extra={
                "uid": body.uid,
                "caller": session.user_id,
                "error_type": type(exc).__name__,
                "error_message": exc.message,
            },
        )
        raise HTTPException(
            status_code=500,
            detail="Errore nella sincronizzazione del check-in",
        ) from exc

    return SyncResponse(success=True)
