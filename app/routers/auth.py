"""Registration, login, logout and current-profile endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from app.core.exceptions import AuthError, ProfilePersistError, ValidationError
from app.dependencies.auth import require_session
from app.models.auth import LoginRequest, LoginResponse, RegisterRequest, RegistrationResult, Session
from app.models.profile import UserProfile
from app.services.identity import authenticate, sign_out
from app.services.profiles import get_profile
from app.services.registration import register_user

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=RegistrationResult, status_code=201)
async def register(body: RegisterRequest) -> RegistrationResult:
    """Create the credential and the profile, then mirror the row.

    A mirror failure is reported in ``mirror`` and does not fail the request.
    """
    try:
        return await register_user(body)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc
    except AuthError as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc
    except ProfilePersistError as exc:
        raise HTTPException(
            status_code=500,
            detail=f"Errore nel salvataggio del profilo: {exc.message}",
        ) from exc


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest) -> LoginResponse:
    """Sign in and return the session together with the user's profile.

    The session is still returned if the profile cannot be read.
    """
    try:
        session = authenticate(body.email, body.password)
    except AuthError as exc:
        raise HTTPException(status_code=401, detail=exc.message) from exc

    try:
        profile = get_profile(session.user_id)
    except ProfilePersistError as exc:
        logger.warning(
            "login_profile_unavailable",
            extra={"user_id": session.user_id, "error_message": exc.message},
        )
        profile = None
    return LoginResponse(session=session, profile=profile)


@router.post("/logout", status_code=204)
async def logout(session: Session = Depends(require_session)) -> Response:
    """Invalidate the caller's session."""
    try:
        sign_out(session)
    except AuthError as exc:
        raise HTTPException(status_code=502, detail=exc.message) from exc
    return Response(status_code=204)


@router.get("/me", response_model=UserProfile)
async def me(session: Session = Depends(require_session)) -> UserProfile:
    """Return the profile of the authenticated user."""
    try:
        profile = get_profile(session.user_id)
    except ProfilePersistError as exc:
        raise HTTPException(
            status_code=500,
            detail=f"Errore nel caricamento del profilo: {exc.message}",
        ) from exc
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile
