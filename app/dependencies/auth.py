from fastapi import Header, HTTPException

from app.models.auth import Session
from app.services.identity import get_session


async def require_session(authorization: str | None = Header(default=None)) -> Session:
    """Resolve the ``Authorization: Bearer`` header or answer 401."""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Non autorizzato")

    token = authorization.split(" ", 1)[1].strip()
    session = get_session(token)
    if session is None:
        raise HTTPException(status_code=401, detail="Non autorizzato")
    return session
