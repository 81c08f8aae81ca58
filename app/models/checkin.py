"""Pydantic models for check-ins and scanner sessions."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from app.models.mirror import MirrorResult
from app.models.profile import UserProfile


class CheckinRequest(BaseModel):
    """A decoded scan payload; its content is not interpreted."""
    payload: str = ""


class CheckinResult(BaseModel):
    user_id: str
    timestamp: str
    profile: UserProfile
    mirror: MirrorResult


class ScanSessionOut(BaseModel):
    id: UUID
    opened_at: datetime
