"""Pydantic models for the ``profiles`` table.

``id`` is the identity provider's user id.  ``last_checkin`` stays null until
the first check-in and afterwards holds only the most recent one.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict


class ProfileCreate(BaseModel):
    """Payload for inserting a profile at registration."""
    id: str
    first_name: str
    last_name: str
    email: str
    school: str
    dob: date
    last_checkin: datetime | None = None


class UserProfile(BaseModel):
    """Full profile record returned from the database."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: str
    last_name: str
    email: str
    school: str
    dob: date
    last_checkin: datetime | None = None
