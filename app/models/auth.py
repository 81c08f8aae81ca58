"""Pydantic models for authentication and registration.

Request bodies accept the front end's camelCase keys (``firstName``) as well
as snake_case names.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.models.mirror import MirrorResult
from app.models.profile import UserProfile


class Session(BaseModel):
    """An authenticated user session issued by the identity provider."""
    user_id: str
    email: str | None = None
    access_token: str
    refresh_token: str | None = None
    expires_at: datetime | None = None


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    session: Session
    profile: UserProfile | None = None


class RegisterRequest(BaseModel):
    """Registration form.

    Fields default to empty so that missing values reach the presence checks
    of the registration workflow instead of failing request parsing.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    password: str = ""
    dob: date | None = None
    school: str = ""
    custom_school: str = ""


class RegistrationResult(BaseModel):
    profile: UserProfile
    session: Session | None = None
    mirror: MirrorResult
