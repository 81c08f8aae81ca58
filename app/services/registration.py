"""Registration workflow.

Steps run strictly in order and a failure stops the ones after it:

1. Create the credential with the identity provider.
2. Resolve the effective school (``altro`` means "use the custom text").
3. Insert the profile with ``last_checkin`` unset.
4. Best-effort append of the mirror row.

Presence checks run before step 1, so an incomplete form never reaches an
external service.  A profile failure after step 1 leaves a credential without
a profile; it is logged and raised, with no rollback.
"""

from __future__ import annotations

import logging

from app.core.constants import OTHER_SCHOOL
from app.core.exceptions import ProfilePersistError, ValidationError
from app.models.auth import RegisterRequest, RegistrationResult
from app.models.enums import MirrorOperation
from app.models.profile import ProfileCreate
from app.models.sheets import SheetRow
from app.services import identity, profiles, sheets
from app.services.mirror import run_mirror_write

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS: dict[str, str] = {
    "first_name": "Nome",
    "last_name": "Cognome",
    "email": "Email",
    "password": "Password",
    "dob": "Data di Nascita",
    "school": "Scuola",
}


def validate_registration(request: RegisterRequest) -> None:
    """Check that every required field is present.

    Raises ``ValidationError`` naming the first missing field.
    """
    for field, label in _REQUIRED_FIELDS.items():
        value = getattr(request, field)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(field, f"Campo obbligatorio mancante: {label}")

    if request.school == OTHER_SCHOOL and not request.custom_school.strip():
        raise ValidationError("custom_school", "Specifica il nome della scuola")


def resolve_school(school: str, custom_school: str) -> str:
    """Return the school to store; the sentinel is replaced by the custom text."""
    if school == OTHER_SCHOOL:
        return custom_school.strip()
    return school


async def register_user(request: RegisterRequest) -> RegistrationResult:
    """Run the registration workflow and return its result.

    Raises ``ValidationError``, ``CredentialError`` or ``ProfilePersistError``;
    mirror failures are reported in ``RegistrationResult.mirror`` only.
    """
    validate_registration(request)

    user_id, session = identity.sign_up(request.email, request.password)

    school = resolve_school(request.school, request.custom_school)

    try:
        profile = profiles.insert_profile(
            ProfileCreate(
                id=user_id,
                first_name=request.first_name,
                last_name=request.last_name,
                email=request.email,
                school=school,
                dob=request.dob,
                last_checkin=None,
            )
        )
    except ProfilePersistError as exc:
        logger.error(
            "registration_profile_failed",
            extra={
                "user_id": user_id,
                "email": request.email,
                "state": "credential_without_profile",
                "error_message": exc.message,
            },
        )
        raise

    row = SheetRow(
        uid=user_id,
        first_name=profile.first_name,
        last_name=profile.last_name,
        email=profile.email,
        school=profile.school,
        dob=profile.dob.isoformat(),
    )
    mirror = await run_mirror_write(
        MirrorOperation.append_row,
        session,
        user_id,
        lambda: sheets.append_user_row(row),
    )

    logger.info(
        "registration_completed",
        extra={"user_id": user_id, "mirror_status": mirror.status.value},
    )
    return RegistrationResult(profile=profile, session=session, mirror=mirror)
