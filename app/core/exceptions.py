"""Domain exceptions.

Routers translate these into HTTP responses; the best-effort mirror runner is
the only place that catches ``MirrorError``.
"""

from __future__ import annotations


class CheckinAppError(Exception):
    """Base class for every error raised by the check-in services."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------

class AuthError(CheckinAppError):
    """Invalid credentials or rejected sign-in."""


class CredentialError(AuthError):
    """The identity provider refused to create the credential."""


class Unauthorized(CheckinAppError):
    """No valid session for an operation that requires one."""

    def __init__(self, message: str = "Non autorizzato") -> None:
        super().__init__(message)


# ---------------------------------------------------------------------------
# Input and persistence
# ---------------------------------------------------------------------------

class ValidationError(CheckinAppError):
    """A required field is missing."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class ProfilePersistError(CheckinAppError):
    """Reading or writing the authoritative profile record failed."""

    def __init__(self, user_id: str, operation: str, details: str) -> None:
        super().__init__(f"Profile {operation} failed for user '{user_id}': {details}")
        self.user_id = user_id
        self.operation = operation


# ---------------------------------------------------------------------------
# Spreadsheet mirror
# ---------------------------------------------------------------------------

class MirrorError(CheckinAppError):
    """Any failure talking to the spreadsheet mirror."""


class RowNotFound(MirrorError):
    """No mirror row carries the given uid."""

    def __init__(self, uid: str) -> None:
        super().__init__(f"User with UID {uid} not found in Google Sheets")
        self.uid = uid


# ---------------------------------------------------------------------------
# Scanner sessions
# ---------------------------------------------------------------------------

class ScanSessionError(CheckinAppError):
    """Base class for scanner session errors."""


class ScanSessionNotFound(ScanSessionError):
    def __init__(self, session_id: str) -> None:
        super().__init__(f"Scan session '{session_id}' not found")
        self.session_id = session_id


class DuplicateDecode(ScanSessionError):
    """The scan session already produced its check-in."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Scan session '{session_id}' already checked in")
        self.session_id = session_id
