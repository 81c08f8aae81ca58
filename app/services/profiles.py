"""Profile store backed by the Supabase ``profiles`` table.

This is the authoritative record of a registered user.  Every write
and read failure is raised as ``ProfilePersistError``.
"""

from __future__ import annotations

import logging

from app.core.constants import PROFILES_TABLE
from app.core.exceptions import ProfilePersistError
from app.db.supabase import get_supabase
from app.models.profile import ProfileCreate, UserProfile

logger = logging.getLogger(__name__)


def insert_profile(profile: ProfileCreate) -> UserProfile:
    """Insert a new profile and return the stored record."""
    client = get_supabase()
    try:
        result = (
            client.table(PROFILES_TABLE)
            .insert(profile.model_dump(mode="json"))
            .execute()
        )
    except Exception as exc:
        raise ProfilePersistError(profile.id, "insert", str(exc)) from exc

    if not result.data:
        raise ProfilePersistError(profile.id, "insert", "no row returned")
    return UserProfile(**result.data[0])


def update_last_checkin(user_id: str, timestamp: str) -> UserProfile:
    """Overwrite ``last_checkin`` for *user_id* and return the updated record."""
    client = get_supabase()
    try:
        result = (
            client.table(PROFILES_TABLE)
            .update({"last_checkin": timestamp})
            .eq("id", user_id)
            .execute()
        )
    except Exception as exc:
        raise ProfilePersistError(user_id, "update", str(exc)) from exc

    if not result.data:
        raise ProfilePersistError(user_id, "update", "profile not found")
    return UserProfile(**result.data[0])


def get_profile(user_id: str) -> UserProfile | None:
    """Return the profile for *user_id*, or None."""
    client = get_supabase()
    try:
        result = (
            client.table(PROFILES_TABLE)
            .select("*")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
    except Exception as exc:
        raise ProfilePersistError(user_id, "select", str(exc)) from exc

    if not result.data:
        return None
    return UserProfile(**result.data[0])
