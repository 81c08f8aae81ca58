"""School options for the registration form."""

from typing import Any

from fastapi import APIRouter

from app.core.constants import OTHER_SCHOOL, SCHOOL_OPTIONS

router = APIRouter()


@router.get("")
async def list_schools() -> dict[str, Any]:
    """Return the selectable schools and the value meaning "other"."""
    return {"options": SCHOOL_OPTIONS, "other_value": OTHER_SCHOOL}
