"""Google Sheets mirror of registrations and check-ins.

Two writes against the configured sheet:

1. ``append_user_row`` appends one row per registration (no dedup).
2. ``update_checkin_timestamp`` finds the user's row by scanning the uid
   column and overwrites its check-in cell.

The uid lookup is a linear scan of column A, read in full on every
check-in; fine for an event-sized sheet, a real index is needed past a few
thousand rows.  Any transport, HTTP or credential failure is raised as
``MirrorError``; a missing uid as ``RowNotFound``.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from app.core.config import settings
from app.core.constants import (
    CHECKIN_COLUMN,
    ROW_RANGE_COLUMNS,
    SHEETS_API_BASE,
    SHEETS_VALUE_INPUT_OPTION,
    UID_COLUMN,
)
from app.core.exceptions import MirrorError, RowNotFound
from app.db.sheets import get_access_token
from app.models.sheets import SheetRow

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _values_url(a1_range: str, suffix: str = "") -> str:
    """Return the ``values`` endpoint URL for *a1_range* on the mirror sheet."""
    if not settings.GOOGLE_SPREADSHEET_ID:
        raise MirrorError("Google spreadsheet id is not configured")
    full_range = f"{settings.GOOGLE_SHEET_NAME}!{a1_range}"
    return (
        f"{SHEETS_API_BASE}/{settings.GOOGLE_SPREADSHEET_ID}"
        f"/values/{quote(full_range, safe='!:')}{suffix}"
    )


async def _request(
    method: str,
    url: str,
    *,
    params: dict[str, str] | None = None,
    json: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Send an authenticated Sheets API request and return the JSON body."""
    token = await get_access_token()
    try:
        async with httpx.AsyncClient(timeout=settings.SHEETS_TIMEOUT_SECONDS) as client:
            response = await client.request(
                method,
                url,
                params=params,
                json=json,
                headers={"Authorization": f"Bearer {token}"},
            )
            response.raise_for_status()
            return response.json()
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
        raise MirrorError(
            f"Google Sheets {method} failed ({type(exc).__name__}): {exc}"
        ) from exc


def find_row_index(column_values: list[list[Any]], uid: str) -> int | None:
    """Return the 1-based sheet row whose first cell equals *uid*.

    Rows are scanned top to bottom and the first match wins.  Indexing is
    absolute, so a header row occupies row 1 and never matches a uid.
    """
    for i, row in enumerate(column_values):
        if row and row[0] == uid:
            return i + 1
    return None


# ---------------------------------------------------------------------------
# Mirror writes
# ---------------------------------------------------------------------------

async def append_user_row(row: SheetRow) -> None:
    """Append a registration row to the mirror sheet."""
    await _request(
        "POST",
        _values_url(ROW_RANGE_COLUMNS, ":append"),
        params={"valueInputOption": SHEETS_VALUE_INPUT_OPTION},
        json={"values": [row.to_values()]},
    )
    logger.info("sheet_row_appended", extra={"uid": row.uid})


async def update_checkin_timestamp(uid: str, timestamp: str) -> int:
    """Write *timestamp* into the check-in cell of *uid*'s row.

    Returns the 1-based row index that was updated.  Raises ``RowNotFound``
    when no row carries *uid*; no row is created in that case.
    """
    column = await _request("GET", _values_url(f"{UID_COLUMN}:{UID_COLUMN}"))
    row_index = find_row_index(column.get("values", []), uid)
    if row_index is None:
        raise RowNotFound(uid)

    await _request(
        "PUT",
        _values_url(f"{CHECKIN_COLUMN}{row_index}"),
        params={"valueInputOption": SHEETS_VALUE_INPUT_OPTION},
        json={"values": [[timestamp]]},
    )
    logger.info("sheet_checkin_updated", extra={"uid": uid, "row": row_index})
    return row_index
