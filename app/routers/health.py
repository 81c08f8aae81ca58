"""Health check endpoint.

Returns service status including profile store connectivity and whether the
spreadsheet mirror is configured.
"""

import logging
from typing import Any

from fastapi import APIRouter
from starlette.responses import JSONResponse

from app.core.config import settings
from app.core.constants import PROFILES_TABLE
from app.db.supabase import get_supabase

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check() -> Any:
    """Return 200 when the profile store answers, 503 otherwise.

    The mirror is reported but never degrades the status: it is best-effort.
    """
    db_status = "disconnected"

    try:
        client = get_supabase()
        result = client.table(PROFILES_TABLE).select("id").limit(1).execute()
        if result is not None:
            db_status = "connected"
    except Exception:
        logger.warning("Health check: Supabase connection failed", exc_info=True)

    payload: dict[str, str] = {
        "status": "ok" if db_status == "connected" else "degraded",
        "database": db_status,
        "sheets_mirror": "configured" if settings.sheets_configured else "not_configured",
    }

    if db_status != "connected":
        return JSONResponse(status_code=503, content=payload)

    return payload
