"""Best-effort runner for spreadsheet mirror writes.

The mirror is a convenience copy, never the system of record: any failed write
is logged for operators and reported as a ``MirrorResult`` with status
``failed``, and it never propagates into the caller's primary result.  Without
a session the write is not attempted at all.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from app.core.exceptions import MirrorError
from app.models.auth import Session
from app.models.enums import MirrorOperation, MirrorStatus
from app.models.mirror import MirrorResult

logger = logging.getLogger(__name__)


async def run_mirror_write(
    operation: MirrorOperation,
    session: Session | None,
    uid: str,
    write: Callable[[], Awaitable[Any]],
) -> MirrorResult:
    """Run *write* once and capture its outcome.

    Parameters
    ----------
    operation:
        Which mirror write this is, for logging and the result.
    session:
        The caller's session; None skips the write as unauthorized.
    uid:
        User the row belongs to.
    write:
        Zero-argument coroutine factory performing the write.
    """
    if session is None:
        logger.warning(
            "mirror_sync_skipped",
            extra={"operation": operation.value, "uid": uid, "reason": "unauthorized"},
        )
        return MirrorResult(
            operation=operation, status=MirrorStatus.skipped, error="unauthorized"
        )

    try:
        await write()
    except MirrorError as exc:
        logger.warning(
            "mirror_sync_failed",
            extra={
                "operation": operation.value,
                "uid": uid,
                "error_type": type(exc).__name__,
                "error_message": exc.message,
            },
        )
        return MirrorResult(
            operation=operation, status=MirrorStatus.failed, error=exc.message
        )
    except Exception as exc:
        logger.error(
            "mirror_sync_failed",
            extra={
                "operation": operation.value,
                "uid": uid,
                "error_type": type(exc).__name__,
                "error_message": str(exc),
            },
            exc_info=True,
        )
        return MirrorResult(
            operation=operation,
            status=MirrorStatus.failed,
            error=f"{type(exc).__name__}: {exc}",
        )

    return MirrorResult(operation=operation, status=MirrorStatus.synced)
