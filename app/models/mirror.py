"""Result of a best-effort mirror write.

Workflows return a ``MirrorResult`` next to their primary result so that a
mirror failure is visible to callers without ever failing the workflow.
"""

from pydantic import BaseModel

from app.models.enums import MirrorOperation, MirrorStatus


class MirrorResult(BaseModel):
    operation: MirrorOperation
    status: MirrorStatus
    error: str | None = None
