"""Enum types shared by models and services."""

from enum import Enum


class MirrorStatus(str, Enum):
    """Outcome of a best-effort spreadsheet mirror write."""
    synced = "synced"
    failed = "failed"
    skipped = "skipped"


class MirrorOperation(str, Enum):
    """Spreadsheet mirror write kinds."""
    append_row = "append_row"
    update_checkin = "update_checkin"
