"""
Models package for the directory streaming scanner.

This package provides convenient imports for all data models:
- EventKind: Enum naming the progress, batch, and completion events
- DirectoryEntryRecord: Per-entry metadata
- ScanEvent: One message delivered to an event sink
- ScanSummary: Aggregate result of a successful scan
"""

from .event_kind import EventKind
from .data_models import (
    BYTES_PER_KILOBYTE,
    DirectoryEntryRecord,
    ScanEvent,
    ScanSummary,
)

__all__ = [
    "BYTES_PER_KILOBYTE",
    "EventKind",
    "DirectoryEntryRecord",
    "ScanEvent",
    "ScanSummary",
]
