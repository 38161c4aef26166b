"""dirstream - Streaming Directory Scanner.

A Python library and command-line tool that lists the immediate children of
a directory, orders them deterministically (folders first, then by name),
and streams them to a consumer in bounded batches with periodic progress
notifications.
"""

__version__ = "0.1.0"

from .models import (
    DirectoryEntryRecord,
    EventKind,
    ScanEvent,
    ScanSummary,
)
from .service import scan_directory, scan_directory_result

__all__ = [
    "__version__",
    "DirectoryEntryRecord",
    "EventKind",
    "ScanEvent",
    "ScanSummary",
    "scan_directory",
    "scan_directory_result",
]
