"""Directory scanning package for dirstream.

This package contains the scan-and-stream pipeline:

- DirectoryScanner: Lists the immediate children of a directory, sorts them
  (directories first, then by name), and streams them to an event sink in
  batches with periodic progress events.
- The DirectoryScanError hierarchy raised when a scan aborts.

Example:
    >>> from dirstream.events import CollectingSink
    >>> from dirstream.scanning import DirectoryScanner
    >>>
    >>> sink = CollectingSink()
    >>> DirectoryScanner().scan("/data", sink)
    >>> names = [record.name for record in sink.records()]
"""

from .directory_scanner import (
    BATCH_SIZE,
    PROGRESS_INTERVAL,
    DirectoryScanner,
    decode_entry_name,
    iter_batches,
    sort_entries,
)
from .errors import (
    DirectoryScanError,
    MetadataError,
    PathAccessError,
    PathNotADirectoryError,
    ScanError,
    ScanTaskError,
    SinkError,
)

__all__ = [
    "BATCH_SIZE",
    "PROGRESS_INTERVAL",
    "DirectoryScanner",
    "decode_entry_name",
    "iter_batches",
    "sort_entries",
    "DirectoryScanError",
    "MetadataError",
    "PathAccessError",
    "PathNotADirectoryError",
    "ScanError",
    "ScanTaskError",
    "SinkError",
]
