"""
Core data models for the directory streaming scanner.

This module contains the following dataclasses:
- DirectoryEntryRecord: Metadata for one immediate child of the scanned directory
- ScanEvent: A single message delivered to an event sink
- ScanSummary: Aggregate result of a successful scan
"""

import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Tuple, Union

from .event_kind import EventKind

# Size unit used for record sizes (KiB)
BYTES_PER_KILOBYTE = 1024


@dataclass(frozen=True)
class DirectoryEntryRecord:
    """Represents one directory entry with its name, type, and size."""
    name: str                         # Base name of the entry
    is_directory: bool                # Directory classification
    size_kilobytes: float = 0.0       # Size in KiB (always 0.0 for directories)

    def __post_init__(self) -> None:
        if self.is_directory and self.size_kilobytes != 0.0:
            raise ValueError(
                f"Directory record '{self.name}' must have size 0.0, "
                f"got {self.size_kilobytes}"
            )

    @classmethod
    def from_stat(cls, name: str, stat_result: os.stat_result) -> "DirectoryEntryRecord":
        """Build a record from an entry name and its stat result.

        Args:
            name: Base name of the entry.
            stat_result: Result of stat() for the entry.

        Returns:
            A DirectoryEntryRecord. Directories get a size of 0.0; every other
            entry type reports its byte length divided by 1024.
        """
        if stat.S_ISDIR(stat_result.st_mode):
            return cls(name=name, is_directory=True, size_kilobytes=0.0)
        return cls(
            name=name,
            is_directory=False,
            size_kilobytes=stat_result.st_size / BYTES_PER_KILOBYTE,
        )

    def to_payload(self) -> Dict[str, object]:
        """Return the wire form of the record."""
        return {
            "name": self.name,
            "is_dir": self.is_directory,
            "size_kb": self.size_kilobytes,
        }


EventPayload = Union[int, Tuple[DirectoryEntryRecord, ...]]


@dataclass(frozen=True)
class ScanEvent:
    """A single message emitted through an event sink."""
    kind: EventKind                   # Which of the three events this is
    payload: EventPayload             # Count for progress/complete, records for batch

    @property
    def name(self) -> str:
        """Wire name of the event (e.g. 'scan_batch')."""
        return self.kind.value

    def to_payload(self) -> object:
        """Return the JSON-serialisable payload of the event."""
        if self.kind is EventKind.BATCH:
            return [record.to_payload() for record in self.payload]
        return self.payload


@dataclass
class ScanSummary:
    """Summary of a successful scan returned by DirectoryScanner."""
    root: Path                        # Canonical path that was scanned
    total_entries: int = 0            # Records emitted across all batches
    directory_count: int = 0          # Records classified as directories
    file_count: int = 0               # Records classified as non-directories
    batches_emitted: int = 0          # Number of batch events sent
    progress_events: int = 0          # Number of progress events sent
    duration_seconds: float = 0.0     # Wall time of the scan
