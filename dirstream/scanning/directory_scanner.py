"""Directory scanning with batched, ordered event delivery.

This module provides the DirectoryScanner class, which lists the immediate
children of one directory, collects their metadata, sorts them, and streams
the result to an event sink in bounded batches.

Example:
    >>> from dirstream.events import CollectingSink
    >>> from dirstream.scanning import DirectoryScanner
    >>> sink = CollectingSink()
    >>> summary = DirectoryScanner().scan("/data", sink)
    >>> print(f"{summary.total_entries} entries in {summary.batches_emitted} batches")
"""

import logging
import os
import re
import time
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Sequence, Tuple, TypeVar, Union

from dirstream.events import EventSink
from dirstream.models import DirectoryEntryRecord, ScanSummary

from .errors import (
    MetadataError,
    PathAccessError,
    PathNotADirectoryError,
    ScanError,
    SinkError,
)

# Configure module logger
logger = logging.getLogger(__name__)

# Entries processed between two progress events
PROGRESS_INTERVAL = 250

# Maximum number of records carried by one batch event
BATCH_SIZE = 250

T = TypeVar("T")

_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def decode_entry_name(name: str) -> str:
    """Return a valid text form of an entry name.

    Names that were not valid in the filesystem encoding come back from
    os.scandir with surrogate escapes. On POSIX each undecodable byte is
    replaced with U+FFFD. On Windows the names are UTF-16, and each unpaired
    surrogate is replaced with a single U+FFFD.
    """
    try:
        name.encode("utf-8")
        return name
    except UnicodeEncodeError:
        if os.name == "nt":
            return _LONE_SURROGATE.sub("\ufffd", name)
        return os.fsencode(name).decode("utf-8", errors="replace")


def sort_entries(records: Iterable[DirectoryEntryRecord]) -> List[DirectoryEntryRecord]:
    """Sort records with directories first, then by name.

    Names are compared by code point, without locale or case folding.
    """
    return sorted(records, key=lambda record: (not record.is_directory, record.name))


def iter_batches(items: Sequence[T], batch_size: int) -> Iterator[Tuple[T, ...]]:
    """Split a sequence into contiguous chunks of at most batch_size items."""
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")
    for start in range(0, len(items), batch_size):
        yield tuple(items[start:start + batch_size])


class DirectoryScanner:
    """Scans the immediate children of a directory and streams them to a sink.

    A scan runs in one linear pass: resolve and validate the root, list it
    once, stat every entry, sort the collected records, then emit batches
    followed by a single completion event. Progress events are emitted while
    entries are being collected.

    Any failure aborts the scan with a DirectoryScanError subclass. Once a
    scan has aborted no batch or completion event is emitted, although
    progress events sent before the failure are not retracted.

    Attributes:
        progress_interval: Entries processed between two progress events.
        batch_size: Maximum number of records per batch event.

    Example:
        >>> scanner = DirectoryScanner(batch_size=100)
        >>> summary = scanner.scan(Path("/data/photos"), sink)
        >>> print(f"{summary.directory_count} folders, {summary.file_count} files")
    """

    def __init__(
        self,
        progress_interval: int = PROGRESS_INTERVAL,
        batch_size: int = BATCH_SIZE,
    ) -> None:
        """Initialize the DirectoryScanner.

        Args:
            progress_interval: Entries processed between progress events.
                Defaults to PROGRESS_INTERVAL (250).
            batch_size: Maximum records per batch event. Defaults to
                BATCH_SIZE (250).

        Raises:
            ValueError: If either value is not a positive integer.
        """
        if isinstance(progress_interval, bool) or not isinstance(progress_interval, int) \
                or progress_interval < 1:
            raise ValueError(
                f"progress_interval must be a positive integer, got {progress_interval!r}"
            )
        if isinstance(batch_size, bool) or not isinstance(batch_size, int) or batch_size < 1:
            raise ValueError(f"batch_size must be a positive integer, got {batch_size!r}")

        self.progress_interval = progress_interval
        self.batch_size = batch_size

    def scan(self, root_path: Union[str, Path], sink: EventSink) -> ScanSummary:
        """Scan a directory and deliver its entries to the sink.

        Args:
            root_path: Path of the directory to scan.
            sink: Receiver of the progress, batch, and completion events.

        Returns:
            ScanSummary describing what was emitted.

        Raises:
            PathAccessError: If the root path cannot be resolved.
            PathNotADirectoryError: If the root path is not a directory.
            ScanError: If listing the directory fails.
            MetadataError: If the metadata of any entry cannot be read.
            SinkError: If delivering any event fails.
        """
        start_time = time.perf_counter()
        root = self._resolve_root(root_path)

        records, progress_events = self._collect_records(root, sink)
        ordered = sort_entries(records)
        logger.debug(f"Collected {len(ordered)} entries from {root}")

        batches_emitted = 0
        for batch in iter_batches(ordered, self.batch_size):
            self._dispatch(sink.batch, batch, "Batch dispatch failed")
            batches_emitted += 1

        self._dispatch(sink.complete, len(ordered), "Completion dispatch failed")

        directory_count = sum(1 for record in ordered if record.is_directory)
        return ScanSummary(
            root=root,
            total_entries=len(ordered),
            directory_count=directory_count,
            file_count=len(ordered) - directory_count,
            batches_emitted=batches_emitted,
            progress_events=progress_events,
            duration_seconds=time.perf_counter() - start_time,
        )

    def _resolve_root(self, root_path: Union[str, Path]) -> Path:
        """Canonicalize the root path and check that it is a directory."""
        if not os.fspath(root_path):
            raise PathAccessError("Unable to access directory: empty path")

        try:
            root = Path(root_path).resolve(strict=True)
        except (OSError, RuntimeError, ValueError) as e:
            raise PathAccessError(f"Unable to access directory: {e}") from e

        if not root.is_dir():
            raise PathNotADirectoryError("Selected path is not a directory.")

        return root

    def _collect_records(
        self, root: Path, sink: EventSink
    ) -> Tuple[List[DirectoryEntryRecord], int]:
        """Read every entry of root, emitting progress along the way.

        Returns:
            Tuple of (records in listing order, number of progress events sent).
        """
        try:
            listing = os.scandir(root)
        except OSError as e:
            raise ScanError(f"Unable to read directory: {e}") from e

        records: List[DirectoryEntryRecord] = []
        progress_events = 0

        with listing:
            entries = iter(listing)
            while True:
                try:
                    entry = next(entries)
                except StopIteration:
                    break
                except OSError as e:
                    raise ScanError(f"Scan failed: {e}") from e

                try:
                    stat_result = entry.stat(follow_symlinks=False)
                except OSError as e:
                    logger.warning(f"Could not read metadata: {entry.name!r}")
                    raise MetadataError(f"Metadata error: {e}") from e

                records.append(
                    DirectoryEntryRecord.from_stat(decode_entry_name(entry.name), stat_result)
                )

                if len(records) % self.progress_interval == 0:
                    self._dispatch(sink.progress, len(records), "Progress update failed")
                    progress_events += 1

        return records, progress_events

    @staticmethod
    def _dispatch(send: Callable[[T], None], payload: T, failure: str) -> None:
        """Send one event, converting any delivery failure into a SinkError."""
        try:
            send(payload)
        except Exception as e:
            logger.warning(f"{failure}: {e}")
            raise SinkError(f"{failure}: {e}") from e
