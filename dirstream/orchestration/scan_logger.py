"""ScanLogger for writing scan runs to a structured log file.

This module provides the ScanLogger class. It writes a header, the scan
parameters, one line per emitted event, and a closing summary. ScanLogger is
itself an EventSink, so it can be attached to a scan next to other sinks
with TeeSink.
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO, Union

from dirstream.events import EventSink
from dirstream.models import EventKind, ScanEvent, ScanSummary


class ScanLogger(EventSink):
    """Logger for scan runs with a structured output format.

    Generates log files with sections for header, scan phase, events, and
    summary.

    Usage:
        with ScanLogger() as logger:
            logger.log_header()
            logger.log_scan_phase(root, batch_size, progress_interval)
            summary = scanner.scan(root, TeeSink(display_sink, logger))
            logger.log_summary(summary)

    Attributes:
        SEPARATOR: The 65-character separator line used between sections.
    """

    SEPARATOR = "=" * 65

    def __init__(self, log_file_path: Optional[Path] = None) -> None:
        """Initialize the ScanLogger.

        Args:
            log_file_path: Optional path for the log file. If not provided,
                generates a timestamped filename in the current directory.

        Raises:
            OSError: If the log file path is not writable.
        """
        self._start_timestamp = datetime.now()
        self._file_handle: Optional[TextIO] = None
        self._batch_counter = 0
        self._events_started = False

        if log_file_path is None:
            timestamp_str = self._start_timestamp.strftime("%Y-%m-%d_%H-%M-%S")
            self._log_file_path = Path.cwd() / f"scan_log_{timestamp_str}.log"
        else:
            self._log_file_path = Path(log_file_path)

        self._validate_path()

    def _validate_path(self) -> None:
        """Validate that the log file path is writable.

        Raises:
            OSError: If the parent directory doesn't exist or is not writable.
        """
        parent = self._log_file_path.parent
        if not parent.exists():
            raise OSError(f"Parent directory does not exist: {parent}")
        if not parent.is_dir():
            raise OSError(f"Parent path is not a directory: {parent}")
        try:
            test_file = parent / f".dirstream_test_{id(self)}"
            test_file.touch()
            test_file.unlink()
        except PermissionError:
            raise OSError(f"Permission denied: cannot write to {parent}")

    def __enter__(self) -> "ScanLogger":
        """Open the log file for writing.

        Raises:
            OSError: If the file cannot be opened for writing.
        """
        try:
            self._file_handle = open(self._log_file_path, "w", encoding="utf-8")
        except OSError as e:
            raise OSError(f"Cannot open log file for writing: {e}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close the log file, even if an exception occurred."""
        if self._file_handle is not None:
            try:
                self._file_handle.close()
            except OSError as e:
                print(f"Warning: Error closing log file: {e}", file=sys.stderr)
            finally:
                self._file_handle = None

    def get_log_path(self) -> Path:
        """Get the path to the log file."""
        return self._log_file_path

    def log_header(self) -> None:
        """Write the title and start timestamp."""
        self._write_separator()
        self._write_line("dirstream - Scan Log")
        self._write_separator()
        self._write_line(f"Timestamp: {self._format_timestamp(self._start_timestamp)}")
        self._write_line("")

    def log_scan_phase(
        self, root: Union[str, Path], batch_size: int, progress_interval: int
    ) -> None:
        """Write the scan parameters.

        Args:
            root: Directory being scanned, as given by the caller.
            batch_size: Maximum records per batch event.
            progress_interval: Entries between progress events.
        """
        self._write_separator()
        self._write_line("SCAN PHASE")
        self._write_separator()
        self._write_line(f"Root: {root}")
        self._write_line(f"Batch size: {batch_size}")
        self._write_line(f"Progress interval: {progress_interval}")
        self._write_line("")

    def emit(self, event: ScanEvent) -> None:
        """Write one line for a scan event."""
        if not self._events_started:
            self._write_line("Events:")
            self._events_started = True

        timestamp = self._format_timestamp(datetime.now())
        if event.kind is EventKind.PROGRESS:
            self._write_line(f"[{timestamp}] Progress: {event.payload:,} entries", indent=2)
        elif event.kind is EventKind.BATCH:
            self._batch_counter += 1
            self._write_line(
                f"[{timestamp}] Batch {self._batch_counter}: {len(event.payload)} entries",
                indent=2,
            )
        else:
            self._write_line(f"[{timestamp}] Complete: {event.payload:,} entries", indent=2)

    def log_error(self, message: str) -> None:
        """Write the error that aborted the scan."""
        self._write_line("")
        self._write_separator()
        self._write_line("SCAN FAILED")
        self._write_separator()
        self._write_line(f"Error: {message}")
        self._write_line(f"Batches written before failure: {self._batch_counter}")
        self._write_line("")

    def log_summary(self, summary: ScanSummary) -> None:
        """Write the summary section.

        Args:
            summary: The ScanSummary returned by the scanner.
        """
        self._write_line("")
        self._write_separator()
        self._write_line("SUMMARY")
        self._write_separator()
        self._write_line(f"Directory: {summary.root}")
        self._write_line(f"Total entries: {summary.total_entries:,}")
        self._write_line(f"Directories: {summary.directory_count:,}")
        self._write_line(f"Files: {summary.file_count:,}")
        self._write_line(f"Batches: {summary.batches_emitted}")
        self._write_line(f"Progress updates: {summary.progress_events}")
        self._write_line(f"Duration: {self._format_duration(summary.duration_seconds)}")
        self._write_line("")
        self._write_line(f"Log file: {self._log_file_path}")
        self._write_separator()

    def _format_duration(self, seconds: float) -> str:
        """Format duration in human-readable format.

        Returns:
            Formatted string like "250ms", "45s", "5m 23s" or "1h 5m 30s".
        """
        if seconds < 1:
            return f"{int(seconds * 1000)}ms"

        total_seconds = int(seconds)

        if total_seconds < 60:
            return f"{total_seconds}s"

        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        secs = total_seconds % 60

        if hours > 0:
            return f"{hours}h {minutes}m {secs}s"
        else:
            return f"{minutes}m {secs}s"

    def _format_timestamp(self, dt: datetime) -> str:
        """Format a datetime as 'YYYY-MM-DD HH:MM:SS'."""
        return dt.strftime("%Y-%m-%d %H:%M:%S")

    def _write_separator(self) -> None:
        self._write_line(self.SEPARATOR)

    def _write_line(self, text: str, indent: int = 0) -> None:
        """Write a line to the log file with optional indentation.

        Args:
            text: The text to write.
            indent: Number of spaces to indent the line.
        """
        if self._file_handle is None:
            print(
                f"Warning: Attempted to write to closed log file: {text}",
                file=sys.stderr,
            )
            return

        try:
            indented_text = " " * indent + text
            self._file_handle.write(indented_text + "\n")
        except OSError as e:
            print(f"Warning: Error writing to log file: {e}", file=sys.stderr)
