"""ScanOrchestrator for running a complete scan from the command line.

This module provides the ScanOrchestrator class that wires DirectoryScanner,
the event sinks, ScanLogger, and ScanTUI together and drives the
asynchronous scan entry point.

Example:
    from dirstream.orchestration import ScanOrchestrator
    from pathlib import Path

    orchestrator = ScanOrchestrator(
        root_path=Path("/data/photos"),
        batch_size=500,
        log_file_path=Path("scan.log"),
    )
    summary = orchestrator.run()
"""

import asyncio
import os
from pathlib import Path
from typing import List, Optional, TextIO, Union

from dirstream.events import EventSink, JsonLinesSink, TeeSink
from dirstream.models import ScanSummary
from dirstream.orchestration.scan_logger import ScanLogger
from dirstream.scanning import (
    BATCH_SIZE,
    PROGRESS_INTERVAL,
    DirectoryScanError,
    DirectoryScanner,
)
from dirstream.service import scan_directory
from dirstream.ui import ScanTUI


class ScanOrchestrator:
    """Orchestrates a single directory scan for an interactive caller.

    Two output modes are supported:
    - Listing (default): a live status line while scanning, then a table of
      all entries and the scan metrics, rendered by ScanTUI.
    - JSON lines: every event is written to a text stream as it is emitted.

    In both modes the scan can additionally be recorded with ScanLogger.

    Attributes:
        root_path: Directory to scan, as given by the caller.
        batch_size: Maximum number of records per batch event.
        progress_interval: Entries processed between progress events.
        log_file_path: Optional path for the scan log file.
        json_output: Whether to stream events as JSON lines.
        verbose: Whether to display additional scan statistics.
    """

    def __init__(
        self,
        root_path: Union[str, Path],
        batch_size: int = BATCH_SIZE,
        progress_interval: int = PROGRESS_INTERVAL,
        log_file_path: Optional[Path] = None,
        json_output: bool = False,
        verbose: bool = False,
        tui: Optional[ScanTUI] = None,
        json_stream: Optional[TextIO] = None,
    ) -> None:
        """Initialize the ScanOrchestrator.

        Args:
            root_path: Directory to scan, passed to the scan unchanged. It is
                validated by the scan itself.
            batch_size: Maximum records per batch event. Defaults to 250.
            progress_interval: Entries between progress events. Defaults to 250.
            log_file_path: Optional path for the log file. No log is written
                when omitted.
            json_output: If True, write events as JSON lines instead of
                rendering the listing.
            verbose: If True, display scan statistics after the listing.
            tui: Optional ScanTUI; a new one is created when omitted.
            json_stream: Optional stream for JSON lines output. Defaults to
                sys.stdout.

        Raises:
            ValueError: If batch_size or progress_interval is not positive.
        """
        self.root_path = root_path
        self.batch_size = batch_size
        self.progress_interval = progress_interval
        self.log_file_path = log_file_path
        self.json_output = json_output
        self.verbose = verbose

        self._scanner = DirectoryScanner(
            progress_interval=progress_interval,
            batch_size=batch_size,
        )
        self._tui = tui or ScanTUI()
        self._json_stream = json_stream

    def run(self) -> ScanSummary:
        """Run the scan and display or stream its results.

        If the log file cannot be created, a warning is displayed and the
        scan proceeds without logging.

        Returns:
            ScanSummary of the completed scan.

        Raises:
            DirectoryScanError: If the scan fails. The failure is written to
                the log file first when logging is enabled.
        """
        if self.log_file_path is None:
            return self._execute(None)

        try:
            scan_logger = ScanLogger(self.log_file_path)
        except OSError as e:
            self._tui.display_warning(
                f"Cannot write log file: {e}. Continuing without logging."
            )
            return self._execute(None)

        with scan_logger:
            return self._execute(scan_logger)

    def _execute(self, scan_logger: Optional[ScanLogger]) -> ScanSummary:
        """Run the scan against the configured sinks."""
        sinks: List[EventSink] = []
        if self.json_output:
            sinks.append(JsonLinesSink(self._json_stream))
        else:
            sinks.append(self._tui)

        if scan_logger is not None:
            scan_logger.log_header()
            scan_logger.log_scan_phase(self.root_path, self.batch_size, self.progress_interval)
            sinks.append(scan_logger)

        sink = sinks[0] if len(sinks) == 1 else TeeSink(*sinks)

        try:
            if self.json_output:
                summary = self._scan(sink)
            else:
                with self._tui.scanning():
                    summary = self._scan(sink)
        except DirectoryScanError as e:
            if scan_logger is not None:
                scan_logger.log_error(str(e))
            raise

        if scan_logger is not None:
            scan_logger.log_summary(summary)

        if not self.json_output:
            self._tui.display_listing(summary, verbose=self.verbose)

        return summary

    def _scan(self, sink: EventSink) -> ScanSummary:
        return asyncio.run(scan_directory(os.fspath(self.root_path), sink, scanner=self._scanner))
