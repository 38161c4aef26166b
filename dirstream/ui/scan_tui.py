"""Terminal User Interface for dirstream scans.

This module provides the ScanTUI class, a Rich-based view that plays the
role of the host application: it listens to scan events, shows a live
status while entries are being read, and renders the final listing.

Example:
    from dirstream.ui import ScanTUI

    tui = ScanTUI()
    with tui.scanning():
        summary = scanner.scan(path, tui)
    tui.display_listing(summary)
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TaskID, TextColumn
from rich.table import Table
from rich.text import Text

from dirstream.events import EventSink
from dirstream.models import DirectoryEntryRecord, EventKind, ScanEvent, ScanSummary


def format_size(record: DirectoryEntryRecord) -> str:
    """Return the display size of a record: 'Folder' or e.g. '12.5 KB'."""
    if record.is_directory:
        return "Folder"
    return f"{record.size_kilobytes:.1f} KB"


class ScanTUI(EventSink):
    """Rich-based display of a streaming directory scan.

    As a sink, ScanTUI appends every batch it receives to its listing and
    updates the live status line on progress events. Display methods render
    the collected listing and error messages.

    Args:
        console: Optional Rich Console instance for output. Pass a Console
            writing to a StringIO to capture output in tests.

    Attributes:
        console: The Rich Console instance used for all output.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()
        self._records: List[DirectoryEntryRecord] = []
        self._processed = 0
        self._progress: Optional[Progress] = None
        self._task_id: Optional[TaskID] = None

    @property
    def records(self) -> List[DirectoryEntryRecord]:
        """Records received so far, in emission order."""
        return list(self._records)

    @property
    def processed(self) -> int:
        """Last processed count reported by a progress or completion event."""
        return self._processed

    def reset(self) -> None:
        """Forget the results of a previous scan."""
        self._records = []
        self._processed = 0

    def emit(self, event: ScanEvent) -> None:
        if event.kind is EventKind.BATCH:
            self._records.extend(event.payload)
        else:
            # Progress and completion both carry a processed count
            self._processed = event.payload
            self._update_status()

    def status_label(self) -> str:
        """Return the live status text."""
        if self._processed:
            return f"Scanning {self._processed:,} items..."
        return "Scanning..."

    @contextmanager
    def scanning(self) -> Iterator[None]:
        """Show a transient spinner with the live status while a scan runs.

        Results of a previous scan are cleared on entry.

        Example:
            with tui.scanning():
                scanner.scan(path, tui)
        """
        self.reset()
        progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
            transient=True,
        )
        with progress:
            self._progress = progress
            self._task_id = progress.add_task(self.status_label(), total=None)
            try:
                yield
            finally:
                self._progress = None
                self._task_id = None

    def display_listing(self, summary: ScanSummary, verbose: bool = False) -> None:
        """Display the collected entries followed by the scan metrics.

        Args:
            summary: ScanSummary of the finished scan.
            verbose: If True, also show batch and progress statistics.
        """
        if self._records:
            table = Table(show_header=True, header_style="bold")
            table.add_column("Type", style="cyan", no_wrap=True)
            table.add_column("Name", style="white")
            table.add_column("Size", justify="right")

            for record in self._records:
                kind = "dir" if record.is_directory else "file"
                name_style = "bold blue" if record.is_directory else ""
                table.add_row(kind, Text(record.name, style=name_style), format_size(record))

            self.console.print(table)
        else:
            self.console.print("[yellow]No entries found in directory.[/yellow]")

        milliseconds = round(summary.duration_seconds * 1000)
        self.console.print(
            f"Scanned [bold]{summary.file_count:,}[/bold] files in "
            f"[bold]{milliseconds:,}[/bold] milliseconds."
        )
        self.console.print(f"[dim]Directory: {escape(str(summary.root))}[/dim]")

        if verbose:
            details = (
                f"Entries: {summary.total_entries:,}\n"
                f"Directories: {summary.directory_count:,}\n"
                f"Files: {summary.file_count:,}\n"
                f"Batches: {summary.batches_emitted}\n"
                f"Progress updates: {summary.progress_events}"
            )
            self.console.print(Panel(details, title="Scan Details", border_style="blue"))

    def display_error(self, message: str) -> None:
        """Display a scan failure message."""
        self.console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)

    def display_warning(self, message: str) -> None:
        """Display a non-fatal warning."""
        self.console.print(f"[yellow]Warning:[/yellow] {escape(message)}", soft_wrap=True)

    def _update_status(self) -> None:
        if self._progress is not None and self._task_id is not None:
            self._progress.update(self._task_id, description=self.status_label())
