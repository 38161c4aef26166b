"""
dirstream - CLI Interface.

A command-line host for the streaming directory scanner. It lists the
immediate children of a directory (folders first, then by name) while the
scan streams its results in batches.

Usage Examples:
    # List a directory
    python -m dirstream scan /path/to/data

    # Stream scan events as JSON lines
    python -m dirstream scan /path/to/data --json

    # Smaller batches, more frequent progress updates
    python -m dirstream scan /path/to/data --batch-size 50 --progress-interval 100

    # Record the scan in a log file
    python -m dirstream scan /path/to/data --log-file scan.log --verbose
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from dirstream.orchestration import ScanOrchestrator
from dirstream.scanning import BATCH_SIZE, PROGRESS_INTERVAL, DirectoryScanError
from dirstream.ui import ScanTUI

__version__ = "0.1.0"

# Initialize Typer app
app = typer.Typer(
    name="dirstream",
    help="dirstream - Stream large directory listings in ordered batches.",
    add_completion=False,
    no_args_is_help=True,
)

# Rich console for consistent output formatting
console = Console()

# Diagnostics go to stderr when stdout carries JSON lines
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(f"dirstream v{__version__}")
        raise typer.Exit()


def validate_positive(value: int) -> int:
    """
    Validate that a count option is at least 1.

    Raises:
        typer.BadParameter: If value is zero or negative.
    """
    if value < 1:
        raise typer.BadParameter("Value must be at least 1")
    return value


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """dirstream - Stream large directory listings in ordered batches."""
    pass


@app.command()
def scan(
    path: str = typer.Argument(
        ...,
        help="Directory whose immediate entries are listed.",
        show_default=False,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Write scan events as JSON lines instead of a table.",
    ),
    batch_size: int = typer.Option(
        BATCH_SIZE,
        "--batch-size",
        "-b",
        help="Maximum number of entries per batch.",
        callback=validate_positive,
    ),
    progress_interval: int = typer.Option(
        PROGRESS_INTERVAL,
        "--progress-interval",
        "-p",
        help="Entries processed between progress updates.",
        callback=validate_positive,
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        "-l",
        help="Path for log file output.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Show scan statistics after the listing.",
    ),
) -> None:
    """
    List the entries of a directory.

    Folders are listed before files and both are ordered by name. Entries
    are streamed in batches while the scan runs, so large directories
    start rendering without waiting for a single huge result.
    """
    tui = ScanTUI(console=err_console if json_output else console)

    try:
        orchestrator = ScanOrchestrator(
            root_path=path,
            batch_size=batch_size,
            progress_interval=progress_interval,
            log_file_path=log_file,
            json_output=json_output,
            verbose=verbose,
            tui=tui,
        )
        orchestrator.run()

    except KeyboardInterrupt:
        tui.console.print("\n[yellow]Scan interrupted by user.[/yellow]")
        raise typer.Exit(130)

    except DirectoryScanError as e:
        tui.display_error(str(e))
        raise typer.Exit(1)

    except ValueError as e:
        tui.display_error(str(e))
        raise typer.Exit(1)

    if log_file and not json_output and log_file.exists():
        console.print(f"[dim]Log written to: {log_file}[/dim]")


if __name__ == "__main__":
    app()
