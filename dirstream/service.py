"""Asynchronous entry point for directory scans.

Hosts call scan_directory() from their event loop. The blocking scan runs
on a worker thread, so slow directory reads never stall the caller, and
results reach the host only through the event sink.

Example:
    >>> import asyncio
    >>> from dirstream.events import CallbackSink
    >>> from dirstream.service import scan_directory_result
    >>> sink = CallbackSink(lambda name, payload: print(name))
    >>> error = asyncio.run(scan_directory_result("/data", sink))
    >>> if error is not None:
    ...     print(f"Scan failed: {error}")
"""

import asyncio
from typing import Optional

from dirstream.events import EventSink
from dirstream.models import ScanSummary
from dirstream.scanning import DirectoryScanError, DirectoryScanner, ScanTaskError


async def scan_directory(
    path: str,
    sink: EventSink,
    scanner: Optional[DirectoryScanner] = None,
) -> ScanSummary:
    """Scan a directory on a worker thread and await the outcome.

    Args:
        path: Path of the directory to scan.
        sink: Receiver of the scan events. It is called from the worker thread.
        scanner: Optional pre-configured DirectoryScanner. A scanner with the
            default batch size and progress interval is used when omitted.

    Returns:
        ScanSummary of the completed scan.

    Raises:
        DirectoryScanError: If the scan fails. Failures of the worker that are
            not scan errors are wrapped in ScanTaskError.
    """
    scanner = scanner if scanner is not None else DirectoryScanner()
    try:
        return await asyncio.to_thread(scanner.scan, path, sink)
    except DirectoryScanError:
        raise
    except Exception as e:
        raise ScanTaskError(f"Scan task failed: {e}") from e


async def scan_directory_result(
    path: str,
    sink: EventSink,
    scanner: Optional[DirectoryScanner] = None,
) -> Optional[str]:
    """Scan a directory and report failure as a message instead of raising.

    Returns:
        None on success, otherwise the human-readable error message.
    """
    try:
        await scan_directory(path, sink, scanner=scanner)
    except DirectoryScanError as e:
        return str(e)
    return None
