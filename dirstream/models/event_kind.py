"""
EventKind enum for the three messages a directory scan emits.

A successful scan emits, in this order:
1. Progress (zero or more) - cumulative count of entries processed so far
2. Batch (zero or more) - a sorted chunk of directory entry records
3. Complete (exactly one) - total number of records
"""

from enum import Enum


class EventKind(Enum):
    """Names of the events delivered to an event sink during a scan."""
    PROGRESS = "scan_progress"   # Payload: cumulative processed count
    BATCH = "scan_batch"         # Payload: ordered chunk of records
    COMPLETE = "scan_complete"   # Payload: total record count
