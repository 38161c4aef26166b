"""Event sinks that receive the messages of a directory scan.

A sink is the only channel through which scan results leave the scanner.
The scanner calls progress(), batch() and complete(); each of these builds a
ScanEvent and hands it to emit(). Any exception raised by emit() is treated
by the scanner as a delivery failure and aborts the scan.

Example:
    >>> from dirstream.events import CollectingSink
    >>> from dirstream.scanning import DirectoryScanner
    >>> sink = CollectingSink()
    >>> DirectoryScanner().scan("/data", sink)
    >>> print(f"{len(sink.records())} entries")
"""

import json
import sys
from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Optional, TextIO

from dirstream.models import DirectoryEntryRecord, EventKind, ScanEvent


class EventSink(ABC):
    """Abstract receiver of progress, batch, and completion events."""

    @abstractmethod
    def emit(self, event: ScanEvent) -> None:
        """Deliver a single event.

        Args:
            event: The event to deliver.

        Raises:
            Exception: Any exception signals that delivery failed.
        """

    def progress(self, processed: int) -> None:
        """Emit a progress event carrying the cumulative processed count."""
        self.emit(ScanEvent(kind=EventKind.PROGRESS, payload=processed))

    def batch(self, records: Iterable[DirectoryEntryRecord]) -> None:
        """Emit a batch event carrying an ordered chunk of records."""
        self.emit(ScanEvent(kind=EventKind.BATCH, payload=tuple(records)))

    def complete(self, total: int) -> None:
        """Emit the completion event carrying the total record count."""
        self.emit(ScanEvent(kind=EventKind.COMPLETE, payload=total))


class CallbackSink(EventSink):
    """Forwards each event to a callable as (event_name, payload).

    The payload is the wire form of the event, so the callable can pass it
    straight to a transport that serialises JSON.
    """

    def __init__(self, callback: Callable[[str, object], None]) -> None:
        self._callback = callback

    def emit(self, event: ScanEvent) -> None:
        self._callback(event.name, event.to_payload())


class CollectingSink(EventSink):
    """Keeps every event it receives, in order.

    Useful for callers that want the complete result in memory and for tests
    that check the emitted event sequence.
    """

    def __init__(self) -> None:
        self._events: List[ScanEvent] = []

    def emit(self, event: ScanEvent) -> None:
        self._events.append(event)

    @property
    def events(self) -> List[ScanEvent]:
        """All received events, oldest first."""
        return list(self._events)

    def kinds(self) -> List[EventKind]:
        """Kinds of the received events, oldest first."""
        return [event.kind for event in self._events]

    def progress_values(self) -> List[int]:
        """Payloads of the progress events."""
        return [e.payload for e in self._events if e.kind is EventKind.PROGRESS]

    def batches(self) -> List[List[DirectoryEntryRecord]]:
        """Payloads of the batch events, each as a list of records."""
        return [list(e.payload) for e in self._events if e.kind is EventKind.BATCH]

    def records(self) -> List[DirectoryEntryRecord]:
        """All batch payloads concatenated in emission order."""
        return [record for batch in self.batches() for record in batch]

    @property
    def completed_total(self) -> Optional[int]:
        """Payload of the completion event, or None if none was received."""
        for event in self._events:
            if event.kind is EventKind.COMPLETE:
                return event.payload
        return None


class JsonLinesSink(EventSink):
    """Writes each event as one JSON object per line.

    Each line has the form {"event": "<name>", "payload": <payload>}, with
    batch payloads serialised as lists of {name, is_dir, size_kb} objects.

    Args:
        stream: Text stream to write to. Defaults to the current sys.stdout,
            looked up at write time.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    def emit(self, event: ScanEvent) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        line = json.dumps({"event": event.name, "payload": event.to_payload()})
        stream.write(line + "\n")
        stream.flush()


class TeeSink(EventSink):
    """Delivers every event to several sinks, in the order given."""

    def __init__(self, *sinks: EventSink) -> None:
        if not sinks:
            raise ValueError("TeeSink requires at least one sink")
        self._sinks = sinks

    def emit(self, event: ScanEvent) -> None:
        for sink in self._sinks:
            sink.emit(event)
