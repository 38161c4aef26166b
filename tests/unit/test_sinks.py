"""Unit tests for the event sinks in dirstream.events."""

import io
import json
from typing import List, Tuple

import pytest

from dirstream.events import CallbackSink, CollectingSink, EventSink, JsonLinesSink, TeeSink
from dirstream.models import DirectoryEntryRecord, EventKind, ScanEvent

RECORDS = [
    DirectoryEntryRecord("docs", True),
    DirectoryEntryRecord("a.txt", False, 0.5),
]


@pytest.mark.unit
class TestEventSinkBase:
    """Tests for the convenience methods of EventSink."""

    def test_cannot_instantiate_abstract_sink(self):
        with pytest.raises(TypeError):
            EventSink()

    def test_helpers_build_events(self, collecting_sink: CollectingSink):
        collecting_sink.progress(250)
        collecting_sink.batch(iter(RECORDS))
        collecting_sink.complete(2)

        events = collecting_sink.events
        assert events[0] == ScanEvent(EventKind.PROGRESS, 250)
        assert events[1] == ScanEvent(EventKind.BATCH, tuple(RECORDS))
        assert events[2] == ScanEvent(EventKind.COMPLETE, 2)


@pytest.mark.unit
class TestCollectingSink:
    """Tests for CollectingSink accessors."""

    def test_empty_sink(self, collecting_sink: CollectingSink):
        assert collecting_sink.events == []
        assert collecting_sink.records() == []
        assert collecting_sink.completed_total is None

    def test_accessors(self, collecting_sink: CollectingSink):
        collecting_sink.progress(1)
        collecting_sink.progress(2)
        collecting_sink.batch(RECORDS[:1])
        collecting_sink.batch(RECORDS[1:])
        collecting_sink.complete(2)

        assert collecting_sink.kinds() == [
            EventKind.PROGRESS,
            EventKind.PROGRESS,
            EventKind.BATCH,
            EventKind.BATCH,
            EventKind.COMPLETE,
        ]
        assert collecting_sink.progress_values() == [1, 2]
        assert collecting_sink.batches() == [RECORDS[:1], RECORDS[1:]]
        assert collecting_sink.records() == RECORDS
        assert collecting_sink.completed_total == 2

    def test_events_returns_copy(self, collecting_sink: CollectingSink):
        collecting_sink.complete(0)
        collecting_sink.events.clear()
        assert len(collecting_sink.events) == 1


@pytest.mark.unit
class TestCallbackSink:
    """Tests for CallbackSink."""

    def test_forwards_name_and_wire_payload(self):
        calls: List[Tuple[str, object]] = []
        sink = CallbackSink(lambda name, payload: calls.append((name, payload)))

        sink.progress(250)
        sink.batch(RECORDS)
        sink.complete(2)

        assert calls == [
            ("scan_progress", 250),
            (
                "scan_batch",
                [
                    {"name": "docs", "is_dir": True, "size_kb": 0.0},
                    {"name": "a.txt", "is_dir": False, "size_kb": 0.5},
                ],
            ),
            ("scan_complete", 2),
        ]

    def test_callback_errors_propagate(self):
        def broken(name: str, payload: object) -> None:
            raise RuntimeError("window closed")

        sink = CallbackSink(broken)
        with pytest.raises(RuntimeError, match="window closed"):
            sink.complete(0)


@pytest.mark.unit
class TestJsonLinesSink:
    """Tests for JsonLinesSink."""

    def test_writes_one_object_per_line(self):
        stream = io.StringIO()
        sink = JsonLinesSink(stream)

        sink.batch(RECORDS)
        sink.complete(2)

        lines = stream.getvalue().splitlines()
        assert len(lines) == 2
        assert json.loads(lines[0]) == {
            "event": "scan_batch",
            "payload": [
                {"name": "docs", "is_dir": True, "size_kb": 0.0},
                {"name": "a.txt", "is_dir": False, "size_kb": 0.5},
            ],
        }
        assert json.loads(lines[1]) == {"event": "scan_complete", "payload": 2}

    def test_defaults_to_stdout(self, capsys: pytest.CaptureFixture):
        JsonLinesSink().progress(500)

        captured = capsys.readouterr()
        assert json.loads(captured.out) == {"event": "scan_progress", "payload": 500}


@pytest.mark.unit
class TestTeeSink:
    """Tests for TeeSink."""

    def test_requires_a_sink(self):
        with pytest.raises(ValueError):
            TeeSink()

    def test_fans_out_in_order(self):
        first = CollectingSink()
        second = CollectingSink()
        tee = TeeSink(first, second)

        tee.progress(250)
        tee.complete(250)

        assert first.events == second.events
        assert first.kinds() == [EventKind.PROGRESS, EventKind.COMPLETE]

    def test_failure_stops_delivery(self):
        class Broken(EventSink):
            def emit(self, event: ScanEvent) -> None:
                raise OSError("pipe closed")

        later = CollectingSink()
        tee = TeeSink(Broken(), later)

        with pytest.raises(OSError):
            tee.complete(0)
        assert later.events == []
