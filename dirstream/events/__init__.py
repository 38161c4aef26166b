"""Event sink package for dirstream.

Sinks receive the three events a scan emits (progress, batch, complete):

- EventSink: Abstract base class every sink derives from.
- CallbackSink: Forwards (event_name, payload) pairs to a callable.
- CollectingSink: Keeps all events in memory.
- JsonLinesSink: Writes events as JSON lines to a text stream.
- TeeSink: Fans events out to several sinks.
"""

from .sinks import CallbackSink, CollectingSink, EventSink, JsonLinesSink, TeeSink

__all__ = ["EventSink", "CallbackSink", "CollectingSink", "JsonLinesSink", "TeeSink"]
