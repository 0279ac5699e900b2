"""
Order event trail: log sink protocol plus in-memory, fan-out and JSON-lines sinks.
"""

from journal.sink import FanOutLogSink, InMemoryLogSink, LogSink
from journal.writer import JsonlLogSink, read_journal

__all__ = [
    "FanOutLogSink",
    "InMemoryLogSink",
    "JsonlLogSink",
    "LogSink",
    "read_journal",
]
