"""
Log sinks: where the order event trail goes.

Every sink appends one whole LogEntry per call under a lock, so concurrent
submissions never interleave partial records and a single caller's entries
keep their emission order.
"""

from __future__ import annotations

import threading
from typing import Iterable, Protocol

from order_core.contracts import LogEntry, LogLevel


class LogSink(Protocol):
    """Anything that accepts LogEntry records."""

    def append(self, entry: LogEntry) -> None:
        ...


class InMemoryLogSink:
    """Ordered in-process event trail. Unbounded; retention is the host's call."""

    def __init__(self) -> None:
        self._entries: list[LogEntry] = []
        self._lock = threading.Lock()

    def append(self, entry: LogEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    def entries(self, level: LogLevel | None = None) -> list[LogEntry]:
        """Snapshot of entries in emission order, optionally filtered by level."""
        with self._lock:
            snapshot = list(self._entries)
        if level is None:
            return snapshot
        return [e for e in snapshot if e.level == level]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class FanOutLogSink:
    """Forward each entry to several sinks, in the order given.

    Holds no lock of its own: each child serializes its own appends, so a slow
    child (webhook POST) never stalls callers writing to the others.
    """

    def __init__(self, sinks: Iterable[LogSink]) -> None:
        self._sinks = list(sinks)

    def append(self, entry: LogEntry) -> None:
        for sink in self._sinks:
            sink.append(entry)
