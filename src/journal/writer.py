"""
Order journal: append-only JSON lines, one LogEntry per line.
"""

import json
import threading
from pathlib import Path

from order_core.contracts import LogEntry, LogLevel


class JsonlLogSink:
    """Append-only journal file. Each line is a JSON object: ts, level, message."""

    def __init__(self, path: str | Path, *, echo_stdout: bool = False) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._echo = echo_stdout
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def append(self, entry: LogEntry) -> None:
        line = json.dumps(entry.to_dict()) + "\n"
        with self._lock:
            with open(self._path, "a", encoding="utf-8") as f:
                f.write(line)
        if self._echo:
            print(line.rstrip())


def read_journal(
    path: str | Path,
    *,
    level: LogLevel | None = None,
    last: int | None = None,
) -> list[LogEntry]:
    """Read entries back in file order. Blank or corrupt lines are skipped."""
    journal_path = Path(path)
    if not journal_path.exists():
        return []
    entries: list[LogEntry] = []
    with open(journal_path, encoding="utf-8", errors="replace") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
                if not isinstance(record, dict):
                    continue
                entry = LogEntry.from_dict(record)
            except (json.JSONDecodeError, KeyError, TypeError, ValueError):
                continue
            if level is None or entry.level == level:
                entries.append(entry)
    if last is not None:
        entries = entries[-last:] if last > 0 else []
    return entries
