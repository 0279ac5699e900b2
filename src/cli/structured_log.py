"""
Structured JSON log sink for container observability.

Emits one JSON object per line to stderr. Records are designed to be
parsed by log aggregators (Grafana Loki, CloudWatch, ELK).

Optional webhook: when configured, ERROR entries (precondition failures)
are POSTed to the URL.
"""

from __future__ import annotations

import json
import logging
import sys
import threading
import urllib.request
from typing import Any

from order_core.contracts import LogEntry, LogLevel

logger = logging.getLogger("orders.events")


class StreamLogSink:
    """Write LogEntry records as JSON lines to a stream, plus optional webhook."""

    def __init__(
        self,
        *,
        venue: str = "",
        enabled: bool = True,
        webhook_url: str = "",
        stream: Any = None,
    ) -> None:
        self._venue = venue
        self._enabled = enabled
        self._webhook_url = webhook_url.strip()
        self._stream = stream if stream is not None else sys.stderr
        self._lock = threading.Lock()
        self._ALERT_LEVELS = {LogLevel.ERROR}

    def append(self, entry: LogEntry) -> None:
        record = self.render(entry)
        if self._enabled:
            with self._lock:
                self._stream.write(json.dumps(record) + "\n")
                self._stream.flush()

        if self._webhook_url and entry.level in self._ALERT_LEVELS:
            self._post_webhook(record)

    def render(self, entry: LogEntry) -> dict:
        record = entry.to_dict()
        if self._venue:
            record["venue"] = self._venue
        return record

    def _post_webhook(self, record: dict) -> None:
        try:
            data = json.dumps(record).encode("utf-8")
            req = urllib.request.Request(
                self._webhook_url,
                data=data,
                headers={"Content-Type": "application/json"},
                method="POST",
            )
            urllib.request.urlopen(req, timeout=5)
        except Exception as exc:
            logger.warning("Webhook POST failed: %s", exc)
