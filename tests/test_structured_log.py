"""Tests for the structured JSON log sink."""

import io
import json
import logging
from datetime import datetime, timezone

import pytest

from cli.structured_log import StreamLogSink
from order_core import LogEntry, LogLevel


def _entry(level: LogLevel, message: str) -> LogEntry:
    return LogEntry(datetime(2026, 2, 17, 10, 0, 0, tzinfo=timezone.utc), level, message)


@pytest.fixture
def buf() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def sink(buf: io.StringIO) -> StreamLogSink:
    return StreamLogSink(venue="binance-futures-testnet", enabled=True, stream=buf)


class TestEmit:
    """Basic record emission and format."""

    def test_info_json(self, sink: StreamLogSink, buf: io.StringIO) -> None:
        sink.append(_entry(LogLevel.INFO, "Order placed. ID: 283746512"))
        record = json.loads(buf.getvalue().strip())
        assert record["level"] == "INFO"
        assert record["message"] == "Order placed. ID: 283746512"
        assert record["venue"] == "binance-futures-testnet"
        assert record["ts"] == "2026-02-17T10:00:00+00:00"

    def test_no_venue_field_when_unset(self, buf: io.StringIO) -> None:
        StreamLogSink(stream=buf).append(_entry(LogLevel.WARN, "x"))
        assert "venue" not in json.loads(buf.getvalue())


class TestDisabled:
    """When structured_logs=False, nothing is written to stream."""

    def test_no_output_when_disabled(self, buf: io.StringIO) -> None:
        sink = StreamLogSink(enabled=False, stream=buf)
        sink.append(_entry(LogLevel.INFO, "a"))
        sink.append(_entry(LogLevel.ERROR, "b"))
        assert buf.getvalue() == ""


class TestMultipleEntries:
    def test_newline_delimited(self, sink: StreamLogSink, buf: io.StringIO) -> None:
        sink.append(_entry(LogLevel.INFO, "first"))
        sink.append(_entry(LogLevel.WARN, "second"))
        lines = buf.getvalue().strip().split("\n")
        assert len(lines) == 2
        assert json.loads(lines[0])["message"] == "first"
        assert json.loads(lines[1])["level"] == "WARN"


class TestWebhook:
    def test_error_entries_are_posted(self, buf: io.StringIO, monkeypatch: pytest.MonkeyPatch) -> None:
        posted = []
        monkeypatch.setattr(
            "urllib.request.urlopen",
            lambda req, timeout=None: posted.append(json.loads(req.data)),
        )
        sink = StreamLogSink(webhook_url="http://hooks.example/alert", stream=buf)
        sink.append(_entry(LogLevel.INFO, "fine"))
        sink.append(_entry(LogLevel.ERROR, "No reference price available for SOLUSDT"))
        assert len(posted) == 1
        assert posted[0]["level"] == "ERROR"

    def test_webhook_failure_is_logged(
        self, buf: io.StringIO, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        def boom(req, timeout=None):
            raise OSError("connection refused")

        monkeypatch.setattr("urllib.request.urlopen", boom)
        sink = StreamLogSink(webhook_url="http://hooks.example/alert", stream=buf)
        with caplog.at_level(logging.WARNING, logger="orders.events"):
            sink.append(_entry(LogLevel.ERROR, "boom"))
        assert "Webhook POST failed" in caplog.text
        assert json.loads(buf.getvalue())["message"] == "boom"
