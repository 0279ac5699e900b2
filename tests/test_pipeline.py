"""Tests for order_core.pipeline: one log entry per step, levels, ordering."""

import logging
import random
import threading
from datetime import datetime, timezone

import pytest

from execution import (
    ExecutionSimulator,
    OrderIdExhausted,
    OrderIdRegistry,
    ReferencePriceUnavailable,
    StaticPricingContext,
)
from journal import InMemoryLogSink
from order_core import LogLevel, OrderStatus, OrderType, RawOrderRequest, Side, ValidatedOrder
from order_core.pipeline import OrderPipeline

FIXED_TS = datetime(2024, 1, 15, 14, 23, 5, tzinfo=timezone.utc)


def _btc_market() -> RawOrderRequest:
    return RawOrderRequest(symbol="BTCUSDT", side="BUY", order_type="MARKET", quantity="0.01")


class TestSubmit:
    def test_market_order_fills(self, pipeline: OrderPipeline, sink: InMemoryLogSink) -> None:
        result = pipeline.submit(_btc_market())
        assert result.ok
        assert result.execution.status == OrderStatus.FILLED
        assert result.errors == {}
        assert [e.level for e in sink.entries()] == [LogLevel.INFO, LogLevel.INFO]

    def test_limit_order_rests(self, pipeline: OrderPipeline, sink: InMemoryLogSink) -> None:
        raw = RawOrderRequest(symbol="ETHUSDT", side="SELL", order_type="LIMIT", quantity="0.5", price="2650.00")
        result = pipeline.submit(raw)
        assert result.execution.status == OrderStatus.NEW
        assert "Waiting for fill" in sink.entries()[-1].message

    def test_rejected_order_logs_one_warning(self, pipeline: OrderPipeline, sink: InMemoryLogSink) -> None:
        raw = RawOrderRequest(symbol="btcusdt", side="BUY", order_type="LIMIT", quantity="0.01")
        result = pipeline.submit(raw)
        assert not result.ok
        assert result.execution is None
        assert set(result.errors) == {"symbol", "price"}
        entries = sink.entries()
        assert len(entries) == 1
        assert entries[0].level == LogLevel.WARN
        assert "symbol" in entries[0].message
        assert "Price is required for LIMIT orders" in entries[0].message

    def test_missing_reference_price_logs_error(self, pipeline: OrderPipeline, sink: InMemoryLogSink) -> None:
        raw = RawOrderRequest(symbol="SOLUSDT", side="BUY", order_type="MARKET", quantity="1")
        with pytest.raises(ReferencePriceUnavailable):
            pipeline.submit(raw)
        levels = [e.level for e in sink.entries()]
        assert levels == [LogLevel.INFO, LogLevel.ERROR]
        assert "SOLUSDT" in sink.entries()[-1].message


class TestOneEntryPerCall:
    def test_validate_success(self, pipeline: OrderPipeline, sink: InMemoryLogSink) -> None:
        pipeline.validate(_btc_market())
        assert len(sink) == 1
        assert sink.entries()[0].level == LogLevel.INFO

    def test_execute_success(self, pipeline: OrderPipeline, sink: InMemoryLogSink) -> None:
        order = ValidatedOrder(symbol="BTCUSDT", side=Side.BUY, order_type=OrderType.MARKET, quantity=0.01)
        result = pipeline.execute(order)
        assert len(sink) == 1
        entry = sink.entries()[0]
        assert entry.level == LogLevel.INFO
        assert str(result.order_id) in entry.message
        assert "FILLED" in entry.message

    def test_execute_ids_exhausted_logs_one_error(self, pricing: StaticPricingContext, sink: InMemoryLogSink) -> None:
        registry = OrderIdRegistry(lambda: 123_456_789, max_attempts=2)
        registry()
        pipe = OrderPipeline(ExecutionSimulator(pricing, rng=random.Random(3), order_ids=registry), sink)
        order = ValidatedOrder(symbol="BTCUSDT", side=Side.BUY, order_type=OrderType.MARKET, quantity=0.01)
        with pytest.raises(OrderIdExhausted):
            pipe.execute(order)
        entries = sink.entries()
        assert len(entries) == 1
        assert entries[0].level == LogLevel.ERROR
        assert "No unused order id" in entries[0].message

    def test_emission_order_and_timestamps(self, pipeline: OrderPipeline, sink: InMemoryLogSink) -> None:
        pipeline.validate(RawOrderRequest())
        pipeline.validate(_btc_market())
        pipeline.submit(_btc_market())
        entries = sink.entries()
        assert [e.level for e in entries] == [LogLevel.WARN, LogLevel.INFO, LogLevel.INFO, LogLevel.INFO]
        assert all(e.timestamp == FIXED_TS for e in entries)

    def test_filter_by_level(self, pipeline: OrderPipeline, sink: InMemoryLogSink) -> None:
        pipeline.validate(RawOrderRequest())
        pipeline.submit(_btc_market())
        assert len(sink.entries(LogLevel.WARN)) == 1
        assert len(sink.entries(LogLevel.INFO)) == 2
        assert sink.entries(LogLevel.ERROR) == []


class TestStdlibMirror:
    def test_entries_mirror_to_logger(self, pipeline: OrderPipeline, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="orders.pipeline"):
            pipeline.validate(RawOrderRequest())
            pipeline.validate(_btc_market())
        levels = [r.levelno for r in caplog.records if r.name == "orders.pipeline"]
        assert levels == [logging.WARNING, logging.INFO]


class TestIsolation:
    def test_pipelines_do_not_share_sinks(self, pricing: StaticPricingContext) -> None:
        sink_a, sink_b = InMemoryLogSink(), InMemoryLogSink()
        a = OrderPipeline(ExecutionSimulator(pricing), sink_a)
        b = OrderPipeline(ExecutionSimulator(pricing), sink_b)
        a.submit(_btc_market())
        b.validate(RawOrderRequest())
        assert len(sink_a) == 2
        assert len(sink_b) == 1

    def test_concurrent_submissions(self, pricing: StaticPricingContext) -> None:
        sink = InMemoryLogSink()
        pipe = OrderPipeline(ExecutionSimulator(pricing, rng=random.Random(1)), sink)
        n_threads, per_thread = 8, 25

        def worker() -> None:
            for _ in range(per_thread):
                pipe.submit(_btc_market())

        threads = [threading.Thread(target=worker) for _ in range(n_threads)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(sink) == n_threads * per_thread * 2
