"""Pytest fixtures: pricing, seeded simulator, in-memory sink, fixed clock."""

import random
from datetime import datetime, timezone
from pathlib import Path

import pytest

from execution import ExecutionSimulator, StaticPricingContext
from journal import InMemoryLogSink
from order_core.pipeline import OrderPipeline

FIXED_TS = datetime(2024, 1, 15, 14, 23, 5, tzinfo=timezone.utc)


@pytest.fixture
def pricing() -> StaticPricingContext:
    return StaticPricingContext({"BTCUSDT": 43250.00, "ETHUSDT": 2650.00})


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def simulator(pricing: StaticPricingContext, rng: random.Random) -> ExecutionSimulator:
    return ExecutionSimulator(pricing, rng=rng)


@pytest.fixture
def sink() -> InMemoryLogSink:
    return InMemoryLogSink()


@pytest.fixture
def pipeline(simulator: ExecutionSimulator, sink: InMemoryLogSink) -> OrderPipeline:
    return OrderPipeline(simulator, sink, clock=lambda: FIXED_TS)


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Write a temp config.yaml with a journal under tmp_path."""
    journal_path = tmp_path / "data" / "order_log.jsonl"
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        f"""
venue:
  name: binance-futures-testnet
  base_url: https://testnet.binancefuture.com
  testnet: true
pricing:
  reference_prices:
    BTCUSDT: 43250.00
    ETHUSDT: 2650.00
simulator:
  seed: 7
journal:
  path: "{journal_path}"
"""
    )
    return config_path
