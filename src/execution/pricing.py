"""
Pricing context: reference (last/quoted) price per symbol for market-order fills.

Configurable adapter; sync, in-memory. A real market-data feed implements the
same protocol.
"""

from __future__ import annotations

import math
from typing import Mapping, Protocol


class PricingContext(Protocol):
    """Protocol for reference-price providers."""

    def reference_price(self, symbol: str) -> float | None:
        """Last known price for symbol, or None when unavailable."""
        ...


class StaticPricingContext:
    """Reference prices from a fixed mapping (config file, CLI flag, tests)."""

    def __init__(self, prices: Mapping[str, float] | None = None) -> None:
        self._prices = {str(k): float(v) for k, v in (prices or {}).items()}

    def reference_price(self, symbol: str) -> float | None:
        price = self._prices.get(symbol)
        if price is None or not math.isfinite(price) or price <= 0:
            return None
        return price

    def with_price(self, symbol: str, price: float) -> StaticPricingContext:
        """Copy with one symbol's price overridden."""
        return StaticPricingContext({**self._prices, symbol: price})