"""
Execution simulator: ValidatedOrder -> ExecutionResult.

Models what a futures testnet would answer for an accepted order:
    MARKET -> FILLED at reference price x uniform slippage in [0.998, 1.002]
    LIMIT  -> NEW, resting unfilled (no book matching is simulated)

Randomness (slippage factor, order id) is injected so fills are reproducible.
The only failure is a violated precondition: no usable reference price for a
market order.
"""

from __future__ import annotations

import math
import random
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable

from execution.pricing import PricingContext
from order_core.contracts import (
    ExecutionResult,
    OrderStatus,
    OrderType,
    ValidatedOrder,
)

ORDER_ID_MIN = 100_000_000
ORDER_ID_MAX = 999_999_999
SLIPPAGE_LOW = 0.998
SLIPPAGE_HIGH = 1.002

ZERO_AMOUNT = "0.00"


class PreconditionError(Exception):
    """A precondition the simulator cannot satisfy. Not a user input problem."""


class ReferencePriceUnavailable(PreconditionError):
    """No usable reference price for a market order."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"No reference price available for {symbol}")
        self.symbol = symbol


class UniformSlippage:
    """Symmetric multiplicative slippage drawn uniformly from [low, high]."""

    def __init__(
        self,
        rng: random.Random | None = None,
        *,
        low: float = SLIPPAGE_LOW,
        high: float = SLIPPAGE_HIGH,
    ) -> None:
        if not 0 < low <= high:
            raise ValueError(f"Invalid slippage band [{low}, {high}]")
        self._rng = rng if rng is not None else random.Random()
        self.low = low
        self.high = high

    def __call__(self) -> float:
        return self._rng.uniform(self.low, self.high)


def format_decimal(value: float) -> str:
    """Fixed-point rendering of a float without exponent or binary noise.

    0.01 -> "0.01", 1e-07 -> "0.0000001", 100.0 -> "100".
    """
    return format(Decimal(repr(float(value))).normalize(), "f")


def format_price(value: float) -> str:
    """Two fractional digits, half-up on the decimal repr."""
    return str(Decimal(repr(float(value))).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class ExecutionSimulator:
    """Synthesize the venue's answer for a validated order.

    Parameters
    ----------
    pricing:
        Reference-price source for market orders.
    rng:
        Random source for order ids and the default slippage model. Pass a
        seeded ``random.Random`` for reproducible runs.
    slippage:
        Callable returning a multiplicative factor. Defaults to
        ``UniformSlippage(rng)``.
    order_ids:
        Callable returning the next order id. Defaults to a uniform draw in
        [100_000_000, 999_999_999] from ``rng``.
    """

    def __init__(
        self,
        pricing: PricingContext,
        *,
        rng: random.Random | None = None,
        slippage: Callable[[], float] | None = None,
        order_ids: Callable[[], int] | None = None,
    ) -> None:
        self._pricing = pricing
        self._rng = rng if rng is not None else random.Random()
        self._slippage = slippage if slippage is not None else UniformSlippage(self._rng)
        self._order_ids = order_ids if order_ids is not None else self._draw_order_id

    def _draw_order_id(self) -> int:
        return self._rng.randint(ORDER_ID_MIN, ORDER_ID_MAX)

    def _market_fill_price(self, symbol: str) -> str:
        ref = self._pricing.reference_price(symbol)
        if ref is None or not math.isfinite(ref) or ref <= 0:
            raise ReferencePriceUnavailable(symbol)
        return format_price(round(ref * self._slippage(), 2))

    def execute(self, order: ValidatedOrder) -> ExecutionResult:
        """Simulate submission of one order.

        Raises
        ------
        ReferencePriceUnavailable
            MARKET order and the pricing context has no usable price.
        """
        orig_qty = format_decimal(order.quantity)

        if order.order_type == OrderType.MARKET:
            avg_price = self._market_fill_price(order.symbol)
            status = OrderStatus.FILLED
            executed_qty = orig_qty
        else:
            status = OrderStatus.NEW
            executed_qty = ZERO_AMOUNT
            avg_price = ZERO_AMOUNT

        return ExecutionResult(
            order_id=self._order_ids(),
            symbol=order.symbol,
            side=order.side,
            order_type=order.order_type,
            status=status,
            orig_qty=orig_qty,
            executed_qty=executed_qty,
            avg_price=avg_price,
        )
