"""
Simulated execution: ValidatedOrder -> ExecutionResult against a pricing context.
No live venue, no order book, no persisted state.
"""

from execution.order_ids import OrderIdExhausted, OrderIdRegistry
from execution.pricing import PricingContext, StaticPricingContext
from execution.simulator import (
    ExecutionSimulator,
    PreconditionError,
    ReferencePriceUnavailable,
    UniformSlippage,
)

__all__ = [
    "ExecutionSimulator",
    "OrderIdExhausted",
    "OrderIdRegistry",
    "PreconditionError",
    "PricingContext",
    "ReferencePriceUnavailable",
    "StaticPricingContext",
    "UniformSlippage",
]
