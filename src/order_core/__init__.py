"""
order-core: order contracts and the pure order validator.

No I/O, no randomness. Consumes RawOrderRequest, produces ValidatedOrder or
a ValidationErrorSet. The pipeline (order_core.pipeline) adds simulation and
the event trail on top.
"""

from order_core.contracts import (
    ExecutionResult,
    LogEntry,
    LogLevel,
    OrderStatus,
    OrderType,
    RawOrderRequest,
    Side,
    ValidatedOrder,
    ValidationErrorSet,
    ValidationResult,
)
from order_core.validator import validate_order

__all__ = [
    "ExecutionResult",
    "LogEntry",
    "LogLevel",
    "OrderStatus",
    "OrderType",
    "RawOrderRequest",
    "Side",
    "ValidatedOrder",
    "ValidationErrorSet",
    "ValidationResult",
    "validate_order",
]
