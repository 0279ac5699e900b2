"""
Data contracts for order-core: RawOrderRequest, ValidatedOrder, ExecutionResult, LogEntry.

order-core consumes RawOrderRequest and produces ValidatedOrder or a
ValidationErrorSet. The execution simulator turns a ValidatedOrder into an
ExecutionResult. No I/O; these are plain dataclasses.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping


# ---------------------------------------------------------------------------
# Enums (exchange vocabulary)
# ---------------------------------------------------------------------------


class Side(str, Enum):
    """Order side."""

    BUY = "BUY"
    SELL = "SELL"


class OrderType(str, Enum):
    """Supported order types."""

    MARKET = "MARKET"
    LIMIT = "LIMIT"


class OrderStatus(str, Enum):
    """Terminal status of a simulated order for this session."""

    FILLED = "FILLED"
    NEW = "NEW"


class LogLevel(str, Enum):
    """Event trail levels."""

    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"

    @property
    def logging_level(self) -> int:
        return _LOGGING_LEVELS[self]


_LOGGING_LEVELS = {
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


# Field names as they appear on RawOrderRequest and in a ValidationErrorSet.
FIELD_SYMBOL = "symbol"
FIELD_SIDE = "side"
FIELD_ORDER_TYPE = "order_type"
FIELD_QUANTITY = "quantity"
FIELD_PRICE = "price"

# field name -> message, one message per offending field
ValidationErrorSet = dict[str, str]


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RawOrderRequest:
    """Untyped order instruction from a caller (UI form, CLI flags, JSON body).

    Nothing here is trusted: every field may be missing, the wrong type, or
    malformed. Only the validator turns this into a ValidatedOrder.
    """

    symbol: Any = None
    side: Any = None
    order_type: Any = None
    quantity: Any = None
    price: Any = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> RawOrderRequest:
        """Build from a dict. Accepts ``order_type``, ``orderType`` or ``type`` for the order type."""
        order_type = data.get("order_type", data.get("orderType", data.get("type")))
        return cls(
            symbol=data.get("symbol"),
            side=data.get("side"),
            order_type=order_type,
            quantity=data.get("quantity"),
            price=data.get("price"),
        )


# ---------------------------------------------------------------------------
# Validator output
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValidatedOrder:
    """A fully valid order. Price is set for LIMIT orders and None for MARKET."""

    symbol: str
    side: Side
    order_type: OrderType
    quantity: float
    price: float | None = None

    def __post_init__(self) -> None:
        if self.order_type == OrderType.LIMIT and self.price is None:
            raise ValueError("LIMIT order requires a price")
        if self.order_type == OrderType.MARKET and self.price is not None:
            raise ValueError("MARKET order must not carry a price")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validation: exactly one of ``order`` or a non-empty ``errors``."""

    order: ValidatedOrder | None = None
    errors: ValidationErrorSet = field(default_factory=dict)

    def __post_init__(self) -> None:
        if (self.order is None) == (not self.errors):
            raise ValueError("ValidationResult needs either an order or errors, not both")

    @property
    def ok(self) -> bool:
        return self.order is not None


# ---------------------------------------------------------------------------
# Simulator output
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ExecutionResult:
    """What the venue would have answered for an accepted order.

    Quantities and prices are fixed-point decimal strings, as exchanges
    return them; ``avg_price`` always has two fractional digits.
    """

    order_id: int
    symbol: str
    side: Side
    order_type: OrderType
    status: OrderStatus
    orig_qty: str
    executed_qty: str
    avg_price: str

    def to_dict(self) -> dict[str, Any]:
        """Exchange-style response body."""
        return {
            "orderId": self.order_id,
            "symbol": self.symbol,
            "side": self.side.value,
            "orderType": self.order_type.value,
            "status": self.status.value,
            "origQty": self.orig_qty,
            "executedQty": self.executed_qty,
            "avgPrice": self.avg_price,
        }


# ---------------------------------------------------------------------------
# Event trail
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LogEntry:
    """One record of the event trail. Timestamps in UTC."""

    timestamp: datetime
    level: LogLevel
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "ts": self.timestamp.isoformat(),
            "level": self.level.value,
            "message": self.message,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LogEntry:
        return cls(
            timestamp=datetime.fromisoformat(data["ts"]),
            level=LogLevel(data["level"]),
            message=str(data["message"]),
        )
