"""
Order Validator: RawOrderRequest -> ValidatedOrder | ValidationErrorSet.

Pure and total. Every field rule runs on every call, so a single pass reports
all offending fields at once; within a field the first violation wins.

Rules (exchange-like constraints for futures testnet symbols):
    symbol      required, <= 20 chars, uppercase A-Z only
    side        BUY | SELL
    order_type  MARKET | LIMIT
    quantity    finite, > 0, <= 999,999
    price       LIMIT only: required, finite, > 0, <= 999,999,999
"""

from __future__ import annotations

import math
import re
from typing import Any

from order_core.contracts import (
    FIELD_ORDER_TYPE,
    FIELD_PRICE,
    FIELD_QUANTITY,
    FIELD_SIDE,
    FIELD_SYMBOL,
    OrderType,
    RawOrderRequest,
    Side,
    ValidatedOrder,
    ValidationErrorSet,
    ValidationResult,
)

SYMBOL_MAX_LEN = 20
MAX_QUANTITY = 999_999
MAX_PRICE = 999_999_999

_SYMBOL_RE = re.compile(r"[A-Z]+")
# plain ASCII decimal; float() alone also takes "1_0" and non-ASCII digits
_NUMBER_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def _parse_number(value: Any) -> float | None:
    """Parse text or a number into a finite float. None when not possible."""
    # bool is an int subclass; True is not a quantity
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not _NUMBER_RE.fullmatch(text):
            return None
        number = float(text)
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def _check_symbol(value: Any) -> tuple[str | None, str | None]:
    if _is_blank(value):
        return None, "Symbol is required"
    if not isinstance(value, str):
        return None, "Use uppercase letters only (A-Z)"
    if len(value) > SYMBOL_MAX_LEN:
        return None, f"Symbol must be at most {SYMBOL_MAX_LEN} characters"
    if not _SYMBOL_RE.fullmatch(value):
        return None, "Use uppercase letters only (A-Z)"
    return value, None


def _check_side(value: Any) -> tuple[Side | None, str | None]:
    if _is_blank(value):
        return None, "Side is required"
    if value not in ("BUY", "SELL"):
        return None, "Side must be BUY or SELL"
    return Side(value), None


def _check_order_type(value: Any) -> tuple[OrderType | None, str | None]:
    if _is_blank(value):
        return None, "Order type is required"
    if value not in ("MARKET", "LIMIT"):
        return None, "Order type must be MARKET or LIMIT"
    return OrderType(value), None


def _check_amount(value: Any, label: str, maximum: int) -> tuple[float | None, str | None]:
    """Shared quantity/price rule: required, finite number, positive, bounded."""
    if _is_blank(value):
        return None, f"{label} is required"
    number = _parse_number(value)
    if number is None:
        return None, f"{label} must be a valid number"
    if number <= 0:
        return None, f"{label} must be positive"
    if number > maximum:
        return None, f"{label} must be at most {maximum}"
    return number, None


def _check_price(value: Any, order_type: Any) -> tuple[float | None, str | None]:
    if order_type == OrderType.MARKET.value:
        return None, None
    if _is_blank(value):
        if order_type == OrderType.LIMIT.value:
            return None, "Price is required for LIMIT orders"
        return None, None
    return _check_amount(value, "Price", MAX_PRICE)


def validate_order(raw: RawOrderRequest) -> ValidationResult:
    """Validate a raw order request.

    Returns a ValidationResult holding either the ValidatedOrder or the
    complete ValidationErrorSet (field name -> message). Never raises for
    bad input.
    """
    errors: ValidationErrorSet = {}

    symbol, err = _check_symbol(raw.symbol)
    if err:
        errors[FIELD_SYMBOL] = err

    side, err = _check_side(raw.side)
    if err:
        errors[FIELD_SIDE] = err

    order_type, err = _check_order_type(raw.order_type)
    if err:
        errors[FIELD_ORDER_TYPE] = err

    quantity, err = _check_amount(raw.quantity, "Quantity", MAX_QUANTITY)
    if err:
        errors[FIELD_QUANTITY] = err

    price, err = _check_price(raw.price, raw.order_type)
    if err:
        errors[FIELD_PRICE] = err

    if errors:
        return ValidationResult(errors=errors)

    order = ValidatedOrder(
        symbol=symbol,
        side=side,
        order_type=order_type,
        quantity=quantity,
        price=price if order_type == OrderType.LIMIT else None,
    )
    return ValidationResult(order=order)
