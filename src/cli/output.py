"""
Human-readable order output for the terminal.

The same data goes to the journal; these formatters only shape it for people.
"""

from __future__ import annotations

from execution.simulator import format_decimal
from order_core.contracts import ExecutionResult, LogEntry, OrderStatus, ValidatedOrder, ValidationErrorSet


def format_order_summary(order: ValidatedOrder) -> str:
    lines = [
        "--- Order Summary ---",
        f"Symbol : {order.symbol}",
        f"Side   : {order.side.value}",
        f"Type   : {order.order_type.value}",
        f"Qty    : {format_decimal(order.quantity)}",
    ]
    if order.price is not None:
        lines.append(f"Price  : {order.price:.2f}")
    return "\n".join(lines)


def format_execution_result(result: ExecutionResult) -> str:
    """Response block, one key per line, in exchange field order."""
    width = max(len(k) for k in result.to_dict())
    lines = ["--- Order Response ---"]
    for key, value in result.to_dict().items():
        lines.append(f"{key:<{width}} : {value}")
    if result.status == OrderStatus.NEW:
        lines.append("Resting on the book, waiting for fill.")
    return "\n".join(lines)


def format_validation_errors(errors: ValidationErrorSet) -> str:
    lines = ["Order rejected:"]
    for name, message in errors.items():
        lines.append(f"  {name:<10} {message}")
    return "\n".join(lines)


def format_log_entry(entry: LogEntry) -> str:
    """``14:23:05 [INFO] message`` (UTC wall-clock time)."""
    return f"{entry.timestamp.strftime('%H:%M:%S')} [{entry.level.value}] {entry.message}"
