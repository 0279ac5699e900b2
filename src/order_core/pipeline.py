"""
Order pipeline: chains Validator -> Simulator and records the event trail.

Single entry point for one submission. The validator stays pure; this layer
owns the side channel: each validate() or execute() call appends exactly one
LogEntry to the injected sink and mirrors it to the ``orders.pipeline`` logger.

    validate ok          -> INFO
    validate rejected    -> WARN
    execute ok           -> INFO
    execute precondition -> ERROR (exception re-raised to the caller)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Callable

from execution.simulator import ExecutionSimulator, PreconditionError, format_decimal
from order_core.contracts import (
    ExecutionResult,
    LogEntry,
    LogLevel,
    OrderType,
    RawOrderRequest,
    ValidatedOrder,
    ValidationErrorSet,
    ValidationResult,
)
from order_core.validator import validate_order

if TYPE_CHECKING:
    from journal.sink import LogSink

logger = logging.getLogger("orders.pipeline")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of one submission: a fill report or the validation errors."""

    validation: ValidationResult
    execution: ExecutionResult | None = None

    @property
    def ok(self) -> bool:
        return self.execution is not None

    @property
    def errors(self) -> ValidationErrorSet:
        return self.validation.errors


def describe_order(order: ValidatedOrder) -> str:
    """``MARKET BUY BTCUSDT qty=0.01`` (price appended for LIMIT)."""
    text = f"{order.order_type.value} {order.side.value} {order.symbol} qty={format_decimal(order.quantity)}"
    if order.order_type == OrderType.LIMIT:
        text += f" price={order.price:.2f}"
    return text


def describe_errors(errors: ValidationErrorSet) -> str:
    return "; ".join(f"{name}: {msg}" for name, msg in errors.items())


def describe_result(result: ExecutionResult) -> str:
    text = f"Order placed. ID: {result.order_id} | Status: {result.status.value}"
    if result.order_type == OrderType.MARKET:
        return f"{text} | Executed: {result.executed_qty} | Avg Price: {result.avg_price}"
    return f"{text} | Waiting for fill"


class OrderPipeline:
    """Validate and simulate orders, emitting one log entry per step.

    Parameters
    ----------
    simulator:
        Execution simulator (owns pricing context and randomness).
    sink:
        Log sink receiving every LogEntry.
    clock:
        Returns the current UTC time; injectable for tests.
    """

    def __init__(
        self,
        simulator: ExecutionSimulator,
        sink: LogSink,
        *,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._simulator = simulator
        self._sink = sink
        self._clock = clock

    def _emit(self, level: LogLevel, message: str) -> LogEntry:
        entry = LogEntry(timestamp=self._clock(), level=level, message=message)
        self._sink.append(entry)
        logger.log(level.logging_level, message)
        return entry

    def validate(self, raw: RawOrderRequest) -> ValidationResult:
        result = validate_order(raw)
        if result.ok:
            self._emit(LogLevel.INFO, f"Order validated: {describe_order(result.order)}")
        else:
            self._emit(LogLevel.WARN, f"Order rejected: {describe_errors(result.errors)}")
        return result

    def execute(self, order: ValidatedOrder) -> ExecutionResult:
        """Simulate the order. PreconditionError is logged at ERROR and re-raised."""
        try:
            result = self._simulator.execute(order)
        except PreconditionError as exc:
            self._emit(LogLevel.ERROR, f"Order failed: {describe_order(order)} | {exc}")
            raise
        self._emit(LogLevel.INFO, f"{describe_order(order)} | {describe_result(result)}")
        return result

    def submit(self, raw: RawOrderRequest) -> SubmissionResult:
        """Validate, then execute when valid. Raises PreconditionError from execute."""
        validation = self.validate(raw)
        if not validation.ok:
            return SubmissionResult(validation=validation)
        return SubmissionResult(validation=validation, execution=self.execute(validation.order))
