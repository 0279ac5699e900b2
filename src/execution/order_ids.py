"""
Order-id registry: session-level uniqueness on top of the simulator's id draws.

The simulator draws ids uniformly and does not remember them. Wrap its id
source in OrderIdRegistry when callers need no repeats within a session.
"""

from __future__ import annotations

import random
import threading
from typing import Callable

from execution.simulator import ORDER_ID_MAX, ORDER_ID_MIN, PreconditionError


class OrderIdExhausted(PreconditionError):
    """No unused id could be drawn within the attempt budget."""


class OrderIdRegistry:
    """Callable id source that redraws on collision. Thread-safe."""

    def __init__(
        self,
        source: Callable[[], int] | None = None,
        *,
        rng: random.Random | None = None,
        max_attempts: int = 100,
    ) -> None:
        if source is None:
            gen = rng if rng is not None else random.Random()

            def source() -> int:
                return gen.randint(ORDER_ID_MIN, ORDER_ID_MAX)

        self._source = source
        self._max_attempts = max_attempts
        self._issued: set[int] = set()
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            for _ in range(self._max_attempts):
                candidate = self._source()
                if candidate not in self._issued:
                    self._issued.add(candidate)
                    return candidate
        raise OrderIdExhausted(f"No unused order id after {self._max_attempts} attempts")

    def __contains__(self, order_id: int) -> bool:
        return order_id in self._issued

    def __len__(self) -> int:
        return len(self._issued)
