"""Exact counters shared between worker threads."""

from __future__ import annotations

import threading

__all__ = ["AtomicCounter"]


class AtomicCounter:
    """Monotonic integer counter that stays exact under concurrent increments."""

    __slots__ = ("_lock", "_value")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0

    def add(self, amount: int = 1) -> int:
        """Increment by ``amount`` and return the new value."""
        with self._lock:
            self._value += amount
            return self._value

    def get(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"AtomicCounter({self._value})"
