"""Thread-safe object pool for reusable per-call state.

Key Responsibilities:
    - Hand out exclusive instances of an expensive-to-build object and take
      them back for reuse, so hot ingestion paths avoid re-allocating buffers
    - Guarantee release on every exit path through :meth:`ResourcePool.lease`

Collaborators:
    - Upstream: The JSON field extractor pools its parser state here
    - Downstream: None

Thread Safety:
    - ``acquire`` and ``release`` may be called from any number of threads.
      An acquired instance is owned by a single caller until released.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Generic, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")

__all__ = ["ResourcePool"]


class ResourcePool(Generic[T]):
    """LIFO pool of reusable objects built by ``factory``.

    Args:
        factory: Zero-argument callable creating a fresh instance.
        prepare: Optional hook applied to every instance handed out.
        reset: Optional hook applied to an instance when it is released.
        max_idle: Maximum number of idle instances retained; extra released
            instances are dropped. ``None`` keeps all of them.
    """

    def __init__(
        self,
        factory: Callable[[], T],
        *,
        prepare: Callable[[T], None] | None = None,
        reset: Callable[[T], None] | None = None,
        max_idle: int | None = None,
    ) -> None:
        if max_idle is not None and max_idle < 0:
            raise ValueError(f"max_idle must be non-negative; got {max_idle}")
        self._factory = factory
        self._prepare = prepare
        self._reset = reset
        self._max_idle = max_idle
        self._idle: list[T] = []
        self._lock = threading.Lock()
        self.created = 0

    @property
    def idle_count(self) -> int:
        return len(self._idle)

    def acquire(self) -> T:
        """Return an idle instance, or a new one when the pool is empty."""
        item: T | None = None
        with self._lock:
            if self._idle:
                item = self._idle.pop()
            else:
                self.created += 1
        if item is None:
            item = self._factory()
        if self._prepare is not None:
            self._prepare(item)
        return item

    def release(self, item: T) -> None:
        """Reset ``item`` and return it to the pool.

        The caller must not use ``item`` afterwards.
        """
        if self._reset is not None:
            self._reset(item)
        with self._lock:
            if self._max_idle is not None and len(self._idle) >= self._max_idle:
                logger.debug("pool.release.dropped", idle=len(self._idle), max_idle=self._max_idle)
                return
            self._idle.append(item)

    @contextmanager
    def lease(self) -> Iterator[T]:
        """Acquire an instance for the duration of a ``with`` block."""
        item = self.acquire()
        try:
            yield item
        finally:
            self.release(item)
