"""Object pools with an optional cap on outstanding items, and queue sizes."""

from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

QUEUE_OUTBOUND_SIZE = 1024
QUEUE_INBOUND_SIZE = 1024
QUEUE_HANDSHAKE_SIZE = 1024
MAX_SEGMENT_SIZE = (1 << 16) - 1  # largest possible UDP datagram
PREALLOCATED_BUFFERS_PER_POOL = 0  # no cap: memory may grow without bound

T = TypeVar("T")


class WaitPool(Generic[T]):
    """A free list whose ``get`` blocks while ``maximum`` items are out.

    A ``maximum`` of zero disables the cap.
    """

    def __init__(self, maximum: int, factory: Callable[[], T]) -> None:
        self._maximum = maximum
        self._factory = factory
        self._free: list[T] = []
        self._lock = threading.Lock()
        self._cond = threading.Condition(self._lock)
        self._count = 0

    @property
    def maximum(self) -> int:
        return self._maximum

    @property
    def count(self) -> int:
        """Items handed out by ``get`` and not yet returned."""
        with self._lock:
            return self._count

    def get(self) -> T:
        """Take an item, reusing a returned one when available."""
        with self._lock:
            if self._maximum:
                self._cond.wait_for(lambda: self._count < self._maximum)
                self._count += 1
            if self._free:
                return self._free.pop()
        return self._factory()

    def put(self, item: T) -> None:
        """Return an item to the pool."""
        with self._lock:
            self._free.append(item)
            if not self._maximum:
                return
            self._count -= 1
            self._cond.notify()