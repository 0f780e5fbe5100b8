"""Outbound packet helpers: the staging queue, transport headers and padding."""

from __future__ import annotations

import struct
import threading
from collections import deque
from typing import Generic, TypeVar

MESSAGE_TRANSPORT_TYPE = 4
MESSAGE_TRANSPORT_HEADER_SIZE = 16
PADDING_MULTIPLE = 16
QUEUE_STAGED_SIZE = 128

_HEADER = struct.Struct("<IIQ")

T = TypeVar("T")


class StagedQueue(Generic[T]):
    """A bounded FIFO of packets waiting for a usable session key.

    When full, staging a new item evicts the oldest ones so that the most
    recent packets are the ones kept. Safe for use from several threads.
    """

    def __init__(self, capacity: int = QUEUE_STAGED_SIZE) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self._capacity = capacity
        self._items: deque[T] = deque()
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def stage(self, item: T) -> list[T]:
        """Append ``item``; return the older items dropped to make room."""
        dropped: list[T] = []
        with self._lock:
            while len(self._items) >= self._capacity:
                dropped.append(self._items.popleft())
            self._items.append(item)
        return dropped

    def take(self) -> T | None:
        """Remove and return the oldest item, or None if the queue is empty."""
        with self._lock:
            if not self._items:
                return None
            return self._items.popleft()

    def flush(self) -> list[T]:
        """Remove and return every queued item, oldest first."""
        with self._lock:
            items = list(self._items)
            self._items.clear()
        return items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


def _round_up(size: int) -> int:
    return (size + PADDING_MULTIPLE - 1) & ~(PADDING_MULTIPLE - 1)


def calculate_padding_size(packet_size: int, mtu: int) -> int:
    """Return how many zero bytes to append before encrypting a packet.

    Content is padded to a multiple of 16 bytes, but never beyond the MTU.
    An MTU of zero means no limit.
    """
    if packet_size < 0:
        raise ValueError(f"packet size must not be negative, got {packet_size}")
    if mtu < 0:
        raise ValueError(f"mtu must not be negative, got {mtu}")
    last_unit = packet_size
    if mtu == 0:
        return _round_up(last_unit) - last_unit
    if last_unit > mtu:
        last_unit %= mtu
    padded = min(_round_up(last_unit), mtu)
    return padded - last_unit


def transport_header(receiver: int, nonce: int) -> bytes:
    """Return the 16-byte header of a transport data message."""
    try:
        return _HEADER.pack(MESSAGE_TRANSPORT_TYPE, receiver, nonce)
    except struct.error as err:
        raise ValueError(f"invalid transport header field: {err}") from err