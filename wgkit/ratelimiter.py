"""Per-address token-bucket limiter for handshake messages."""

from __future__ import annotations

import ipaddress
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Hashable

PACKETS_PER_SECOND = 20
PACKETS_BURSTABLE = 5
GARBAGE_COLLECT_TIME = 1_000_000_000
PACKET_COST = 1_000_000_000 // PACKETS_PER_SECOND
MAX_TOKENS = PACKET_COST * PACKETS_BURSTABLE

_GC_INTERVAL = 1.0


@dataclass
class _Entry:
    last_time: int
    tokens: int
    lock: threading.Lock = field(default_factory=threading.Lock)


def _normalize(ip: object) -> Hashable:
    if isinstance(ip, str):
        return ipaddress.ip_address(ip)
    return ip  # type: ignore[return-value]


class Ratelimiter:
    """Allows a short burst per address, then a steady rate.

    ``clock`` returns the current time in nanoseconds.
    """

    def __init__(self, clock: Callable[[], int] | None = None) -> None:
        self._clock = clock if clock is not None else time.monotonic_ns
        self._lock = threading.Lock()
        self._table: dict[Hashable, _Entry] | None = None
        self._stop: threading.Event | None = None
        self._wake: threading.Event | None = None

    def close(self) -> None:
        """Stop the background garbage collector."""
        with self._lock:
            self._signal_stop()

    def _signal_stop(self) -> None:
        if self._stop is not None:
            self._stop.set()
            assert self._wake is not None
            self._wake.set()

    def init(self) -> None:
        """Clear the table and (re)start the garbage collector."""
        with self._lock:
            self._signal_stop()
            stop = threading.Event()
            wake = threading.Event()
            self._stop = stop
            self._wake = wake
            self._table = {}
        worker = threading.Thread(
            target=self._collect, args=(stop, wake), name="ratelimiter-gc", daemon=True
        )
        worker.start()

    def _collect(self, stop: threading.Event, wake: threading.Event) -> None:
        while True:
            wake.wait()
            if stop.is_set():
                return
            wake.clear()
            while not stop.wait(_GC_INTERVAL):
                if self.cleanup():
                    break
            if stop.is_set():
                return

    def cleanup(self) -> bool:
        """Drop entries idle for longer than the collection time; return True if empty."""
        with self._lock:
            table = self._table
            if table is None:
                return True
            for key, entry in list(table.items()):
                with entry.lock:
                    if self._clock() - entry.last_time > GARBAGE_COLLECT_TIME:
                        del table[key]
            return not table

    def allow(self, ip: object) -> bool:
        """Return True if a packet from ``ip`` may be processed now."""
        key = _normalize(ip)
        with self._lock:
            table = self._table
            if table is None:
                raise RuntimeError("ratelimiter not initialized")
            entry = table.get(key)
            if entry is None:
                table[key] = _Entry(last_time=self._clock(), tokens=MAX_TOKENS - PACKET_COST)
                if len(table) == 1 and self._wake is not None:
                    self._wake.set()
                return True

        with entry.lock:
            current = self._clock()
            entry.tokens = min(entry.tokens + current - entry.last_time, MAX_TOKENS)
            entry.last_time = current
            if entry.tokens > PACKET_COST:
                entry.tokens -= PACKET_COST
                return True
            return False