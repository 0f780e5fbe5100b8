"""TAI64N timestamps with whitened sub-second precision."""

from __future__ import annotations

import struct
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

TIMESTAMP_SIZE = 12
BASE = 0x400000000000000A
WHITENER_MASK = 0x1000000 - 1

_UINT64_MASK = (1 << 64) - 1
_NS_PER_SECOND = 1_000_000_000
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True, order=True)
class Timestamp:
    """A 12-byte TAI64N label: 8 bytes of seconds and 4 of nanoseconds."""

    raw: bytes

    def __post_init__(self) -> None:
        if len(self.raw) != TIMESTAMP_SIZE:
            raise ValueError(f"timestamp must be {TIMESTAMP_SIZE} bytes, got {len(self.raw)}")

    def __bytes__(self) -> bytes:
        return self.raw

    def after(self, other: Timestamp) -> bool:
        """Return True if this timestamp is strictly later than ``other``."""
        return self.raw > other.raw

    def __str__(self) -> str:
        secs, nanos = struct.unpack(">QI", self.raw)
        seconds = (secs - BASE) & _UINT64_MASK
        if seconds >= 1 << 63:
            seconds -= 1 << 64
        extra, nanos = divmod(nanos, _NS_PER_SECOND)
        moment = _EPOCH + timedelta(seconds=seconds + extra)
        text = moment.strftime("%Y-%m-%d %H:%M:%S")
        if nanos:
            text += "." + f"{nanos:09d}".rstrip("0")
        return text + " +0000 UTC"


def stamp(unix_ns: int) -> Timestamp:
    """Build the timestamp for a moment given in nanoseconds since the epoch."""
    seconds, nanos = divmod(unix_ns, _NS_PER_SECOND)
    secs = (BASE + seconds) & _UINT64_MASK
    nanos &= ~WHITENER_MASK & 0xFFFFFFFF
    return Timestamp(struct.pack(">QI", secs, nanos))


def now() -> Timestamp:
    """Return the timestamp for the current time."""
    return stamp(time.time_ns())