"""Building blocks of a userspace WireGuard daemon."""

__version__ = "0.1.0"
__all__ = [
    "packet",
    "peer",
    "pools",
    "ratelimiter",
    "replay",
    "rwcancel",
    "tai64n",
]