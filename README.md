# wgkit

Pieces of a userspace WireGuard daemon, written as a plain Python library
with no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## What is inside

- `wgkit.replay`: `ReplayFilter`, a sliding-window anti-replay filter
  (RFC 6479) with a window of 8128 counters. `validate_counter(counter,
  limit)` accepts each counter once and rejects counters that are too far
  behind the newest one or at or above `limit`. `reset()` empties it.
- `wgkit.tai64n`: `Timestamp`, a 12-byte TAI64N label whose nanoseconds are
  whitened (the low 24 bits cleared). `stamp(unix_ns)` builds one from
  nanoseconds since the epoch, `now()` from the current time,
  `Timestamp.after(other)` compares two, and `str()` renders it as a UTC
  date and time.
- `wgkit.ratelimiter`: `Ratelimiter`, a token bucket per source address
  (20 packets per second, bursts of 5). Pass a `clock` returning
  nanoseconds to control time in tests. Call `init()` before `allow(ip)`;
  `ip` may be an address string or an `ipaddress` object. `cleanup()` drops
  entries idle for over a second, and a background thread does so while the
  table is not empty; `close()` stops that thread.
- `wgkit.pools`: `WaitPool`, an object pool whose `get()` blocks while
  `maximum` items are out (a maximum of zero means no limit), with `put()`
  to return items. The module also holds the queue size constants.
- `wgkit.rwcancel`: `RWCancel`, read and write on a non-blocking file
  descriptor that another thread can abort with `cancel()`; an aborted wait
  raises `OSError` (`EBADF`). `retry_after_error(err)` tells whether an
  `OSError` is `EAGAIN` or `EINTR`. Uses `select.poll`, so POSIX only.
- `wgkit.packet`: `calculate_padding_size(packet_size, mtu)`,
  `transport_header(receiver, nonce)` for the 16-byte transport message
  header, and `StagedQueue`, a bounded FIFO whose `stage()` evicts and
  returns the oldest items when full, with `take()`, `flush()` and `len()`.
- `wgkit.peer`: `PeerEndpoint`, a peer's remote endpoint with roaming and
  source-clearing state (`set_from_packet`, `mark_src_for_clearing`,
  `take_for_send`, which raises `NoEndpointError` when no endpoint is
  known), and `peer_label(public_key)`, which gives `peer(XXXX…YYYY)` from
  the base64 form of a 32-byte key.

## Example

```python
from wgkit.replay import ReplayFilter
from wgkit.packet import calculate_padding_size, transport_header

replay_filter = ReplayFilter()
assert replay_filter.validate_counter(5, 1 << 60)
assert not replay_filter.validate_counter(5, 1 << 60)

assert calculate_padding_size(17, 1420) == 15
assert len(transport_header(receiver=7, nonce=1)) == 16
```

## What it does not do

This is a library of parts, not a running VPN. It has no command to start,
does not create or read a TUN device, does not open UDP sockets, perform
the Noise handshake or encrypt packets, does not drive per-peer protocol
timers, and does not listen on or speak the configuration socket protocol
used by `wg`-style tools.