"""Per-peer endpoint tracking and the short printable peer label."""

from __future__ import annotations

import base64
import threading
from typing import Protocol

KEY_SIZE = 32


class Endpoint(Protocol):
    """The part of a network endpoint that the peer needs."""

    def clear_src(self) -> None: ...


class NoEndpointError(LookupError):
    """Raised when a packet must be sent to a peer with no known endpoint."""

    def __init__(self) -> None:
        super().__init__("no known endpoint for peer")


class PeerEndpoint:
    """The remote address of a peer, with roaming and source-clearing state.

    Safe for use from several threads.
    """

    def __init__(self, endpoint: Endpoint | None = None, disable_roaming: bool = False) -> None:
        self._lock = threading.Lock()
        self._value = endpoint
        self._clear_src_on_tx = False
        self._disable_roaming = disable_roaming

    @property
    def value(self) -> Endpoint | None:
        with self._lock:
            return self._value

    @value.setter
    def value(self, endpoint: Endpoint | None) -> None:
        """Set the endpoint explicitly, regardless of roaming."""
        with self._lock:
            self._value = endpoint

    @property
    def disable_roaming(self) -> bool:
        with self._lock:
            return self._disable_roaming

    @disable_roaming.setter
    def disable_roaming(self, disabled: bool) -> None:
        with self._lock:
            self._disable_roaming = disabled

    @property
    def clear_src_on_tx(self) -> bool:
        """True when the source address is cleared before the next send."""
        with self._lock:
            return self._clear_src_on_tx

    def set_from_packet(self, endpoint: Endpoint) -> None:
        """Adopt the address an authenticated packet came from, unless roaming is off."""
        with self._lock:
            if self._disable_roaming:
                return
            self._clear_src_on_tx = False
            self._value = endpoint

    def mark_src_for_clearing(self) -> None:
        """Ask for the source address to be cleared before the next send."""
        with self._lock:
            if self._value is None:
                return
            self._clear_src_on_tx = True

    def take_for_send(self) -> Endpoint:
        """Return the endpoint to send to, clearing its source first if asked.

        Raises NoEndpointError when no endpoint is known.
        """
        with self._lock:
            endpoint = self._value
            if endpoint is None:
                raise NoEndpointError()
            if self._clear_src_on_tx:
                endpoint.clear_src()
                self._clear_src_on_tx = False
            return endpoint


def peer_label(public_key: bytes) -> str:
    """Return ``peer(XXXX…YYYY)``, built from the base64 form of the public key."""
    if len(public_key) != KEY_SIZE:
        raise ValueError(f"public key must be {KEY_SIZE} bytes, got {len(public_key)}")
    encoded = base64.b64encode(public_key).decode("ascii")
    return f"peer({encoded[0:4]}…{encoded[39:43]})"