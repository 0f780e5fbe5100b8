"""Cancelable reads and writes on a non-blocking file descriptor."""

from __future__ import annotations

import errno
import os
import select

_RETRY_ERRNOS = frozenset({errno.EAGAIN, errno.EWOULDBLOCK, errno.EINTR})


def retry_after_error(err: BaseException) -> bool:
    """Return True if ``err`` means the operation should simply be retried."""
    return isinstance(err, OSError) and err.errno in _RETRY_ERRNOS


def _closed_error() -> OSError:
    return OSError(errno.EBADF, "file already closed")


class RWCancel:
    """Wraps ``fd`` so blocking reads and writes can be aborted by ``cancel``.

    The descriptor is switched to non-blocking mode; it is not closed by
    this object.
    """

    def __init__(self, fd: int) -> None:
        os.set_blocking(fd, False)
        self.fd = fd
        self._closing_reader, self._closing_writer = os.pipe()
        self._closed = False

    def __enter__(self) -> RWCancel:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _ready(self, events: int) -> bool:
        poller = select.poll()
        poller.register(self.fd, events)
        poller.register(self._closing_reader, select.POLLIN)
        try:
            results = dict(poller.poll())
        except OSError:
            return False
        if results.get(self._closing_reader, 0):
            return False
        return bool(results.get(self.fd, 0))

    def ready_read(self) -> bool:
        """Block until the descriptor is readable; False if cancelled."""
        return self._ready(select.POLLIN)

    def ready_write(self) -> bool:
        """Block until the descriptor is writable; False if cancelled."""
        return self._ready(select.POLLOUT)

    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes, waiting until data arrives or cancellation."""
        while True:
            try:
                return os.read(self.fd, size)
            except OSError as err:
                if not retry_after_error(err):
                    raise
            if not self.ready_read():
                raise _closed_error()

    def write(self, data: bytes) -> int:
        """Write ``data``, waiting until possible or cancellation; return bytes written."""
        while True:
            try:
                return os.write(self.fd, data)
            except OSError as err:
                if not retry_after_error(err):
                    raise
            if not self.ready_write():
                raise _closed_error()

    def cancel(self) -> None:
        """Wake and abort every pending and future wait."""
        os.write(self._closing_writer, b"\0")

    def close(self) -> None:
        """Release the internal cancellation pipe."""
        if self._closed:
            return
        self._closed = True
        os.close(self._closing_reader)
        os.close(self._closing_writer)