# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Timed TCP connection to a forward proxy.

Every blocking call takes an explicit `Deadline`; each recv is additionally
bounded by the idle timeout. Any timeout closes the socket before the error
is raised, so a caller never holds a half-dead connection.
"""

from __future__ import annotations

import logging
import socket
import ssl
import time
from collections.abc import Callable

from ..errors import ConnectTimeout, NetworkError, ReadTimeout
from .tls import wrap_tunnel

logger = logging.getLogger(__name__)

RECV_CHUNK_BYTES = 64 * 1024


class Deadline:
    """Absolute point in monotonic time by which a phase must finish."""

    def __init__(self, budget: float, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self.expires_at = clock() + budget

    def remaining(self) -> float:
        return max(0.0, self.expires_at - self._clock())

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0


class TimedConnection:
    """Owns exactly one socket (plain, later possibly TLS-wrapped) to the proxy."""

    def __init__(self, sock: socket.socket, idle_timeout: float):
        self._sock = sock
        self.idle_timeout = idle_timeout
        self.closed = False

    @classmethod
    def open(cls, host: str, port: int, timeout: float, idle_timeout: float | None = None) -> TimedConnection:
        """
        Connect to the first reachable address of `host`.

        All resolved addresses share one `timeout` budget; each attempt only
        gets what is left of it.
        """
        deadline = Deadline(timeout)
        try:
            addresses = socket.getaddrinfo(host, port, 0, socket.SOCK_STREAM)
        except UnicodeError as exc:
            raise NetworkError(f"Proxy TCP error: invalid host {host!r}") from exc
        except OSError as exc:
            raise NetworkError(f"Proxy TCP error: {exc}") from exc

        last_error: OSError | None = None
        for family, sock_type, proto, _canonname, address in addresses:
            remaining = deadline.remaining()
            if remaining <= 0:
                break
            sock = socket.socket(family, sock_type, proto)
            try:
                sock.settimeout(remaining)
                sock.connect(address)
            except OSError as exc:
                sock.close()
                last_error = exc
                logger.debug("Proxy connect to %s failed: %s", address, exc)
                continue
            return cls(sock, idle_timeout if idle_timeout is not None else timeout)

        if deadline.expired or isinstance(last_error, socket.timeout):
            raise ConnectTimeout("Proxy TCP timeout") from last_error
        if last_error is None:
            raise NetworkError(f"Proxy TCP error: no addresses for {host!r}")
        raise NetworkError(f"Proxy TCP error: {last_error}") from last_error

    def _arm(self, deadline: Deadline, error: type[Exception], message: str) -> None:
        remaining = deadline.remaining()
        if remaining <= 0:
            self.close()
            raise error(message)
        self._sock.settimeout(min(self.idle_timeout, remaining))

    def send(self, data: bytes, deadline: Deadline) -> None:
        self._arm(deadline, ReadTimeout, "Write timeout")
        try:
            self._sock.sendall(data)
        except socket.timeout as exc:
            self.close()
            raise ReadTimeout("Write timeout") from exc
        except OSError as exc:
            self.close()
            raise NetworkError(f"Socket write failed: {exc}") from exc

    def recv(self, deadline: Deadline, size: int = RECV_CHUNK_BYTES) -> bytes:
        """Return the next chunk; an empty bytes object means the peer closed the stream."""
        self._arm(deadline, ReadTimeout, "Read timeout")
        try:
            return self._sock.recv(size)
        except socket.timeout as exc:
            self.close()
            raise ReadTimeout("Read timeout") from exc
        except OSError as exc:
            self.close()
            raise NetworkError(f"Socket read failed: {exc}") from exc

    def start_tls(self, server_hostname: str, deadline: Deadline, context: ssl.SSLContext | None = None) -> None:
        """Upgrade the established tunnel in place; the plain socket is owned by the TLS session afterwards."""
        try:
            self._sock = wrap_tunnel(self._sock, server_hostname, deadline, context)
        except Exception:
            self.close()
            raise

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        try:
            self._sock.close()
        except OSError as exc:
            logger.debug("Ignoring error while closing proxy socket: %s", exc)

    def __enter__(self) -> TimedConnection:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()
