# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""TLS client handshake over an established CONNECT tunnel."""

from __future__ import annotations

import socket
import ssl
from typing import TYPE_CHECKING

from ..errors import NetworkError, TlsHandshakeFailure

if TYPE_CHECKING:
    from .connection import Deadline


def create_tls_context(verify: bool = True) -> ssl.SSLContext:
    """Default client context; verification is only relaxed on explicit request."""
    context = ssl.create_default_context()
    if not verify:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def wrap_tunnel(
    sock: socket.socket,
    server_hostname: str,
    deadline: Deadline,
    context: ssl.SSLContext | None = None,
) -> ssl.SSLSocket:
    """
    Run a TLS client handshake over `sock`, bound to `server_hostname` for SNI
    and certificate hostname checks.

    The returned SSLSocket owns the underlying descriptor. On failure the
    session is closed before TlsHandshakeFailure/NetworkError is raised.
    """
    if deadline.expired:
        raise TlsHandshakeFailure("TLS timeout")

    context = context or create_tls_context()
    tls_sock = context.wrap_socket(sock, server_hostname=server_hostname, do_handshake_on_connect=False)
    try:
        tls_sock.settimeout(deadline.remaining() or 0.001)
        tls_sock.do_handshake()
    except socket.timeout as exc:
        tls_sock.close()
        raise TlsHandshakeFailure("TLS timeout") from exc
    except (ssl.SSLError, ssl.CertificateError) as exc:
        tls_sock.close()
        raise TlsHandshakeFailure(f"TLS error: {exc}") from exc
    except OSError as exc:
        tls_sock.close()
        raise NetworkError(f"TLS transport error: {exc}") from exc
    return tls_sock


__all__ = ["create_tls_context", "wrap_tunnel"]
