# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl
from enum import Enum


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    PROXY_REJECTED = "PROXY_REJECTED"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    PROTOCOL_ERROR = "PROTOCOL_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


class ProxyCheckError(Exception):
    """Base class for every failure raised while verifying a proxy."""

    category = ErrorCategory.UNKNOWN_ERROR


class InvalidProxy(ProxyCheckError):
    category = ErrorCategory.INVALID_INPUT


class UnsupportedScheme(ProxyCheckError):
    category = ErrorCategory.INVALID_INPUT


class InvalidTarget(ProxyCheckError):
    category = ErrorCategory.INVALID_INPUT


class ConnectTimeout(ProxyCheckError):
    category = ErrorCategory.TIMEOUT


class ReadTimeout(ProxyCheckError):
    category = ErrorCategory.TIMEOUT


class HeadersTooLarge(ProxyCheckError):
    category = ErrorCategory.PROTOCOL_ERROR


class ConnectRejected(ProxyCheckError):
    """The proxy answered CONNECT with something other than a 2xx status."""

    category = ErrorCategory.PROXY_REJECTED

    def __init__(self, status_code: int, status_text: str = ""):
        self.status_code = status_code
        self.status_text = status_text
        detail = f"{status_code} {status_text}".strip()
        super().__init__(f"CONNECT rejected: {detail}")


class TlsHandshakeFailure(ProxyCheckError):
    category = ErrorCategory.SSL_ERROR


class NetworkError(ProxyCheckError):
    category = ErrorCategory.CONNECTION_ERROR


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map ProxyCheck and raw socket/ssl exceptions to ErrorCategory.
    """
    if isinstance(exc, ProxyCheckError):
        cause = exc.__cause__
        if isinstance(exc, NetworkError) and isinstance(cause, socket.gaierror):
            return ErrorCategory.DNS_ERROR
        return exc.category

    if isinstance(exc, (ssl.SSLError, ssl.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (socket.timeout, TimeoutError)):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Proxy did not respond in time",
        ErrorCategory.PROXY_REJECTED: "Proxy refused to open a tunnel",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue through the tunnel",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.PROTOCOL_ERROR: "Malformed or oversized proxy response",
        ErrorCategory.INVALID_INPUT: "Invalid proxy or target",
        ErrorCategory.UNKNOWN_ERROR: "Network error during check",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Proxy check failed due to network error")


__all__ = [
    "ConnectRejected",
    "ConnectTimeout",
    "ErrorCategory",
    "HeadersTooLarge",
    "InvalidProxy",
    "InvalidTarget",
    "NetworkError",
    "ProxyCheckError",
    "ReadTimeout",
    "TlsHandshakeFailure",
    "UnsupportedScheme",
    "categorize_exception",
    "error_category_to_reason",
]
