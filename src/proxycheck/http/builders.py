# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Hand-built HTTP/1.1 request heads sent to the proxy or through the tunnel."""

from __future__ import annotations

from ..config import DEFAULT_USER_AGENT
from .models import ProxyDescriptor, TargetDescriptor
from .url import host_header

CRLF = "\r\n"


def _encode(lines: list[str]) -> bytes:
    return (CRLF.join(lines) + CRLF + CRLF).encode("utf-8")


def _get_lines(request_target: str, target: TargetDescriptor, user_agent: str, auth_header: str | None) -> list[str]:
    lines = [
        f"GET {request_target} HTTP/1.1",
        f"Host: {host_header(target)}",
    ]
    if auth_header:
        lines.append(auth_header.rstrip(CRLF))
    lines.extend(
        [
            f"User-Agent: {user_agent}",
            "Accept: */*",
            # identity + close: the body ends when the socket does.
            "Accept-Encoding: identity",
            "Connection: close",
        ]
    )
    return lines


def build_absolute_get(target: TargetDescriptor, proxy: ProxyDescriptor, user_agent: str = DEFAULT_USER_AGENT) -> bytes:
    """Absolute-form GET for plain-HTTP targets relayed by the proxy."""
    return _encode(_get_lines(target.url, target, user_agent, proxy.auth_header))


def build_connect(target: TargetDescriptor, proxy: ProxyDescriptor) -> bytes:
    lines = [
        f"CONNECT {target.authority} HTTP/1.1",
        f"Host: {target.authority}",
    ]
    if proxy.auth_header:
        lines.append(proxy.auth_header.rstrip(CRLF))
    lines.extend(["Proxy-Connection: keep-alive", "Connection: keep-alive"])
    return _encode(lines)


def build_origin_get(target: TargetDescriptor, user_agent: str = DEFAULT_USER_AGENT) -> bytes:
    """Origin-form GET sent inside the TLS tunnel; the proxy already authenticated the CONNECT."""
    return _encode(_get_lines(target.path, target, user_agent, None))


__all__ = ["build_absolute_get", "build_connect", "build_origin_get"]
