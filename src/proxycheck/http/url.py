# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Proxy/target endpoint parsing."""

from __future__ import annotations

import base64
import re
from urllib.parse import quote, unquote, urlsplit, urlunsplit

from ..errors import InvalidProxy, InvalidTarget, UnsupportedScheme
from .models import ProxyDescriptor, TargetDescriptor

DEFAULT_PROXY_PORT = 8080
DEFAULT_PORTS = {"http": 80, "https": 443}

# Reserved and already-escaped characters pass through; anything else is percent-encoded.
_URL_SAFE = "/%:@!$&'()*+,;=?~"

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


def normalize_proxy_input(raw: str) -> str:
    """
    Accept `host:port`, `user:pass@host:port` or a full `scheme://...` URL.

    Scheme-less input is treated as `http://`; the proxy transport is always
    plain HTTP regardless of the scheme given.
    """
    value = str(raw or "").strip()
    if not value:
        return ""
    if _SCHEME_RE.match(value):
        return value
    return f"http://{value}"


def basic_auth_header(username: str, password: str) -> str:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Proxy-Authorization: Basic {token}\r\n"


def parse_proxy(raw: str) -> ProxyDescriptor:
    """Parse user proxy input into a ProxyDescriptor or raise InvalidProxy."""
    normalized = normalize_proxy_input(raw)
    if not normalized:
        raise InvalidProxy("Missing proxy parameter")

    try:
        parts = urlsplit(normalized)
        host = parts.hostname or ""
        port = parts.port
    except ValueError as exc:
        raise InvalidProxy(f"Invalid proxy: {exc}") from exc

    if not host:
        raise InvalidProxy("Invalid proxy host")
    try:
        host = host.encode("idna").decode("ascii")
    except UnicodeError as exc:
        raise InvalidProxy(f"Invalid proxy host: {host!r}") from exc
    if port is None:
        port = DEFAULT_PROXY_PORT
    if not 1 <= port <= 65535:
        raise InvalidProxy("Invalid proxy port")

    auth_header = None
    if parts.username or parts.password:
        auth_header = basic_auth_header(unquote(parts.username or ""), unquote(parts.password or ""))

    return ProxyDescriptor(host=host, port=port, auth_header=auth_header)


def parse_target(raw: str) -> TargetDescriptor:
    """Parse a probe URL; only http and https are accepted."""
    value = str(raw or "").strip()
    try:
        parts = urlsplit(value)
        port = parts.port
    except ValueError as exc:
        raise InvalidTarget(f"Invalid target URL: {exc}") from exc

    scheme = parts.scheme.lower()
    if scheme not in DEFAULT_PORTS:
        raise UnsupportedScheme(f"Only http/https supported, got {scheme or 'no scheme'!r}")

    host = parts.hostname or ""
    if not host:
        raise InvalidTarget("Invalid target host")
    try:
        host = host.encode("idna").decode("ascii")
    except UnicodeError as exc:
        raise InvalidTarget(f"Invalid target host: {host!r}") from exc

    if port is None:
        port = DEFAULT_PORTS[scheme]
    if not 1 <= port <= 65535:
        raise InvalidTarget("Invalid target port")

    raw_path = quote(parts.path or "/", safe=_URL_SAFE)
    query = quote(parts.query, safe=_URL_SAFE)
    path = f"{raw_path}?{query}" if query else raw_path

    url = urlunsplit((scheme, _netloc(scheme, host, port), raw_path, query, ""))
    return TargetDescriptor(scheme=scheme, host=host, port=port, path=path, url=url)  # type: ignore[arg-type]


def _netloc(scheme: str, host: str, port: int) -> str:
    bracketed = f"[{host}]" if ":" in host else host
    if port == DEFAULT_PORTS[scheme]:
        return bracketed
    return f"{bracketed}:{port}"


def host_header(target: TargetDescriptor) -> str:
    """Host header value; the port is only spelled out when it is not the scheme default."""
    return _netloc(target.scheme, target.host, target.port)


__all__ = [
    "DEFAULT_PORTS",
    "DEFAULT_PROXY_PORT",
    "basic_auth_header",
    "host_header",
    "normalize_proxy_input",
    "parse_proxy",
    "parse_target",
]
