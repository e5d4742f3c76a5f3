# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Raw-socket HTTP primitives used to talk to forward proxies."""

from .builders import build_absolute_get, build_connect, build_origin_get
from .client import IpLookup, create_default_ip_lookup
from .connection import Deadline, TimedConnection
from .framing import HEADER_DELIMITER, FrameReader, read_body, read_until
from .headers import parse_head, parse_header_lines, parse_status_line
from .httpx_client import HttpxIpLookup
from .models import Headers, ProxyDescriptor, RawResponse, TargetDescriptor
from .tls import create_tls_context, wrap_tunnel
from .url import basic_auth_header, host_header, normalize_proxy_input, parse_proxy, parse_target

__all__ = [
    "Deadline",
    "FrameReader",
    "HEADER_DELIMITER",
    "Headers",
    "HttpxIpLookup",
    "IpLookup",
    "ProxyDescriptor",
    "RawResponse",
    "TargetDescriptor",
    "TimedConnection",
    "basic_auth_header",
    "build_absolute_get",
    "build_connect",
    "build_origin_get",
    "create_default_ip_lookup",
    "create_tls_context",
    "host_header",
    "normalize_proxy_input",
    "parse_head",
    "parse_header_lines",
    "parse_proxy",
    "parse_status_line",
    "parse_target",
    "read_body",
    "read_until",
    "wrap_tunnel",
]
