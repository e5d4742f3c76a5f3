# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
ProxyCheck package entrypoint.

This package verifies HTTP(S) forward proxies by speaking raw HTTP/1.1 over a
TCP socket: absolute-form GETs for plain targets, CONNECT plus a TLS
handshake for HTTPS targets. Domain objects are modeled with typed
dataclasses, and the direct-IP lookup used for anonymity checks sits behind an
injectable interface.
"""

from .api import handle_check
from .config import CheckSettings, load_check_settings
from .errors import (
    ConnectRejected,
    ConnectTimeout,
    ErrorCategory,
    HeadersTooLarge,
    InvalidProxy,
    InvalidTarget,
    NetworkError,
    ProxyCheckError,
    ReadTimeout,
    TlsHandshakeFailure,
    UnsupportedScheme,
)
from .http import HttpxIpLookup, IpLookup, create_default_ip_lookup, parse_proxy, parse_target
from .log import setup_logging
from .models import ProxyDescriptor, RawResponse, TargetDescriptor, Timings, VerificationResult
from .runtime import ProxyCheck
from .verify import ProxyVerifier, verify_proxy
from .version import __version__

__all__ = [
    "CheckSettings",
    "ConnectRejected",
    "ConnectTimeout",
    "ErrorCategory",
    "HeadersTooLarge",
    "HttpxIpLookup",
    "InvalidProxy",
    "InvalidTarget",
    "IpLookup",
    "NetworkError",
    "ProxyCheck",
    "ProxyCheckError",
    "ProxyDescriptor",
    "ProxyVerifier",
    "RawResponse",
    "ReadTimeout",
    "TargetDescriptor",
    "Timings",
    "TlsHandshakeFailure",
    "UnsupportedScheme",
    "VerificationResult",
    "__version__",
    "create_default_ip_lookup",
    "handle_check",
    "load_check_settings",
    "parse_proxy",
    "parse_target",
    "setup_logging",
    "verify_proxy",
]
