# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Wire-level data models shared by the proxy verification primitives."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

Headers = dict[str, str]
Scheme = Literal["http", "https"]


@dataclass(frozen=True)
class ProxyDescriptor:
    """Forward-proxy endpoint; `auth_header` is a ready-to-send header line (CRLF included)."""

    host: str
    port: int
    auth_header: str | None = None


@dataclass(frozen=True)
class TargetDescriptor:
    """Normalized target URL."""

    scheme: Scheme
    host: str
    port: int
    path: str
    url: str

    @property
    def is_https(self) -> bool:
        return self.scheme == "https"

    @property
    def authority(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{host}:{self.port}"


@dataclass
class RawResponse:
    """Status line, headers and a capped body preview read off a socket."""

    status_code: int
    status_text: str = ""
    headers: Headers = field(default_factory=dict)
    body: bytes = b""
    bytes_read: int = 0

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def preview(self, max_chars: int) -> str:
        """Decoded, trimmed body text used for lightweight analysis."""
        return self.body.decode("utf-8", errors="replace")[:max_chars].strip()
