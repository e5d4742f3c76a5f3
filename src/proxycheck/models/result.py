# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Verification result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..errors import ErrorCategory


@dataclass(frozen=True)
class Timings:
    """Milliseconds between the significant instants of one attempt; never negative."""

    connect_ms: int = 0
    total_ms: int = 0
    tunnel_ms: int | None = None
    tls_ms: int | None = None


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of verifying one proxy against one target URL."""

    proxy: str
    target_url: str
    working: bool
    status_code: int = 0
    status_text: str | None = None
    external_ip: str | None = None
    timings: Timings = field(default_factory=Timings)
    bytes_read: int = 0
    note: str = ""
    error: str | None = None
    error_category: ErrorCategory = ErrorCategory.NONE
    anonymity: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Response `data` object; absent optional values are omitted rather than null."""
        data: dict[str, Any] = {
            "proxy": self.proxy,
            "working": self.working,
            "target_url": self.target_url,
            "external_ip": self.external_ip,
            "status_code": self.status_code,
            "status_text": self.status_text or None,
            "latency_ms": self.timings.total_ms,
            "connect_ms": self.timings.connect_ms,
            "tunnel_ms": self.timings.tunnel_ms,
            "tls_ms": self.timings.tls_ms,
            "bytes_read": self.bytes_read,
            "note": self.note,
            "error": self.error,
            "anonymity": self.anonymity,
        }
        if self.error:
            data["error_category"] = self.error_category.value
        return {key: value for key, value in data.items() if value is not None}
