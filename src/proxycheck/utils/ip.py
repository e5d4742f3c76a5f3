# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""External IP extraction and anonymity classification."""

from __future__ import annotations

import json
import re
from typing import Literal

Anonymity = Literal["transparent", "anonymous", "unknown"]

_IPV4_RE = re.compile(r"\b(\d{1,3}(?:\.\d{1,3}){3})\b")


def extract_external_ip(preview: str | None) -> str | None:
    """
    Best-effort IP from an "echo my IP" response body.

    JSON bodies with a string `ip` or `origin` field win; otherwise the first
    IPv4-shaped substring is used.
    """
    text = str(preview or "").strip()
    if not text:
        return None

    try:
        data = json.loads(text)
    except ValueError:
        data = None
    if isinstance(data, dict):
        for key in ("ip", "origin"):
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()

    match = _IPV4_RE.search(text)
    return match.group(1) if match else None


def classify_anonymity(external_ip: str | None, direct_ip: str | None) -> Anonymity:
    """Compare what the target saw through the proxy with the checker's own public IP."""
    if not external_ip or not direct_ip:
        return "unknown"
    seen = {part.strip() for part in external_ip.split(",")}
    if direct_ip.strip() in seen:
        return "transparent"
    return "anonymous"


__all__ = ["Anonymity", "classify_anonymity", "extract_external_ip"]
