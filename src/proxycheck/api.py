# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Request boundary for the proxy checker.

`handle_check` turns query parameters into an HTTP status plus JSON-ready
payload. Input problems are 400s; a proxy that does not work is a normal
200 answer with `working: false`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .errors import ProxyCheckError
from .runtime import ProxyCheck

Payload = dict[str, Any]


def _first(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        value = value[0] if value else ""
    return str(value or "").strip()


def _flag(value: Any) -> bool:
    return _first(value).lower() in {"1", "true", "yes", "on"}


def handle_check(
    query: Mapping[str, Any],
    *,
    method: str = "GET",
    checker: ProxyCheck | None = None,
) -> tuple[int, Payload]:
    if method.upper() != "GET":
        return 405, {"ok": False, "error": "Method not allowed"}

    proxy_raw = _first(query.get("proxy"))
    if not proxy_raw:
        return 400, {"ok": False, "error": "Missing proxy parameter"}
    url_raw = _first(query.get("url")) or None

    owns_checker = checker is None
    checker = checker or ProxyCheck()
    try:
        result = checker.check(proxy_raw, url_raw, anonymity=_flag(query.get("anonymity")))
    except ProxyCheckError as exc:
        return 400, {"ok": False, "error": str(exc) or "Invalid proxy"}
    finally:
        if owns_checker:
            checker.close()

    return 200, {"ok": True, "data": result.to_dict()}


__all__ = ["handle_check"]
