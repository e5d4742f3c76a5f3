# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging setup for the ProxyCheck CLI and embedding applications."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "PROXYCHECK_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# httpx logs every request at INFO; only the direct IP lookup goes through it.
_CHATTY_LOGGERS = ("httpx", "httpcore")


def resolve_log_level(level: str | None = None) -> int:
    """Explicit `level`, else PROXYCHECK_LOG_LEVEL, else WARNING; unknown names fall back to WARNING."""
    name = (level or os.getenv(LOG_LEVEL_ENV) or "WARNING").strip().upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(level: str | None = None) -> int:
    effective = resolve_log_level(level)
    logging.basicConfig(level=effective, format=LOG_FORMAT)
    logging.getLogger("proxycheck").setLevel(effective)
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if effective <= logging.DEBUG else logging.WARNING)
    return effective


__all__ = ["LOG_LEVEL_ENV", "resolve_log_level", "setup_logging"]
