# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for ProxyCheck."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"ProxyCheck/{__version__} (+proxy verification)"

DEFAULT_PROBE_URLS: tuple[str, ...] = (
    "https://api.ipify.org?format=json",
    "https://icanhazip.com/",
)


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = os.getenv(name)
    if value is None:
        return default
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items or default


def _positive(value: float, default: float) -> float:
    return value if value > 0 else default


@dataclass
class CheckSettings:
    """Proxy verification defaults."""

    timeout: float = 6.5
    max_header_bytes: int = 256 * 1024
    max_body_bytes: int = 96 * 1024
    preview_chars: int = 2000
    user_agent: str = DEFAULT_USER_AGENT
    verify_tls: bool = True
    probe_urls: tuple[str, ...] = DEFAULT_PROBE_URLS
    max_probe_urls: int = 5
    ip_lookup_url: str = "https://api.ipify.org?format=json"

    @classmethod
    def from_env(cls) -> "CheckSettings":
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            timeout=_positive(_float_env("PROXYCHECK_TIMEOUT", cls.timeout), cls.timeout),
            max_header_bytes=int(
                _positive(_int_env("PROXYCHECK_MAX_HEADER_BYTES", cls.max_header_bytes), cls.max_header_bytes)
            ),
            max_body_bytes=int(_positive(_int_env("PROXYCHECK_MAX_BODY_BYTES", cls.max_body_bytes), cls.max_body_bytes)),
            preview_chars=int(_positive(_int_env("PROXYCHECK_PREVIEW_CHARS", cls.preview_chars), cls.preview_chars)),
            user_agent=os.getenv("PROXYCHECK_USER_AGENT", cls.user_agent),
            verify_tls=_bool_env("PROXYCHECK_VERIFY_TLS", cls.verify_tls),
            probe_urls=_list_env("PROXYCHECK_PROBE_URLS", DEFAULT_PROBE_URLS),
            max_probe_urls=int(_positive(_int_env("PROXYCHECK_MAX_PROBE_URLS", cls.max_probe_urls), cls.max_probe_urls)),
            ip_lookup_url=os.getenv("PROXYCHECK_IP_LOOKUP_URL", cls.ip_lookup_url),
        )


def load_check_settings() -> CheckSettings:
    """Load verification settings from environment with sensible defaults."""
    return CheckSettings.from_env()
