# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Direct (non-proxied) public IP lookup abstraction and factory."""

from typing import Protocol

from ..config import CheckSettings, load_check_settings


class IpLookup(Protocol):
    """Minimal protocol for discovering the checker's own public IP."""

    def lookup(self) -> str | None: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


def create_default_ip_lookup(settings: CheckSettings | None = None) -> IpLookup:
    """Factory for the default httpx-backed lookup."""
    from .httpx_client import HttpxIpLookup

    return HttpxIpLookup(settings or load_check_settings())
