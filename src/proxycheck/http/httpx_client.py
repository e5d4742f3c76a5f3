# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed IpLookup implementation."""

from __future__ import annotations

import logging

import httpx

from ..config import CheckSettings, load_check_settings
from ..utils.ip import extract_external_ip
from .client import IpLookup

logger = logging.getLogger(__name__)


class HttpxIpLookup(IpLookup):
    """Synchronous httpx client asking an echo service for our public IP, without any proxy."""

    def __init__(self, settings: CheckSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_check_settings()
        self._client = client or httpx.Client(
            timeout=self.settings.timeout,
            verify=self.settings.verify_tls,
            trust_env=False,
        )

    def lookup(self) -> str | None:
        try:
            resp = self._client.get(
                self.settings.ip_lookup_url,
                headers={"User-Agent": self.settings.user_agent, "Accept-Encoding": "identity"},
            )
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            logger.debug("Direct IP lookup via %s failed: %s", self.settings.ip_lookup_url, exc)
            return None
        return extract_external_ip(resp.text[: self.settings.preview_chars])

    def close(self) -> None:
        self._client.close()
