# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level ProxyCheck facade for verification and anonymity workflows."""

from __future__ import annotations

import logging
from contextlib import suppress
from dataclasses import replace

from .config import CheckSettings, load_check_settings
from .http.client import IpLookup, create_default_ip_lookup
from .models import VerificationResult
from .utils.ip import Anonymity, classify_anonymity
from .verify.engine import ProxyVerifier

logger = logging.getLogger(__name__)


class ProxyCheck:
    """
    Convenience wrapper that wires settings, the verifier and the optional direct-IP lookup.

    The lookup client is only created when an anonymity check is requested.
    """

    def __init__(
        self,
        settings: CheckSettings | None = None,
        *,
        verifier: ProxyVerifier | None = None,
        ip_lookup: IpLookup | None = None,
    ):
        self.settings = settings or load_check_settings()
        self.verifier = verifier or ProxyVerifier(self.settings)
        self._ip_lookup = ip_lookup

    @property
    def ip_lookup(self) -> IpLookup:
        if self._ip_lookup is None:
            self._ip_lookup = create_default_ip_lookup(self.settings)
        return self._ip_lookup

    def check(self, proxy: str, url: str | None = None, *, anonymity: bool = False) -> VerificationResult:
        result = self.verifier.verify(proxy, url)
        if anonymity:
            result = replace(result, anonymity=self.anonymity(result))
        return result

    def anonymity(self, result: VerificationResult) -> Anonymity:
        if not result.working or not result.external_ip:
            return "unknown"
        direct_ip = self.ip_lookup.lookup()
        if direct_ip is None:
            logger.debug("Direct IP unavailable; anonymity of %s unknown", result.proxy)
        return classify_anonymity(result.external_ip, direct_ip)

    def close(self) -> None:
        with suppress(Exception):
            if self._ip_lookup is not None and hasattr(self._ip_lookup, "close"):
                self._ip_lookup.close()

    def __enter__(self) -> "ProxyCheck":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()
