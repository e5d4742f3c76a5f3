# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Proxy verification orchestrator."""

from __future__ import annotations

import logging
import ssl
import time
from collections.abc import Callable, Sequence

from ..config import CheckSettings, load_check_settings
from ..errors import ConnectRejected, ErrorCategory, ProxyCheckError
from ..http import (
    Deadline,
    FrameReader,
    ProxyDescriptor,
    RawResponse,
    TargetDescriptor,
    TimedConnection,
    build_absolute_get,
    build_connect,
    build_origin_get,
    create_tls_context,
    parse_head,
    parse_proxy,
    parse_target,
    read_body,
    read_until,
)
from ..models import Timings, VerificationResult
from ..utils.ip import extract_external_ip

logger = logging.getLogger(__name__)

NOTE_WORKING = "Proxy is working"
NOTE_NOT_PASSED = "Proxy did not pass the check"
NOTE_FAILED = "Proxy check failed"

Connector = Callable[[str, int, float], TimedConnection]


class AttemptTimer:
    """Records instants of one attempt relative to its start, in whole milliseconds."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._start = clock()
        self._marks: dict[str, int] = {}

    def mark(self, name: str) -> None:
        self._marks[name] = max(0, int((self._clock() - self._start) * 1000))

    def timings(self) -> Timings:
        if "done" not in self._marks:
            self.mark("done")
        marks = self._marks
        connect = marks.get("connect")
        tunnel = marks.get("tunnel")
        tls = marks.get("tls")
        return Timings(
            connect_ms=connect or 0,
            total_ms=marks["done"],
            tunnel_ms=None if tunnel is None or connect is None else max(0, tunnel - connect),
            tls_ms=None if tls is None or tunnel is None else max(0, tls - tunnel),
        )


class ProxyVerifier:
    """
    Drives one verification: connect to the proxy, relay a request to each
    probe URL in turn, and report the first working attempt (or the last
    failure).

    Every attempt opens and tears down exactly one connection; nothing is
    shared between calls, so a single verifier may be used concurrently.
    """

    def __init__(
        self,
        settings: CheckSettings | None = None,
        *,
        tls_context: ssl.SSLContext | None = None,
        connector: Connector | None = None,
    ):
        self.settings = settings or load_check_settings()
        self.tls_context = tls_context or create_tls_context(self.settings.verify_tls)
        self._connect = connector or TimedConnection.open

    def probe_urls(self, url: str | None = None) -> list[str]:
        if url:
            return [url]
        return list(self.settings.probe_urls)[: self.settings.max_probe_urls]

    def verify(self, proxy: str, url: str | None = None) -> VerificationResult:
        """
        Verify `proxy` against `url`, or against the configured probe URLs.

        InvalidProxy, UnsupportedScheme and InvalidTarget are raised before
        any socket is opened; every later failure is folded into the result.
        """
        descriptor = parse_proxy(proxy)
        targets = self._parse_targets(self.probe_urls(url))
        *fallbacks, (last_url, last_target) = targets

        for index, (raw_url, target) in enumerate(fallbacks, start=1):
            logger.debug("Attempt %d/%d: %s via %s:%d", index, len(targets), raw_url, descriptor.host, descriptor.port)
            result = self.attempt(descriptor, target, label=proxy, target_url=raw_url)
            if result.working:
                return result
            logger.debug(
                "Attempt %d/%d failed for %s: %s (%s)",
                index,
                len(targets),
                raw_url,
                result.error or result.status_code,
                result.error_category.value,
            )

        logger.debug("Attempt %d/%d: %s via %s:%d", len(targets), len(targets), last_url, descriptor.host, descriptor.port)
        return self.attempt(descriptor, last_target, label=proxy, target_url=last_url)

    @staticmethod
    def _parse_targets(urls: Sequence[str]) -> list[tuple[str, TargetDescriptor]]:
        if not urls:
            raise ValueError("At least one probe URL is required")
        return [(url, parse_target(url)) for url in urls]

    def attempt(
        self,
        proxy: ProxyDescriptor,
        target: TargetDescriptor,
        *,
        label: str = "",
        target_url: str = "",
    ) -> VerificationResult:
        """One connection, one target; never raises for network-phase failures."""
        label = label or f"{proxy.host}:{proxy.port}"
        target_url = target_url or target.url
        timer = AttemptTimer()
        try:
            with self._connect(proxy.host, proxy.port, self.settings.timeout) as conn:
                timer.mark("connect")
                if target.is_https:
                    response = self._via_tunnel(conn, proxy, target, timer)
                else:
                    response = self._exchange(conn, build_absolute_get(target, proxy, self.settings.user_agent))
            timer.mark("done")
        except ConnectRejected as exc:
            return VerificationResult(
                proxy=label,
                target_url=target_url,
                working=False,
                status_code=exc.status_code,
                status_text=exc.status_text or "CONNECT failed",
                timings=timer.timings(),
                note=NOTE_NOT_PASSED,
                error=str(exc),
                error_category=exc.category,
            )
        except ProxyCheckError as exc:
            return VerificationResult(
                proxy=label,
                target_url=target_url,
                working=False,
                timings=timer.timings(),
                note=NOTE_FAILED,
                error=str(exc),
                error_category=exc.category,
            )

        return self._build_result(label, target_url, response, timer.timings())

    def _via_tunnel(
        self,
        conn: TimedConnection,
        proxy: ProxyDescriptor,
        target: TargetDescriptor,
        timer: AttemptTimer,
    ) -> RawResponse:
        conn.send(build_connect(target, proxy), Deadline(self.settings.timeout))
        head, tail = read_until(conn, self._header_reader(), Deadline(self.settings.timeout))
        if tail:
            logger.debug("Discarding %d unexpected bytes after CONNECT response", len(tail))
        reply = parse_head(head)
        timer.mark("tunnel")
        if not 200 <= reply.status_code < 300:
            raise ConnectRejected(reply.status_code, reply.status_text)

        conn.start_tls(target.host, Deadline(self.settings.timeout), self.tls_context)
        timer.mark("tls")
        return self._exchange(conn, build_origin_get(target, self.settings.user_agent))

    def _exchange(self, conn: TimedConnection, request: bytes) -> RawResponse:
        conn.send(request, Deadline(self.settings.timeout))
        head, tail = read_until(conn, self._header_reader(), Deadline(self.settings.timeout))
        response = parse_head(head)
        response.body = read_body(conn, tail, self.settings.max_body_bytes, Deadline(self.settings.timeout))
        response.bytes_read = len(response.body)
        return response

    def _header_reader(self) -> FrameReader:
        return FrameReader(max_bytes=self.settings.max_header_bytes)

    def _build_result(
        self,
        label: str,
        target_url: str,
        response: RawResponse,
        timings: Timings,
    ) -> VerificationResult:
        error = None
        category = ErrorCategory.NONE
        if response.status_code == 0:
            error = "Malformed status line in response"
            category = ErrorCategory.PROTOCOL_ERROR

        return VerificationResult(
            proxy=label,
            target_url=target_url,
            working=response.ok,
            status_code=response.status_code,
            status_text=response.status_text or None,
            external_ip=extract_external_ip(response.preview(self.settings.preview_chars)),
            timings=timings,
            bytes_read=response.bytes_read,
            note=NOTE_WORKING if response.ok else NOTE_NOT_PASSED,
            error=error,
            error_category=category,
        )


def verify_proxy(proxy: str, url: str | None = None, *, settings: CheckSettings | None = None) -> VerificationResult:
    """Convenience wrapper around a throwaway ProxyVerifier."""
    return ProxyVerifier(settings).verify(proxy, url)


__all__ = ["AttemptTimer", "NOTE_FAILED", "NOTE_NOT_PASSED", "NOTE_WORKING", "ProxyVerifier", "verify_proxy"]
