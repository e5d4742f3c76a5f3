# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""ProxyCheck CLI."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from ..config import CheckSettings, load_check_settings
from ..errors import ProxyCheckError
from ..log import setup_logging
from ..models import VerificationResult
from ..runtime import ProxyCheck

EXIT_WORKING = 0
EXIT_NOT_WORKING = 1
EXIT_INVALID_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ProxyCheck HTTP(S) forward-proxy verifier")
    parser.add_argument("proxy", help="Proxy as host:port, user:pass@host:port or http://...")
    parser.add_argument("--url", help="Target URL to fetch through the proxy (defaults to built-in IP echo probes)")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON instead of human-friendly summary",
    )
    parser.add_argument("--timeout", type=float, help="Per-phase timeout in seconds")
    parser.add_argument(
        "--anonymity",
        action="store_true",
        help="Compare the proxied IP with this machine's public IP",
    )
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="Skip TLS verification through the tunnel (lab/self-signed targets only)",
    )
    parser.add_argument("--log-level", help="Logging level (default from PROXYCHECK_LOG_LEVEL)")
    return parser


def _print_json(payload: dict[str, Any]) -> None:
    json.dump(payload, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def _pretty_print(result: VerificationResult) -> None:
    verdict = "WORKING" if result.working else "NOT WORKING"
    timings = result.timings

    print(f"[ProxyCheck] {result.proxy}: {verdict}")
    print(f"Target: {result.target_url}")
    status = f"{result.status_code} {result.status_text or ''}".strip()
    print(f"Status: {status if result.status_code else '-'}")
    print(f"External IP: {result.external_ip or '-'}")
    if result.anonymity:
        print(f"Anonymity: {result.anonymity}")

    parts = [f"connect={timings.connect_ms}ms"]
    if timings.tunnel_ms is not None:
        parts.append(f"tunnel={timings.tunnel_ms}ms")
    if timings.tls_ms is not None:
        parts.append(f"tls={timings.tls_ms}ms")
    parts.append(f"total={timings.total_ms}ms")
    print(f"Timings: {', '.join(parts)}")
    print(f"Note: {result.note}")
    if result.error:
        print(f"Error: {result.error} ({result.error_category.value})")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings: CheckSettings = load_check_settings()
    if args.timeout and args.timeout > 0:
        settings.timeout = args.timeout
    if args.insecure:
        settings.verify_tls = False

    try:
        with ProxyCheck(settings) as checker:
            result = checker.check(args.proxy, args.url, anonymity=args.anonymity)
    except ProxyCheckError as exc:
        if args.json:
            _print_json({"ok": False, "error": str(exc)})
        else:
            print(f"[ProxyCheck] Invalid input: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    if args.json:
        _print_json({"ok": True, "data": result.to_dict()})
    else:
        _pretty_print(result)

    return EXIT_WORKING if result.working else EXIT_NOT_WORKING


if __name__ == "__main__":
    raise SystemExit(main())
