# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

from proxycheck.api import handle_check
from proxycheck.cli import main as cli_main
from proxycheck.cli.main import build_parser
from proxycheck.config import CheckSettings
from proxycheck.errors import ErrorCategory, InvalidProxy
from proxycheck.models import Timings, VerificationResult
from proxycheck.runtime import ProxyCheck


def _working():
    return VerificationResult(
        proxy="1.2.3.4:8080",
        target_url="https://example.com",
        working=True,
        status_code=200,
        status_text="OK",
        external_ip="9.9.9.9",
        timings=Timings(connect_ms=5, total_ms=40, tunnel_ms=10, tls_ms=15),
        bytes_read=16,
        note="Proxy is working",
    )


def _failed():
    return VerificationResult(
        proxy="1.2.3.4:8080",
        target_url="https://icanhazip.com/",
        working=False,
        timings=Timings(total_ms=6500),
        note="Proxy check failed",
        error="Proxy TCP timeout",
        error_category=ErrorCategory.TIMEOUT,
    )


class StubChecker:
    def __init__(self, result=None, exc=None):
        self.result = result
        self.exc = exc
        self.calls = []
        self.closed = False

    def check(self, proxy, url=None, *, anonymity=False):
        self.calls.append((proxy, url, anonymity))
        if self.exc is not None:
            raise self.exc
        return self.result

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


def test_handle_check_rejects_other_methods():
    status, payload = handle_check({"proxy": "1.2.3.4:8080"}, method="POST")
    assert status == 405
    assert payload == {"ok": False, "error": "Method not allowed"}


def test_handle_check_requires_proxy():
    status, payload = handle_check({"proxy": "   "})
    assert status == 400
    assert payload == {"ok": False, "error": "Missing proxy parameter"}


def test_handle_check_invalid_proxy_is_400():
    checker = ProxyCheck(CheckSettings())
    status, payload = handle_check({"proxy": "1.2.3.4:70000"}, checker=checker)
    assert status == 400
    assert payload["ok"] is False
    assert "port" in payload["error"].lower()


def test_handle_check_unresolvable_proxy_host_is_400():
    status, payload = handle_check({"proxy": "x" * 64 + ".test:8080", "url": "http://example.com/"}, checker=ProxyCheck(CheckSettings()))
    assert status == 400
    assert payload["ok"] is False
    assert payload["error"].startswith("Invalid proxy host")


def test_handle_check_unsupported_target_is_400():
    status, payload = handle_check({"proxy": "1.2.3.4:8080", "url": "ftp://example.com"}, checker=ProxyCheck(CheckSettings()))
    assert status == 400
    assert "http/https" in payload["error"]


def test_handle_check_success_shape():
    checker = StubChecker(_working())
    status, payload = handle_check({"proxy": ["1.2.3.4:8080"], "url": "https://example.com", "anonymity": "yes"}, checker=checker)
    assert status == 200
    assert payload["ok"] is True
    data = payload["data"]
    assert data["working"] is True
    assert data["external_ip"] == "9.9.9.9"
    assert data["latency_ms"] == 40
    assert data["tls_ms"] == 15
    assert checker.calls == [("1.2.3.4:8080", "https://example.com", True)]
    assert checker.closed is False


def test_handle_check_failure_is_still_200():
    status, payload = handle_check({"proxy": "1.2.3.4:8080"}, checker=StubChecker(_failed()))
    assert status == 200
    data = payload["data"]
    assert data["working"] is False
    assert data["error"] == "Proxy TCP timeout"
    assert data["error_category"] == "TIMEOUT"
    assert data["note"] == "Proxy check failed"


def test_build_parser():
    args = build_parser().parse_args(["1.2.3.4:8080", "--url", "http://example.com", "--json", "--timeout", "2"])
    assert args.proxy == "1.2.3.4:8080"
    assert args.url == "http://example.com"
    assert args.json is True
    assert args.timeout == 2.0
    assert args.anonymity is False


def test_cli_pretty_output_and_exit_code(monkeypatch, capsys):
    captured = {}

    def factory(settings):
        captured["settings"] = settings
        return StubChecker(_working())

    monkeypatch.setattr(cli_main, "ProxyCheck", factory)
    code = cli_main.main(["1.2.3.4:8080", "--timeout", "3", "--insecure"])
    output = capsys.readouterr().out
    assert code == 0
    assert "WORKING" in output
    assert "External IP: 9.9.9.9" in output
    assert "tunnel=10ms" in output
    assert captured["settings"].timeout == 3.0
    assert captured["settings"].verify_tls is False


def test_cli_json_output_for_failure(monkeypatch, capsys):
    monkeypatch.setattr(cli_main, "ProxyCheck", lambda settings: StubChecker(_failed()))
    code = cli_main.main(["1.2.3.4:8080", "--json"])
    payload = json.loads(capsys.readouterr().out)
    assert code == 1
    assert payload["ok"] is True
    assert payload["data"]["working"] is False


def test_cli_invalid_input_exit_code(monkeypatch, capsys):
    monkeypatch.setattr(cli_main, "ProxyCheck", lambda settings: StubChecker(exc=InvalidProxy("Invalid proxy port")))
    code = cli_main.main(["nope:port"])
    assert code == 2
    assert "Invalid proxy port" in capsys.readouterr().err
