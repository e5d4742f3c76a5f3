# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from proxycheck.http.builders import build_absolute_get, build_connect, build_origin_get
from proxycheck.http.url import parse_proxy, parse_target


def _lines(raw: bytes) -> list[str]:
    assert raw.endswith(b"\r\n\r\n")
    return raw.decode("utf-8").split("\r\n")[:-2]


def test_absolute_get_carries_full_url_and_auth():
    proxy = parse_proxy("user:pass@1.2.3.4:8080")
    target = parse_target("http://example.com/ip?x=1")
    lines = _lines(build_absolute_get(target, proxy, "UA/1"))
    assert lines[0] == "GET http://example.com/ip?x=1 HTTP/1.1"
    assert "Host: example.com" in lines
    assert proxy.auth_header.rstrip("\r\n") in lines
    assert "User-Agent: UA/1" in lines
    assert "Accept: */*" in lines
    assert "Accept-Encoding: identity" in lines
    assert "Connection: close" in lines


def test_absolute_get_without_auth_has_no_proxy_authorization():
    raw = build_absolute_get(parse_target("http://example.com"), parse_proxy("1.2.3.4:8080"))
    assert b"Proxy-Authorization" not in raw


def test_connect_request_targets_authority():
    proxy = parse_proxy("user:pass@1.2.3.4:8080")
    lines = _lines(build_connect(parse_target("https://example.com"), proxy))
    assert lines[0] == "CONNECT example.com:443 HTTP/1.1"
    assert "Host: example.com:443" in lines
    assert any(line.startswith("Proxy-Authorization: Basic ") for line in lines)
    assert "Proxy-Connection: keep-alive" in lines


def test_origin_get_uses_path_and_never_auth():
    target = parse_target("https://api.ipify.org?format=json")
    lines = _lines(build_origin_get(target, "UA/1"))
    assert lines[0] == "GET /?format=json HTTP/1.1"
    assert "Host: api.ipify.org" in lines
    assert not any(line.startswith("Proxy-Authorization") for line in lines)
    assert "Connection: close" in lines
