# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import socket

import httpx

from corsmisc.config import ProbeSettings
from corsmisc.errors import ErrorCategory
from corsmisc.http.adapters import StubProbeClient
from corsmisc.http.client import create_default_probe_client
from corsmisc.http.headers import normalize_headers, parse_header_line, raw_header_value
from corsmisc.http.httpx_client import HttpxProbeClient, build_httpx_client
from corsmisc.http.models import ProbeRequest, ProbeResponse


def _client(handler, **settings):
    cfg = ProbeSettings(**settings)
    return HttpxProbeClient(cfg, client=build_httpx_client(cfg, transport=httpx.MockTransport(handler), trust_env=False))


def test_httpx_client_sends_origin_and_returns_cors_headers():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(
            200,
            headers={
                "Access-Control-Allow-Origin": request.headers["origin"],
                "Access-Control-Allow-Credentials": "true",
            },
            content=b"<html>ignored</html>",
        )

    client = _client(handler, headers={"X-Extra": "1"}, user_agent="probe/1.0")
    response = client.send(ProbeRequest(url="https://example.com/api?x=1", origin="null", method="PUT", headers={"X-Extra": "1"}))
    client.close()

    assert response.ok is True
    assert response.status_code == 200
    assert response.acao == "null"
    assert response.acac == "true"
    assert str(seen[0].url) == "https://example.com/api?x=1"
    assert seen[0].method == "PUT"
    assert seen[0].headers["Origin"] == "null"
    assert seen[0].headers["X-Extra"] == "1"
    assert seen[0].headers["User-Agent"] == "probe/1.0"


def test_httpx_client_uses_first_value_of_repeated_cors_headers():
    def handler(request):
        return httpx.Response(
            200,
            headers=[
                ("Access-Control-Allow-Origin", request.headers["origin"]),
                ("Access-Control-Allow-Origin", "https://other.example"),
                ("Access-Control-Allow-Credentials", "true"),
                ("Access-Control-Allow-Credentials", "true"),
            ],
        )

    client = _client(handler)
    response = client.send(ProbeRequest(url="https://example.com/", origin="https://evil.example"))
    client.close()

    assert response.acao == "https://evil.example"
    assert response.acac == "true"


def test_httpx_client_does_not_follow_redirects():
    calls = []

    def handler(request):
        calls.append(str(request.url))
        if request.url.path == "/start":
            return httpx.Response(302, headers={"Location": "https://example.com/final"})
        return httpx.Response(200, headers={"Access-Control-Allow-Origin": "*"})

    client = _client(handler)
    response = client.send(ProbeRequest(url="https://example.com/start", origin="*"))
    assert calls == ["https://example.com/start"]
    assert response.status_code == 302
    assert response.acao is None


def test_httpx_client_converts_timeouts_into_failed_responses():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    response = _client(handler).send(ProbeRequest(url="https://example.com", origin="*"))
    assert response.ok is False
    assert response.error_type == "ConnectTimeout"
    assert response.error_category == ErrorCategory.TIMEOUT
    assert response.acao is None


def test_httpx_client_categorizes_dns_failures():
    def handler(request):
        exc = httpx.ConnectError("name resolution failed", request=request)
        exc.__cause__ = socket.gaierror(-2, "Name or service not known")
        raise exc

    response = _client(handler).send(ProbeRequest(url="https://missing.example", origin="*"))
    assert response.ok is False
    assert response.error_category == ErrorCategory.DNS_ERROR


def test_build_httpx_client_disables_tls_verification_and_redirects_by_default():
    client = build_httpx_client(ProbeSettings(timeout=3.5))
    try:
        assert client.follow_redirects is False
        assert client.timeout.connect == 3.5
        assert client.timeout.read == 3.5
    finally:
        client.close()


def test_create_default_probe_client_returns_httpx_backed_client():
    client = create_default_probe_client(ProbeSettings())
    try:
        assert isinstance(client, HttpxProbeClient)
    finally:
        client.close()


def test_probe_request_origin_overrides_extra_headers():
    request = ProbeRequest(url="https://e.com", origin="https://corsmisc.com", headers={"origin": "x", "Cookie": "a=b"})
    headers = request.build_headers()
    assert headers == {"Cookie": "a=b", "Origin": "https://corsmisc.com"}


def test_probe_response_headers_are_case_insensitive_but_values_untouched():
    response = ProbeResponse(ok=True, headers={"ACCESS-CONTROL-ALLOW-ORIGIN": " https://A.com ", "Access-Control-Allow-Credentials": ""})
    assert response.acao == " https://A.com "
    assert response.acac == ""
    assert ProbeResponse(ok=True).acao is None


def test_header_helpers():
    assert normalize_headers([("X-A", "1"), ("x-b", None)]) == {"x-a": "1", "x-b": ""}
    assert normalize_headers(None) == {}
    assert raw_header_value({"Access-Control-Allow-Origin": "*"}, "access-control-allow-origin") == "*"
    assert raw_header_value({}, "origin") is None
    assert parse_header_line("Cookie: a=b; c=d") == ("Cookie", "a=b; c=d")
    assert parse_header_line("X-Empty:") == ("X-Empty", "")


def test_parse_header_line_rejects_missing_name():
    for bad in ("no-colon", ": value", ""):
        try:
            parse_header_line(bad)
        except ValueError:
            continue
        raise AssertionError(f"{bad!r} should be rejected")


def test_stub_probe_client_lookup_and_default():
    hit = ProbeResponse(ok=True, headers={"Access-Control-Allow-Origin": "null"})
    stub = StubProbeClient({"null": hit})
    assert stub.send(ProbeRequest(url="https://e.com", origin="null")) is hit
    fallback = stub.send(ProbeRequest(url="https://e.com", origin="*"))
    assert fallback.ok is True
    assert fallback.acao is None
    assert [req.origin for req in stub.requests] == ["null", "*"]
    stub.close()
    assert stub.closed is True
