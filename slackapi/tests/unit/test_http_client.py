"""Tests for the requests-based transport and its configuration."""

from __future__ import annotations

import json
import ssl

import pytest

pytest.importorskip("requests")

from requests import exceptions as req_exc
from requests.cookies import RequestsCookieJar

from slackapi.adapters.assembler import RequestAssembler
from slackapi.adapters.http_client import ClientConfig, SlackSession, Tls12HttpAdapter
from slackapi.domain.errors import HttpStatusError, TransportError
from slackapi.domain.responses import AuthTestResponse, PostMessageResponse


class _FakeResponse:
    """Minimal response double compatible with the status helpers."""

    def __init__(self, status_code: int, payload: object, headers=None) -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = json.dumps(payload)
        self.content = self.text.encode("utf-8")
        self.headers = dict(headers or {})

    def json(self):
        return self._payload


class _FakeRequestsSession:
    """Records ``request``/``post`` calls and replays one outcome."""

    def __init__(self, outcome) -> None:
        self.outcome = outcome
        self.calls = []
        self.closed = False

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if isinstance(self.outcome, BaseException):
            raise self.outcome
        return self.outcome

    def post(self, url, **kwargs):
        return self.request("POST", url, **kwargs)

    def close(self):
        self.closed = True


def _session_with(outcome, cfg=None) -> SlackSession:
    session = SlackSession(cfg or ClientConfig(request_timeout_s=7))
    session.session = _FakeRequestsSession(outcome)
    return session


def test_get_descriptor_is_sent_without_body():
    session = _session_with(_FakeResponse(200, {"ok": True}))
    descriptor = RequestAssembler().assemble(AuthTestResponse, [("a", "1")], token="xoxb-1")

    session.send(descriptor)

    [call] = session.session.calls
    assert call["method"] == "GET"
    assert call["url"] == "https://slack.com/api/auth.test?a=1"
    assert call["headers"] == {"Authorization": "Bearer xoxb-1"}
    assert call["timeout"] == 7
    assert "data" not in call
    assert "cookies" not in call


def test_post_descriptor_sends_form_body_cookies_and_proxy():
    jar = RequestsCookieJar()
    jar.set("d", "cookie-value", domain="slack.com")
    session = _session_with(_FakeResponse(200, {"ok": True}))
    assembler = RequestAssembler(proxies={"https": "http://proxy:3128"})
    descriptor = assembler.assemble(
        PostMessageResponse, None, [("channel", "C1")], token="xoxc-1", cookies=jar
    )

    session.send(descriptor)

    [call] = session.session.calls
    assert call["method"] == "POST"
    assert call["data"] == [("channel", "C1"), ("token", "xoxc-1")]
    assert call["cookies"] is jar
    assert call["proxies"] == {"https": "http://proxy:3128"}
    assert "Authorization" not in call["headers"]


@pytest.mark.parametrize(
    "exc",
    [req_exc.ConnectTimeout("slow"), req_exc.ConnectionError("refused"), req_exc.InvalidURL("bad")],
)
def test_requests_failures_become_transport_errors(exc):
    session = _session_with(exc)

    with pytest.raises(TransportError) as excinfo:
        session.send(RequestAssembler().assemble(AuthTestResponse))

    assert excinfo.value.cause is exc
    assert excinfo.value.context == "GET https://slack.com/api/auth.test"


def test_no_retry_on_failure():
    session = _session_with(req_exc.ConnectionError("refused"))

    with pytest.raises(TransportError):
        session.send(RequestAssembler().assemble(AuthTestResponse))

    assert len(session.session.calls) == 1


def test_non_2xx_raises_http_status_error():
    session = _session_with(
        _FakeResponse(503, {"ok": False, "error": "service_unavailable"}, {"Retry-After": "5"})
    )

    with pytest.raises(HttpStatusError) as excinfo:
        session.send(RequestAssembler().assemble(AuthTestResponse))

    err = excinfo.value
    assert err.status == 503
    assert err.error_code == "service_unavailable"
    assert err.retry_after == 5.0
    assert "HTTP 503" in str(err)


def test_post_multipart_uses_bearer_header():
    session = _session_with(_FakeResponse(200, {"ok": True}))
    files = {"file": ("a.txt", b"hello", "text/plain")}

    resp = session.post_multipart(
        "https://files.slack.com/upload/v1/abc", files=files, token="xoxb-9", data={"x": "1"}
    )

    [call] = session.session.calls
    assert resp.status_code == 200
    assert call["url"] == "https://files.slack.com/upload/v1/abc"
    assert call["headers"] == {"Authorization": "Bearer xoxb-9"}
    assert call["files"] is files
    assert call["data"] == {"x": "1"}


def test_https_adapter_pins_tls12():
    session = SlackSession()
    try:
        adapter = session.session.get_adapter("https://slack.com/api/auth.test")
        assert isinstance(adapter, Tls12HttpAdapter)
        assert Tls12HttpAdapter._ssl_context().minimum_version == ssl.TLSVersion.TLSv1_2
        assert session.session.headers["User-Agent"] == "slackapi-dispatch"
    finally:
        session.close()


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("SLACKAPI_BASE_URL", "https://gov.slack.test/api/")
    monkeypatch.setenv("SLACKAPI_TIMEOUT_S", "12.5")
    monkeypatch.setenv("SLACKAPI_MAX_WORKERS", "3")
    monkeypatch.setenv("SLACKAPI_HTTPS_PROXY", "http://proxy:3128")
    monkeypatch.delenv("SLACKAPI_HTTP_PROXY", raising=False)

    cfg = ClientConfig.from_env()

    assert cfg.api_base_location == "https://gov.slack.test/api/"
    assert cfg.request_timeout_s == 12.5
    assert cfg.max_workers == 3
    assert cfg.proxies == {"https": "http://proxy:3128"}


def test_config_from_env_ignores_invalid_numbers(monkeypatch):
    for var in ("SLACKAPI_BASE_URL", "SLACKAPI_HTTPS_PROXY", "SLACKAPI_HTTP_PROXY"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("SLACKAPI_TIMEOUT_S", "soon")
    monkeypatch.setenv("SLACKAPI_MAX_WORKERS", "-2")

    cfg = ClientConfig.from_env()

    assert cfg == ClientConfig()
