"""Shared HTTP transport for Slack Web API calls.

This module provides a thin wrapper around ``requests.Session`` so the
dispatcher can share timeout policy, TLS pinning, and proxy routing.

Dependencies:
    - ``requests`` for network I/O.
    - ``ssl`` for the TLS 1.2 floor mounted on the HTTPS adapter.

Call context:
    - Constructed by ``SlackClientBase`` from a ``ClientConfig``.
    - Used only by ``Dispatcher``; no retries are performed. A failed send is
      terminal for that call.
"""

from __future__ import annotations

import http.cookiejar
import logging
import os
import ssl
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import exceptions as req_exc
from requests.adapters import HTTPAdapter

from slackapi.adapters.api_errors import ensure_ok
from slackapi.adapters.assembler import DEFAULT_API_BASE
from slackapi.adapters.auth import AUTH_HEADER
from slackapi.domain.errors import TransportError
from slackapi.domain.request import RequestDescriptor

_log = logging.getLogger(__name__)

_ENV_BASE_URL = "SLACKAPI_BASE_URL"
_ENV_TIMEOUT = "SLACKAPI_TIMEOUT_S"
_ENV_MAX_WORKERS = "SLACKAPI_MAX_WORKERS"
_ENV_PROXIES = {"https": "SLACKAPI_HTTPS_PROXY", "http": "SLACKAPI_HTTP_PROXY"}


def _env_number(name: str, fallback: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return fallback
    try:
        value = float(raw)
    except ValueError:
        _log.warning("Ignoring invalid %s=%r", name, raw)
        return fallback
    return value if value > 0 else fallback


@dataclass
class ClientConfig:
    """Transport and dispatch configuration for one client.

    Attributes:
        api_base_location: Root URI all endpoint paths are joined under.
        request_timeout_s: Timeout passed to ``requests`` for each call.
        max_workers: Size of the dispatch thread pool.
        proxies: ``requests``-style ``{"https": "http://proxy:3128"}`` mapping.
        user_agent: ``User-Agent`` header sent with every request.
    """

    api_base_location: str = DEFAULT_API_BASE
    request_timeout_s: float = 30
    max_workers: int = 8
    proxies: Optional[Dict[str, str]] = None
    user_agent: str = "slackapi-dispatch"

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Read overrides from ``SLACKAPI_*`` environment variables."""
        defaults = cls()
        proxies = {
            scheme: os.environ[var].strip()
            for scheme, var in _ENV_PROXIES.items()
            if (os.getenv(var) or "").strip()
        }
        return cls(
            api_base_location=(os.getenv(_ENV_BASE_URL) or "").strip()
            or defaults.api_base_location,
            request_timeout_s=_env_number(_ENV_TIMEOUT, defaults.request_timeout_s),
            max_workers=int(_env_number(_ENV_MAX_WORKERS, defaults.max_workers)),
            proxies=proxies or None,
        )


class Tls12HttpAdapter(HTTPAdapter):
    """HTTPS adapter refusing anything older than TLS 1.2."""

    def init_poolmanager(self, *args: Any, **kwargs: Any) -> None:
        kwargs["ssl_context"] = self._ssl_context()
        super().init_poolmanager(*args, **kwargs)

    def proxy_manager_for(self, proxy: str, **proxy_kwargs: Any) -> Any:
        proxy_kwargs["ssl_context"] = self._ssl_context()
        return super().proxy_manager_for(proxy, **proxy_kwargs)

    @staticmethod
    def _ssl_context() -> ssl.SSLContext:
        context = ssl.create_default_context()
        context.minimum_version = ssl.TLSVersion.TLSv1_2
        return context


class _NoStoreCookiePolicy(http.cookiejar.DefaultCookiePolicy):
    """Refuse every ``Set-Cookie`` so the shared session jar stays empty.

    Cookies reach a request only through the descriptor's own jar.
    """

    def set_ok(self, cookie: http.cookiejar.Cookie, request: Any) -> bool:
        return False


class SlackSession:
    """``requests.Session`` wrapper that sends assembled request descriptors.

    This class is intentionally transport-only. Callers decide how to decode
    2xx bodies; non-2xx statuses raise ``HttpStatusError``.
    """

    def __init__(self, cfg: Optional[ClientConfig] = None) -> None:
        """Create a session with the TLS floor mounted for ``https://``.

        Args:
            cfg: Shared timeout, proxy, and header settings.
        """
        self.cfg = cfg or ClientConfig()
        self.session = requests.Session()
        self.session.cookies.set_policy(_NoStoreCookiePolicy())
        self.session.mount("https://", Tls12HttpAdapter())
        self.session.headers["User-Agent"] = self.cfg.user_agent

    def send(self, descriptor: RequestDescriptor) -> requests.Response:
        """Send one descriptor as GET (no body) or form-encoded POST.

        Raises:
            TransportError: On timeout, connection, or other ``requests`` failure.
            HttpStatusError: On a non-2xx response.
        """
        context = f"{descriptor.method} {descriptor.uri}"
        kwargs: Dict[str, Any] = {
            "headers": dict(descriptor.headers),
            "timeout": self.cfg.request_timeout_s,
        }
        if descriptor.cookies is not None:
            kwargs["cookies"] = descriptor.cookies
        if descriptor.proxies:
            kwargs["proxies"] = dict(descriptor.proxies)
        if descriptor.has_body:
            kwargs["data"] = list(descriptor.body_params)
        try:
            resp = self.session.request(descriptor.method, descriptor.uri, **kwargs)
        except req_exc.Timeout as exc:
            raise TransportError(f"Timeout contacting {descriptor.uri}", context=context, cause=exc) from exc
        except req_exc.ConnectionError as exc:
            raise TransportError(f"Cannot connect to {descriptor.uri}", context=context, cause=exc) from exc
        except req_exc.RequestException as exc:
            raise TransportError(str(exc), context=context, cause=exc) from exc
        ensure_ok(resp, context)
        return resp

    def post_multipart(
        self,
        uri: str,
        *,
        files: Dict[str, Any],
        token: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        """POST a multipart form to an absolute URI with a bearer header.

        The response is returned as-is so upload helpers can inspect it.

        Raises:
            TransportError: On timeout, connection, or other ``requests`` failure.
        """
        context = f"POST {uri}"
        try:
            return self.session.post(
                uri,
                files=files,
                data=data,
                headers={AUTH_HEADER: f"Bearer {token}"},
                proxies=dict(self.cfg.proxies) if self.cfg.proxies else None,
                timeout=self.cfg.request_timeout_s,
            )
        except req_exc.RequestException as exc:
            raise TransportError(f"Upload to {uri} failed: {exc}", context=context, cause=exc) from exc

    def close(self) -> None:
        self.session.close()


__all__ = ["ClientConfig", "SlackSession", "Tls12HttpAdapter"]
