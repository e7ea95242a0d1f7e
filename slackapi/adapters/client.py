"""Client facade tying assembly and dispatch together.

Usage:
    >>> with SlackClientBase() as client:
    ...     future = client.api_get_request_async(AuthTestResponse, token="xoxb-...")
    ...     response = future.result()
"""

from __future__ import annotations

import dataclasses
import logging
from concurrent.futures import Future
from typing import Any, Callable, Dict, Optional, Sequence, Type, TypeVar

from slackapi.adapters.assembler import RequestAssembler
from slackapi.adapters.dispatcher import Dispatcher
from slackapi.adapters.http_client import ClientConfig, SlackSession
from slackapi.domain.decoding import ConverterRegistry
from slackapi.domain.ports import (
    EndpointResolver,
    QueryParameter,
    ResponseConverter,
    TransportPort,
)

K = TypeVar("K")
Params = Optional[Sequence[QueryParameter]]


class SlackClientBase:
    """Typed dispatch over the Slack Web API.

    Endpoints are selected by response kind (see ``request_path``), never by
    URL strings. Every call is assembled synchronously, so assembly errors
    raise here; network and decoding faults arrive through the completion
    model that was used.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        proxies: Optional[Dict[str, str]] = None,
        transport: Optional[TransportPort] = None,
        converters: Optional[ConverterRegistry] = None,
        resolver: Optional[EndpointResolver] = None,
    ) -> None:
        """Create a client.

        Args:
            config: Base location, timeout, pool size, and proxy settings.
            proxies: Proxy mapping; overrides ``config.proxies`` when given.
            transport: Transport to use instead of a ``SlackSession``.
            converters: Registry consulted on decode; defaults to the
                process-wide ``ConverterRegistry.instance()``.
            resolver: Endpoint resolver; defaults to the ``request_path`` registry.
        """
        self._log = logging.getLogger(__name__)
        self.config = config or ClientConfig()
        if proxies is not None:
            self.config = dataclasses.replace(self.config, proxies=dict(proxies))
        self.converters = converters if converters is not None else ConverterRegistry.instance()
        self.assembler = RequestAssembler(
            self.config.api_base_location,
            resolver=resolver,
            proxies=self.config.proxies,
        )
        self.transport: TransportPort = transport or SlackSession(self.config)
        self.dispatcher = Dispatcher(
            self.transport, self.converters, max_workers=self.config.max_workers
        )

    # ---------- Configuration ----------

    @property
    def api_base_location(self) -> str:
        return self.assembler.api_base_location

    @api_base_location.setter
    def api_base_location(self, value: str) -> None:
        self.assembler.api_base_location = value

    @property
    def proxies(self) -> Optional[Dict[str, str]]:
        return self.assembler.proxies

    def register_converter(self, converter: Optional[ResponseConverter]) -> None:
        """Add ``converter`` to the registry read by every decode."""
        self.converters.register(converter)

    # ---------- Dispatch ----------

    def api_request(
        self,
        kind: Type[K],
        callback: Callable[[K], Any],
        get_params: Params = None,
        post_params: Params = None,
        token: Optional[str] = "",
        cookies: Any = None,
    ) -> "Future[None]":
        """Callback model: ``callback`` receives the decoded or failure-shaped response."""
        descriptor = self.assembler.assemble(kind, get_params, post_params, token, cookies)
        return self.dispatcher.dispatch_callback(descriptor, kind, callback)

    def api_request_async(
        self,
        kind: Type[K],
        get_params: Params = None,
        post_params: Params = None,
        token: Optional[str] = "",
        cookies: Any = None,
    ) -> "Future[K]":
        """Future model: resolves with the decoded response or fails with the fault."""
        descriptor = self.assembler.assemble(kind, get_params, post_params, token, cookies)
        return self.dispatcher.dispatch_future(descriptor, kind)

    def api_get_request(
        self,
        kind: Type[K],
        callback: Callable[[K], Any],
        *get_params: QueryParameter,
        token: Optional[str] = "",
        cookies: Any = None,
    ) -> "Future[None]":
        return self.api_request(kind, callback, get_params, (), token, cookies)

    def api_get_request_async(
        self,
        kind: Type[K],
        *get_params: QueryParameter,
        token: Optional[str] = "",
        cookies: Any = None,
    ) -> "Future[K]":
        return self.api_request_async(kind, get_params, (), token, cookies)

    def post_request_async(
        self,
        request_uri: str,
        files: Dict[str, Any],
        token: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> "Future[Any]":
        """POST a multipart form to an absolute URI; resolves with the raw response."""
        self._log.debug("Multipart POST %s", request_uri)
        return self.dispatcher.submit(
            self.transport.post_multipart, request_uri, files=files, token=token, data=data
        )

    # ---------- Lifecycle ----------

    def close(self) -> None:
        self.dispatcher.shutdown(wait=True)
        self.transport.close()

    def __enter__(self) -> "SlackClientBase":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


__all__ = ["SlackClientBase"]
