"""Compose endpoint resolution, URI building, and auth into a request."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence, Type

from slackapi.adapters.auth import apply_request_auth
from slackapi.adapters.uri_builder import build_uri, join_path
from slackapi.domain.errors import RequestAssemblyError
from slackapi.domain.ports import BodyParameter, EndpointResolver, QueryParameter
from slackapi.domain.request import RequestDescriptor, RequestDraft
from slackapi.domain.request_path import RequestPathRegistry

DEFAULT_API_BASE = "https://slack.com/api/"


class RequestAssembler:
    """Build immutable ``RequestDescriptor`` objects for one API base location.

    Assembly is synchronous and performs no I/O; every failure is raised to
    the caller before anything is sent.
    """

    def __init__(
        self,
        api_base_location: str = DEFAULT_API_BASE,
        *,
        resolver: Optional[EndpointResolver] = None,
        proxies: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.api_base_location = api_base_location
        self.resolver: EndpointResolver = resolver or RequestPathRegistry.instance()
        self.proxies = dict(proxies) if proxies else None

    def endpoint_uri(self, kind: Type[Any]) -> str:
        """Absolute endpoint for ``kind`` without a query string."""
        return join_path(self.api_base_location, self.resolver.resolve_path(kind))

    def create_request(self, uri: str) -> RequestDraft:
        """Transport-level request for ``uri`` with the configured proxy, if any."""
        return RequestDraft(uri=uri, proxies=dict(self.proxies) if self.proxies else None)

    def assemble(
        self,
        kind: Type[Any],
        get_params: Optional[Sequence[QueryParameter]] = None,
        post_params: Optional[Sequence[BodyParameter]] = None,
        token: Optional[str] = "",
        cookies: Any = None,
    ) -> RequestDescriptor:
        """Resolve, build, and authenticate a request for ``kind``.

        Raises:
            RequestAssemblyError: Resolution, URI building, or auth failed. The
                original ``UnknownEndpointError`` or ``ParameterEncodingError``
                is kept on ``cause`` and chained as ``__cause__``.
        """
        name = getattr(kind, "__name__", repr(kind))
        try:
            uri = build_uri(self.endpoint_uri(kind), get_params)
            draft = self.create_request(uri)
            body = apply_request_auth(draft, post_params, token, cookies)
        except Exception as exc:
            raise RequestAssemblyError(
                f"Failed to assemble request for {name}: {exc}", context=name, cause=exc
            ) from exc

        descriptor = RequestDescriptor.from_draft(draft, body)
        self._log.debug("Assembled %s %s for %s", descriptor.method, descriptor.uri, name)
        return descriptor


__all__ = ["DEFAULT_API_BASE", "RequestAssembler"]
