from __future__ import annotations

from typing import Any, Optional, Protocol, Tuple, Type

QueryParameter = Tuple[str, Optional[str]]
BodyParameter = QueryParameter


# ---- Ports (Hexagonal boundaries) ----
class EndpointResolver(Protocol):
    """Maps a response kind to its relative endpoint path.

    Implementations are deterministic and side-effect free; an unregistered
    kind raises ``UnknownEndpointError``.
    """

    def resolve_path(self, kind: Type[Any]) -> str: ...


class ResponseConverter(Protocol):
    """Pluggable decoder consulted before the standard decoding rules."""

    def can_convert(self, target: Any) -> bool: ...
    def convert(self, value: Any, target: Any) -> Any: ...


class TransportPort(Protocol):
    """Sends a prepared request and returns a ``requests``-like response."""

    def send(self, descriptor: Any) -> Any: ...
    def post_multipart(
        self, uri: str, *, files: Any, token: str, data: Any = None
    ) -> Any: ...
    def close(self) -> None: ...
