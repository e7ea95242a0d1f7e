"""Request value objects produced by assembly and consumed by dispatch."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Literal, Mapping, Optional, Tuple

HttpMethod = Literal["GET", "POST"]


@dataclass
class RequestDraft:
    """Mutable request-in-progress decorated by the auth step.

    Attributes:
        uri: Fully built request URI including the query string.
        headers: Outgoing header mapping.
        cookies: Cookie/session container attached for transport, if any.
        proxies: ``requests``-style proxy mapping configured on the client.
    """

    uri: str
    headers: Dict[str, str] = field(default_factory=dict)
    cookies: Any = None
    proxies: Optional[Dict[str, str]] = None


@dataclass(frozen=True)
class RequestDescriptor:
    """Fully assembled, not-yet-sent request owned by exactly one dispatch."""

    uri: str
    method: HttpMethod
    headers: Mapping[str, str]
    body_params: Tuple[Tuple[str, Optional[str]], ...] = ()
    cookies: Any = field(default=None, compare=False)
    proxies: Optional[Mapping[str, str]] = None

    @classmethod
    def from_draft(
        cls, draft: RequestDraft, body_params: Tuple[Tuple[str, Optional[str]], ...]
    ) -> "RequestDescriptor":
        """Freeze a decorated draft together with its final body parameters."""
        method: HttpMethod = "POST" if body_params else "GET"
        proxies = MappingProxyType(dict(draft.proxies)) if draft.proxies else None
        return cls(
            uri=draft.uri,
            method=method,
            headers=MappingProxyType(dict(draft.headers)),
            body_params=tuple(body_params),
            cookies=draft.cookies,
            proxies=proxies,
        )

    @property
    def has_body(self) -> bool:
        return bool(self.body_params)


__all__ = ["HttpMethod", "RequestDescriptor", "RequestDraft"]
