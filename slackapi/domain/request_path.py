"""Endpoint path registry keyed by response kind.

Response kinds declare their relative endpoint with the ``request_path``
decorator; ``RequestPathRegistry.resolve_path`` is the default
``EndpointResolver`` used by request assembly.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, Optional, Type, TypeVar

from slackapi.domain.errors import UnknownEndpointError

T = TypeVar("T", bound=type)


class RequestPathRegistry:
    """Thread-safe mapping of response kinds to relative API paths."""

    _instance: Optional["RequestPathRegistry"] = None
    _instance_lock = threading.Lock()

    @classmethod
    def instance(cls) -> "RequestPathRegistry":
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    def __init__(self) -> None:
        self._paths: Dict[Type[Any], str] = {}
        self._lock = threading.Lock()

    def register(self, kind: Type[Any], path: str) -> None:
        normalized = str(path or "").strip().lstrip("/")
        if not normalized:
            raise ValueError(f"Empty request path for {kind!r}")
        with self._lock:
            existing = self._paths.get(kind)
            if existing is not None and existing != normalized:
                raise ValueError(
                    f"{kind.__name__} already mapped to '{existing}', refusing '{normalized}'"
                )
            self._paths[kind] = normalized

    def resolve_path(self, kind: Type[Any]) -> str:
        with self._lock:
            path = self._paths.get(kind)
        if path is None:
            name = getattr(kind, "__name__", repr(kind))
            raise UnknownEndpointError(f"No request path registered for {name}", kind=kind)
        return path

    def __contains__(self, kind: object) -> bool:
        with self._lock:
            return kind in self._paths


def request_path(
    path: str, *, registry: Optional[RequestPathRegistry] = None
) -> Callable[[T], T]:
    """Class decorator recording the relative endpoint of a response kind.

    Example:
        >>> @request_path("auth.test")
        ... class AuthTestResponse(Response): ...
    """

    def decorate(kind: T) -> T:
        (registry or RequestPathRegistry.instance()).register(kind, path)
        return kind

    return decorate


def resolve_path(kind: Type[Any]) -> str:
    """Resolve ``kind`` against the process-wide registry."""
    return RequestPathRegistry.instance().resolve_path(kind)


__all__ = ["RequestPathRegistry", "request_path", "resolve_path"]
