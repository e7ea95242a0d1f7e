"""Error taxonomy shared by request assembly, transport, and decoding.

Assembly-time errors (``ParameterEncodingError``, ``UnknownEndpointError``,
``RequestAssemblyError``, ``ArgumentError``) are raised synchronously before
any network I/O. Runtime errors (``TransportError``, ``DecodeError``) are
delivered through the completion model that was used for the call.
"""

from __future__ import annotations

from typing import Any, Optional


class SlackApiError(RuntimeError):
    """Base class for every failure raised by the dispatch layer."""

    code = "api_error"

    def __init__(
        self,
        message: str,
        *,
        context: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.context = context
        self.cause = cause


class ParameterEncodingError(SlackApiError):
    """A query parameter name or value could not be percent-encoded."""

    code = "encoding_failed"

    def __init__(
        self,
        message: str,
        *,
        parameter: Any = None,
        context: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, context=context, cause=cause)
        self.parameter = parameter


class UnknownEndpointError(SlackApiError):
    """No endpoint path is registered for a response kind."""

    code = "unknown_endpoint"

    def __init__(self, message: str, *, kind: Any = None) -> None:
        super().__init__(message)
        self.kind = kind


class RequestAssemblyError(SlackApiError):
    """Wraps any failure raised while resolving, building, or decorating a request."""

    code = "assembly_failed"


class TransportError(SlackApiError):
    """Network-level failure during send/receive."""

    code = "transport_error"


class HttpStatusError(TransportError):
    """The API answered with a non-2xx HTTP status."""

    code = "http_error"

    def __init__(
        self,
        message: str,
        *,
        status: int,
        error_code: Optional[str] = None,
        hint: Optional[str] = None,
        payload: Any = None,
        retry_after: Optional[float] = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, context=context)
        self.status = status
        self.error_code = error_code
        self.hint = hint
        self.payload = payload
        self.retry_after = retry_after


class DecodeError(SlackApiError):
    """The response body could not be decoded into the target response kind."""

    code = "decode_failed"

    def __init__(
        self,
        message: str,
        *,
        kind: Any = None,
        path: str = "",
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.kind = kind
        self.path = path


class ArgumentError(SlackApiError, ValueError):
    """A required argument was ``None``."""

    code = "invalid_argument"

    def __init__(self, name: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"Argument '{name}' must not be None")
        self.name = name


class SlackResponseError(SlackApiError):
    """Raised on request by ``Response.raise_for_error`` for ``ok=False`` bodies."""

    def __init__(self, message: str, *, error: str, response: Any = None) -> None:
        super().__init__(message)
        self.code = error
        self.response = response


__all__ = [
    "ArgumentError",
    "DecodeError",
    "HttpStatusError",
    "ParameterEncodingError",
    "RequestAssemblyError",
    "SlackApiError",
    "SlackResponseError",
    "TransportError",
    "UnknownEndpointError",
]
