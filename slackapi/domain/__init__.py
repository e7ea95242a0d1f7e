"""Domain package exports for response kinds, request values, and errors."""

from .decoding import ConverterRegistry, WireModel, decode_response
from .request import RequestDescriptor, RequestDraft
from .request_path import RequestPathRegistry, request_path, resolve_path
from .responses import (
    ApiTestResponse,
    AuthTestResponse,
    ChannelListResponse,
    PostMessageResponse,
    Response,
    ResponseMetadata,
    UserInfoResponse,
)

__all__ = [
    "ApiTestResponse",
    "AuthTestResponse",
    "ChannelListResponse",
    "ConverterRegistry",
    "PostMessageResponse",
    "RequestDescriptor",
    "RequestDraft",
    "RequestPathRegistry",
    "Response",
    "ResponseMetadata",
    "UserInfoResponse",
    "WireModel",
    "decode_response",
    "request_path",
    "resolve_path",
]
