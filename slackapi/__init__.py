"""Typed dispatch layer for the Slack Web API."""

from slackapi.adapters.client import SlackClientBase
from slackapi.adapters.http_client import ClientConfig
from slackapi.domain.decoding import ConverterRegistry
from slackapi.domain.errors import (
    ArgumentError,
    DecodeError,
    HttpStatusError,
    ParameterEncodingError,
    RequestAssemblyError,
    SlackApiError,
    SlackResponseError,
    TransportError,
    UnknownEndpointError,
)
from slackapi.domain.request_path import request_path
from slackapi.domain.responses import Response

__all__ = [
    "ArgumentError",
    "ClientConfig",
    "ConverterRegistry",
    "DecodeError",
    "HttpStatusError",
    "ParameterEncodingError",
    "RequestAssemblyError",
    "Response",
    "SlackApiError",
    "SlackClientBase",
    "SlackResponseError",
    "TransportError",
    "UnknownEndpointError",
    "request_path",
]
