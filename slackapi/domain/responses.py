"""Typed response kinds for the Slack Web API.

Each response kind is a pydantic model deriving from ``Response``. The
``request_path`` decorator records which endpoint a kind belongs to, and the
decoder validates the body against the model fields. Every field carries a
default so a failure-shaped instance can always be built.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import Field, PrivateAttr

from slackapi.domain.decoding import WireModel
from slackapi.domain.errors import SlackResponseError
from slackapi.domain.request_path import request_path

R = TypeVar("R", bound="Response")


class ResponseMetadata(WireModel):
    """Pagination cursor and advisory messages attached by the API."""

    next_cursor: str = ""
    messages: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class Response(WireModel):
    """Envelope shared by every Web API response."""

    ok: bool = False
    error: Optional[str] = None
    warning: Optional[str] = None
    needed: Optional[str] = None
    provided: Optional[str] = None
    response_metadata: Optional[ResponseMetadata] = None

    # Originating exception for failure-shaped values; never decoded.
    _cause: Optional[BaseException] = PrivateAttr(default=None)

    @property
    def cause(self) -> Optional[BaseException]:
        return self._cause

    @classmethod
    def from_failure(cls: Type[R], exc: BaseException) -> R:
        """Build the failure-shaped value delivered to completion handlers."""
        code = getattr(exc, "code", None) or "request_failed"
        value = cls(ok=False, error=str(code))
        value._cause = exc
        return value

    @property
    def failed(self) -> bool:
        return not self.ok

    def raise_for_error(self: R) -> R:
        """Return ``self`` when ``ok`` or raise ``SlackResponseError``."""
        if self.ok:
            return self
        if self._cause is not None:
            raise self._cause
        error = self.error or "unknown_error"
        raise SlackResponseError(
            f"{type(self).__name__}: {error}", error=error, response=self
        )


@request_path("api.test")
class ApiTestResponse(Response):
    args: Dict[str, Any] = Field(default_factory=dict)


@request_path("auth.test")
class AuthTestResponse(Response):
    url: str = ""
    team: str = ""
    user: str = ""
    team_id: str = ""
    user_id: str = ""
    bot_id: Optional[str] = None
    is_enterprise_install: bool = False


class Channel(WireModel):
    id: str = ""
    name: str = ""
    is_channel: bool = False
    is_private: bool = False
    is_archived: bool = False
    created: int = 0
    num_members: Optional[int] = None


@request_path("conversations.list")
class ChannelListResponse(Response):
    channels: List[Channel] = Field(default_factory=list)


class Message(WireModel):
    type: str = "message"
    ts: str = ""
    text: str = ""
    user: Optional[str] = None
    bot_id: Optional[str] = None


@request_path("chat.postMessage")
class PostMessageResponse(Response):
    channel: str = ""
    ts: str = ""
    message: Optional[Message] = None


class User(WireModel):
    id: str = ""
    name: str = ""
    real_name: str = ""
    tz: Optional[str] = None
    is_bot: bool = False
    deleted: bool = False
    updated: int = 0


@request_path("users.info")
class UserInfoResponse(Response):
    user: Optional[User] = None


__all__ = [
    "ApiTestResponse",
    "AuthTestResponse",
    "Channel",
    "ChannelListResponse",
    "Message",
    "PostMessageResponse",
    "Response",
    "ResponseMetadata",
    "User",
    "UserInfoResponse",
]
