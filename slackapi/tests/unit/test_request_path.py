from __future__ import annotations

import pytest

from slackapi.domain.errors import UnknownEndpointError
from slackapi.domain.request_path import RequestPathRegistry, request_path, resolve_path
from slackapi.domain.responses import (
    ApiTestResponse,
    AuthTestResponse,
    ChannelListResponse,
    PostMessageResponse,
    Response,
    UserInfoResponse,
)


@pytest.mark.parametrize(
    "kind, path",
    [
        (ApiTestResponse, "api.test"),
        (AuthTestResponse, "auth.test"),
        (ChannelListResponse, "conversations.list"),
        (PostMessageResponse, "chat.postMessage"),
        (UserInfoResponse, "users.info"),
    ],
)
def test_builtin_kinds_resolve(kind, path):
    assert resolve_path(kind) == path


def test_decorator_registers_on_given_registry():
    registry = RequestPathRegistry()

    @request_path("/reactions.add", registry=registry)
    class ReactionAddResponse(Response):
        pass

    assert registry.resolve_path(ReactionAddResponse) == "reactions.add"
    assert ReactionAddResponse in registry
    assert ReactionAddResponse not in RequestPathRegistry.instance()


def test_unregistered_kind_raises_unknown_endpoint():
    registry = RequestPathRegistry()

    with pytest.raises(UnknownEndpointError) as excinfo:
        registry.resolve_path(AuthTestResponse)

    assert excinfo.value.kind is AuthTestResponse


def test_conflicting_registration_is_rejected():
    registry = RequestPathRegistry()
    registry.register(AuthTestResponse, "auth.test")
    registry.register(AuthTestResponse, "auth.test")

    with pytest.raises(ValueError):
        registry.register(AuthTestResponse, "auth.revoke")


def test_empty_path_is_rejected():
    with pytest.raises(ValueError):
        RequestPathRegistry().register(AuthTestResponse, "  ")
