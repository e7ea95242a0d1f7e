from __future__ import annotations

import pytest
from requests.cookies import RequestsCookieJar

from slackapi.adapters.auth import apply_request_auth
from slackapi.domain.request import RequestDraft


def _draft() -> RequestDraft:
    return RequestDraft(uri="https://slack.com/api/auth.test")


@pytest.mark.parametrize("token", ["xoxc-123", ""])
def test_cookie_strategy_appends_token_param(token):
    """Cookies present: token goes into the body, even when it is empty."""
    draft = _draft()
    jar = RequestsCookieJar()
    original = [("channel", "C1")]

    body = apply_request_auth(draft, original, token, jar)

    assert body == (("channel", "C1"), ("token", token))
    assert original == [("channel", "C1")]
    assert draft.cookies is jar
    assert "Authorization" not in draft.headers


def test_empty_cookie_jar_still_selects_cookie_strategy():
    draft = _draft()

    body = apply_request_auth(draft, (), "xoxc-1", RequestsCookieJar())

    assert body == (("token", "xoxc-1"),)
    assert draft.headers == {}


def test_bearer_strategy_sets_header_and_keeps_body():
    draft = _draft()
    original = (("channel", "C1"), ("text", "hi"))

    body = apply_request_auth(draft, original, "xoxb-abc", None)

    assert draft.headers["Authorization"] == "Bearer xoxb-abc"
    assert body == original
    assert draft.cookies is None


def test_no_cookie_and_no_token_attaches_nothing():
    draft = _draft()

    body = apply_request_auth(draft, [("a", "1")], "", None)

    assert draft.headers == {}
    assert draft.cookies is None
    assert body == (("a", "1"),)


def test_returned_params_are_a_copy():
    original = [("a", "1")]

    body = apply_request_auth(_draft(), original, "t", RequestsCookieJar())

    assert body is not original
    assert len(original) == 1
    assert len(body) == 2


def test_none_post_params_treated_as_empty():
    assert apply_request_auth(_draft(), None, "t", None) == ()
