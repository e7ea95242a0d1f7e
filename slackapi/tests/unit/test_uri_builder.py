from __future__ import annotations

from urllib.parse import parse_qsl, urlsplit

import pytest

from slackapi.adapters.uri_builder import build_uri, join_path
from slackapi.domain.errors import ParameterEncodingError


def test_build_uri_preserves_order_and_escapes_values():
    params = [("text", "a&b c"), ("channel", "C1"), ("emoji", "café=ok/?")]

    uri = build_uri("https://slack.com/api/chat.postMessage", params)

    query = urlsplit(uri).query
    assert query.startswith("text=a%26b%20c&channel=C1&")
    assert parse_qsl(query) == params


def test_build_uri_drops_absent_values():
    uri = build_uri("https://slack.com/api/users.info", [("foo", "bar"), ("baz", None)])

    assert uri == "https://slack.com/api/users.info?foo=bar"


def test_build_uri_all_absent_returns_base_without_question_mark():
    base = "https://slack.com/api/auth.test"

    assert build_uri(base, [("a", None), ("b", None)]) == base
    assert build_uri(base, []) == base
    assert build_uri(base, None) == base


def test_build_uri_keeps_unreserved_characters():
    uri = build_uri("https://x/api", [("cursor", "abc-_.~XYZ09")])

    assert uri == "https://x/api?cursor=abc-_.~XYZ09"


def test_build_uri_escapes_names_too():
    uri = build_uri("https://x/api", [("a b", "1")])

    assert uri == "https://x/api?a%20b=1"


def test_empty_string_value_is_kept():
    assert build_uri("https://x/api", [("cursor", "")]) == "https://x/api?cursor="


def test_unencodable_value_names_offending_parameter():
    bad = ("text", "\ud800")

    with pytest.raises(ParameterEncodingError) as excinfo:
        build_uri("https://x/api", [("ok", "1"), bad])

    assert excinfo.value.parameter == bad
    assert "text" in str(excinfo.value)


def test_non_string_value_fails_encoding():
    with pytest.raises(ParameterEncodingError) as excinfo:
        build_uri("https://x/api", [("limit", 10)])  # type: ignore[list-item]

    assert excinfo.value.parameter == ("limit", 10)
    assert isinstance(excinfo.value.__cause__, TypeError)


def test_empty_name_is_rejected():
    with pytest.raises(ParameterEncodingError):
        build_uri("https://x/api", [("", "value")])


@pytest.mark.parametrize(
    "base, relative",
    [
        ("https://slack.com/api/", "auth.test"),
        ("https://slack.com/api", "auth.test"),
        ("https://slack.com/api/", "/auth.test"),
        ("https://slack.com/api//", "//auth.test"),
    ],
)
def test_join_path_uses_exactly_one_slash(base, relative):
    assert join_path(base, relative) == "https://slack.com/api/auth.test"
