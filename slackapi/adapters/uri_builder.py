"""Query string assembly for API request URIs."""

from __future__ import annotations

from typing import List, Optional, Sequence
from urllib.parse import quote

from slackapi.domain.errors import ParameterEncodingError
from slackapi.domain.ports import QueryParameter


def escape_data(text: str) -> str:
    """Percent-encode everything except RFC 3986 unreserved characters."""
    return quote(text, safe="", encoding="utf-8", errors="strict")


def build_uri(
    base_path: str, params: Optional[Sequence[QueryParameter]] = None
) -> str:
    """Append escaped ``name=value`` pairs to ``base_path`` in input order.

    Parameters whose value is ``None`` are dropped. When nothing remains,
    ``base_path`` is returned verbatim (no trailing ``?``).

    Raises:
        ParameterEncodingError: If any name or value cannot be encoded.
    """
    pairs: List[str] = []
    for param in params or ():
        name, value = param
        if value is None:
            continue
        if not name:
            raise ParameterEncodingError(
                f"Failed when processing '{param}': empty parameter name",
                parameter=param,
            )
        try:
            pairs.append(f"{escape_data(name)}={escape_data(value)}")
        except (TypeError, UnicodeError) as exc:
            raise ParameterEncodingError(
                f"Failed when processing '{param}'.", parameter=param, cause=exc
            ) from exc
    query = "&".join(pairs)
    if not query:
        return base_path
    return f"{base_path}?{query}"


def join_path(base: str, relative: str) -> str:
    """Join with exactly one separating slash."""
    if not relative:
        return base
    if not base:
        return relative
    return f"{base.rstrip('/')}/{relative.lstrip('/')}"


__all__ = ["build_uri", "escape_data", "join_path"]
