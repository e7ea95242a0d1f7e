"""Authentication decoration for outgoing API requests.

Exactly one strategy applies per request:

* cookie-session: when cookie material is given (even an empty jar), the jar
  is attached to the request and ``token`` is appended as a body parameter.
  The token is appended even when it is empty.
* bearer header: when no cookies are given and the token is non-empty,
  ``Authorization: Bearer <token>`` is set and the body is left unchanged.

With neither cookies nor a token the request carries no credentials.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, Tuple

from slackapi.domain.ports import BodyParameter
from slackapi.domain.request import RequestDraft

_log = logging.getLogger(__name__)

TOKEN_PARAM = "token"
AUTH_HEADER = "Authorization"


def apply_request_auth(
    request: RequestDraft,
    post_params: Optional[Sequence[BodyParameter]],
    token: Optional[str],
    cookies: Any = None,
) -> Tuple[BodyParameter, ...]:
    """Decorate ``request`` and return the final body parameters.

    Args:
        request: Draft to decorate with a header or cookie jar.
        post_params: Caller's body parameters; never mutated.
        token: API token, may be empty.
        cookies: Cookie/session container, or ``None``.

    Returns:
        New tuple of body parameters, with ``("token", token)`` appended when
        the cookie strategy applies.
    """
    actual = tuple(tuple(p) for p in (post_params or ()))

    if cookies is not None:
        request.cookies = cookies
        _log.debug("Cookie auth for %s", request.uri)
        return actual + ((TOKEN_PARAM, token or ""),)

    if token:
        request.headers[AUTH_HEADER] = f"Bearer {token}"
        _log.debug("Bearer auth for %s", request.uri)
    else:
        _log.debug("No credentials attached for %s", request.uri)
    return actual


__all__ = ["AUTH_HEADER", "TOKEN_PARAM", "apply_request_auth"]
