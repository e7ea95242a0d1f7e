from __future__ import annotations

import json
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from slackapi.adapters.api_errors import ensure_ok
from slackapi.domain.errors import TransportError
from slackapi.domain.request import RequestDescriptor


@dataclass
class MockResponse:
    """Minimal ``requests.Response`` stand-in."""

    status_code: int = 200
    content: bytes = b"{}"
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return json.loads(self.content)


Outcome = Union[MockResponse, BaseException]


@dataclass
class TransportMock:
    """Offline substitute for ``SlackSession`` with scripted responses.

    Outcomes are keyed by endpoint URI without the query string.
    """

    outcomes: Dict[str, Outcome] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self._lock = threading.Lock()
        self.sent: List[RequestDescriptor] = []
        self.uploads: List[Dict[str, Any]] = []
        self.closed = False

    # ---------- TransportPort ----------

    def send(self, descriptor: RequestDescriptor) -> MockResponse:
        with self._lock:
            self.sent.append(descriptor)
        endpoint = descriptor.uri.split("?", 1)[0]
        outcome = self.outcomes.get(endpoint)
        if outcome is None:
            raise TransportError(f"No scripted response for {endpoint}")
        if isinstance(outcome, BaseException):
            raise outcome
        ensure_ok(outcome, f"{descriptor.method} {descriptor.uri}")
        return outcome

    def post_multipart(
        self, uri: str, *, files: Any, token: str, data: Any = None
    ) -> MockResponse:
        with self._lock:
            self.uploads.append({"uri": uri, "files": files, "token": token, "data": data})
        outcome = self.outcomes.get(uri) or MockResponse()
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def close(self) -> None:
        self.closed = True

    # ---------- Test helpers ----------

    def set_json(
        self,
        endpoint: str,
        payload: Any,
        *,
        status: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.outcomes[endpoint] = MockResponse(
            status_code=status,
            content=json.dumps(payload).encode("utf-8"),
            headers=dict(headers or {}),
        )

    def set_raw(self, endpoint: str, body: bytes, *, status: int = 200) -> None:
        self.outcomes[endpoint] = MockResponse(status_code=status, content=body)

    def set_error(self, endpoint: str, exc: BaseException) -> None:
        self.outcomes[endpoint] = exc
