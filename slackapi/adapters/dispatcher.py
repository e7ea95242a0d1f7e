"""Execute assembled requests under two completion models.

Both models run the same ``execute`` step on a worker thread: send the
descriptor, then decode the body with the converters registered at decode
time. They differ only in how completion is delivered:

* ``dispatch_future`` returns a ``concurrent.futures.Future`` that resolves
  with the decoded response or fails with the originating fault.
* ``dispatch_callback`` invokes the handler exactly once, with the decoded
  response or with a failure-shaped response built by ``from_failure``.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional, Type, TypeVar

from slackapi.domain.decoding import ConverterRegistry, decode_response
from slackapi.domain.errors import SlackApiError, TransportError
from slackapi.domain.ports import TransportPort
from slackapi.domain.request import RequestDescriptor

K = TypeVar("K")


class Dispatcher:
    """Run request descriptors on a thread pool and decode the results."""

    def __init__(
        self,
        transport: TransportPort,
        converters: ConverterRegistry,
        *,
        max_workers: int = 8,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.transport = transport
        self.converters = converters
        self._pool = ThreadPoolExecutor(
            max_workers=max(1, int(max_workers)), thread_name_prefix="slackapi"
        )

    def execute(self, descriptor: RequestDescriptor, kind: Type[K]) -> K:
        """Send ``descriptor`` and decode the body into ``kind`` (blocking)."""
        self._log.debug("Sending %s %s", descriptor.method, descriptor.uri)
        try:
            resp = self.transport.send(descriptor)
        except SlackApiError as exc:
            self._log.warning("%s %s failed: %s", descriptor.method, descriptor.uri, exc)
            raise
        except Exception as exc:
            self._log.warning("%s %s failed: %s", descriptor.method, descriptor.uri, exc)
            raise TransportError(
                f"Unexpected transport failure for {descriptor.uri}: {exc}",
                context=f"{descriptor.method} {descriptor.uri}",
                cause=exc,
            ) from exc
        body = getattr(resp, "content", None)
        if body is None:
            body = getattr(resp, "text", "")
        try:
            return decode_response(body, kind, self.converters.snapshot())
        except SlackApiError as exc:
            self._log.warning("Decoding %s from %s failed: %s", kind.__name__, descriptor.uri, exc)
            raise

    def dispatch_future(self, descriptor: RequestDescriptor, kind: Type[K]) -> "Future[K]":
        return self._pool.submit(self.execute, descriptor, kind)

    def dispatch_callback(
        self,
        descriptor: RequestDescriptor,
        kind: Type[K],
        callback: Callable[[K], Any],
    ) -> "Future[None]":
        """Run the request and deliver its outcome to ``callback`` once.

        Returns the worker future so callers (and tests) may wait for the
        handler to have run; callers are not required to keep it.
        """
        return self._pool.submit(self._run_with_callback, descriptor, kind, callback)

    def _run_with_callback(
        self,
        descriptor: RequestDescriptor,
        kind: Type[K],
        callback: Callable[[K], Any],
    ) -> None:
        try:
            result = self.execute(descriptor, kind)
        except Exception as exc:
            try:
                result = self._failure(kind, exc)
            except TypeError:
                self._log.exception(
                    "Completion handler for %s not called: %s has no failure shape",
                    descriptor.uri,
                    getattr(kind, "__name__", kind),
                )
                raise
        try:
            callback(result)
        except Exception:
            self._log.exception("Completion handler for %s raised", descriptor.uri)

    @staticmethod
    def _failure(kind: Type[K], exc: BaseException) -> K:
        from_failure: Optional[Callable[[BaseException], K]] = getattr(kind, "from_failure", None)
        if from_failure is None:
            raise TypeError(f"{kind.__name__} cannot represent failures") from exc
        return from_failure(exc)

    def submit(self, fn: Callable[..., K], *args: Any, **kwargs: Any) -> "Future[K]":
        """Run an arbitrary transport call on the dispatch pool."""
        return self._pool.submit(fn, *args, **kwargs)

    def shutdown(self, wait: bool = True) -> None:
        self._pool.shutdown(wait=wait)


__all__ = ["Dispatcher"]
