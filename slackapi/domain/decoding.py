"""JSON decoding into response kinds with pluggable converters.

Response kinds are pydantic models deriving from ``WireModel``. Registered
converters run as a wrap validator on every field: the first converter whose
``can_convert`` accepts the field's declared type (or the non-``None`` member
of an ``Optional``) produces the value, and pydantic's own validation is
skipped for that field.

The ``ConverterRegistry`` is the only state shared across concurrent
dispatches. It is append-only: ``register`` appends under a lock and every
decode reads a snapshot of the entries present at that moment.
"""

from __future__ import annotations

import json
import logging
import threading
import types
import typing
from functools import lru_cache
from typing import Any, Iterable, Iterator, List, Optional, Sequence, Tuple, Type, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic.errors import PydanticSchemaGenerationError

from slackapi.domain.errors import ArgumentError, DecodeError
from slackapi.domain.ports import ResponseConverter

T = TypeVar("T")

_log = logging.getLogger(__name__)
_NONE_TYPE = type(None)
_CONVERTERS_KEY = "converters"


class _ConverterFailure(ValueError):
    """Raised inside validation so pydantic records the field location."""

    def __init__(self, converter: ResponseConverter, exc: BaseException) -> None:
        super().__init__(f"{type(converter).__name__} failed: {exc}")
        self.original = exc


class WireModel(BaseModel):
    """Base for every model decoded from a Web API body.

    Unknown keys are ignored. Field types pydantic has no schema for are
    accepted only as instances, so a JSON value reaches them through a
    registered converter.
    """

    model_config = ConfigDict(extra="ignore", arbitrary_types_allowed=True)

    @field_validator("*", mode="wrap")
    @classmethod
    def apply_registered_converters(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
    ) -> Any:
        converters = (info.context or {}).get(_CONVERTERS_KEY) or ()
        field = cls.model_fields.get(info.field_name or "")
        if converters and field is not None:
            for target in _field_targets(field.annotation, value):
                converter = _find_converter(converters, target)
                if converter is not None:
                    return _convert(converter, value, target)
        return handler(value)


class ConverterRegistry:
    """Process-wide, append-only set of custom decoders."""

    _instance: Optional["ConverterRegistry"] = None
    _instance_lock = threading.Lock()

    @classmethod
    def instance(cls) -> "ConverterRegistry":
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    def __init__(self, converters: Iterable[ResponseConverter] = ()) -> None:
        self._lock = threading.Lock()
        self._converters: List[ResponseConverter] = []
        for converter in converters:
            self.register(converter)

    def register(self, converter: Optional[ResponseConverter]) -> None:
        """Append ``converter``; raises ``ArgumentError`` when it is ``None``."""
        if converter is None:
            raise ArgumentError("converter")
        with self._lock:
            self._converters.append(converter)
        _log.debug("Registered converter %s", type(converter).__name__)

    def snapshot(self) -> Tuple[ResponseConverter, ...]:
        with self._lock:
            return tuple(self._converters)

    def __len__(self) -> int:
        with self._lock:
            return len(self._converters)


def decode_response(
    body: Any, kind: Type[T], converters: Sequence[ResponseConverter] = ()
) -> T:
    """Parse a JSON body and build ``kind`` from it.

    Args:
        body: Raw JSON text or bytes from the HTTP response.
        kind: Response model used as the decode target.
        converters: Converters consulted, in order, before pydantic validation.

    Returns:
        Instance of ``kind``.

    Raises:
        DecodeError: If the body is not a JSON object or does not fit ``kind``.
    """
    try:
        payload = json.loads(body)
    except (TypeError, ValueError) as exc:
        raise DecodeError(
            f"Invalid JSON body for {_type_name(kind)}: {exc}", kind=kind, cause=exc
        ) from exc
    if not isinstance(payload, dict) and not _has_converter(converters, kind):
        raise DecodeError(
            f"Expected JSON object for {_type_name(kind)}, got {type(payload).__name__}",
            kind=kind,
        )
    return decode_value(payload, kind, converters)


def decode_value(
    value: Any, target: Any, converters: Sequence[ResponseConverter] = ()
) -> Any:
    """Validate an already parsed JSON value against ``target``.

    A converter matching ``target`` itself wins over validation; otherwise
    ``target`` is validated through a cached ``TypeAdapter`` with the
    converters passed down to every nested ``WireModel`` field.
    """
    try:
        converter = _find_converter(converters, target)
        if converter is not None:
            return _convert(converter, value, target)
        return _adapter(target).validate_python(
            value, context={_CONVERTERS_KEY: tuple(converters)}
        )
    except _ConverterFailure as exc:
        raise DecodeError(
            f"{exc} at $", kind=target, path="$", cause=exc.original
        ) from exc.original
    except ValidationError as exc:
        raise _validation_failure(exc, target) from exc
    except PydanticSchemaGenerationError as exc:
        raise DecodeError(
            f"No decoding rule for {_type_name(target)}", kind=target, path="$", cause=exc
        ) from exc


@lru_cache(maxsize=None)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def _field_targets(annotation: Any, value: Any) -> Iterator[Any]:
    yield annotation
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        if value is None and _NONE_TYPE in typing.get_args(annotation):
            return
        for arg in typing.get_args(annotation):
            if arg is not _NONE_TYPE:
                yield arg


def _find_converter(
    converters: Sequence[ResponseConverter], target: Any
) -> Optional[ResponseConverter]:
    for converter in converters:
        try:
            matches = converter.can_convert(target)
        except Exception as exc:
            raise _ConverterFailure(converter, exc) from exc
        if matches:
            return converter
    return None


def _convert(converter: ResponseConverter, value: Any, target: Any) -> Any:
    try:
        return converter.convert(value, target)
    except DecodeError:
        raise
    except Exception as exc:
        raise _ConverterFailure(converter, exc) from exc


def _has_converter(converters: Sequence[ResponseConverter], target: Any) -> bool:
    try:
        return _find_converter(converters, target) is not None
    except _ConverterFailure as exc:
        raise DecodeError(
            f"{exc} at $", kind=target, path="$", cause=exc.original
        ) from exc.original


def _validation_failure(exc: ValidationError, target: Any) -> DecodeError:
    first = exc.errors(include_url=False)[0]
    path = _json_path(first.get("loc", ()))
    original = (first.get("ctx") or {}).get("error")
    cause = original.original if isinstance(original, _ConverterFailure) else exc
    return DecodeError(
        f"{first.get('msg', 'invalid value')} at {path} for {_type_name(target)}",
        kind=target,
        path=path,
        cause=cause,
    )


def _json_path(loc: Sequence[Any]) -> str:
    parts = ["$"]
    for item in loc:
        parts.append(f"[{item}]" if isinstance(item, int) else f".{item}")
    return "".join(parts)


def _type_name(target: Any) -> str:
    return getattr(target, "__name__", None) or repr(target)


__all__ = ["ConverterRegistry", "WireModel", "decode_response", "decode_value"]
