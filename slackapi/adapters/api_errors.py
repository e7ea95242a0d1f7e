"""Helpers that turn non-2xx HTTP responses into ``HttpStatusError``."""

from __future__ import annotations

from typing import Any, Optional

from slackapi.domain.errors import HttpStatusError


def parse_error_payload(resp: Any) -> Any:
    """Best-effort extraction of error payload without raising."""
    try:
        return resp.json()
    except Exception:
        snippet = getattr(resp, "text", "")
        if not snippet:
            return None
        return snippet[:400]


def extract_error_code(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        for key in ("error", "code", "error_code"):
            value = payload.get(key)
            if value is None:
                continue
            return value if isinstance(value, str) else str(value)
    return None


def extract_error_hint(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        for key in ("detail", "warning", "needed"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
        metadata = payload.get("response_metadata")
        if isinstance(metadata, dict):
            messages = [m for m in metadata.get("messages") or [] if isinstance(m, str)]
            if messages:
                return "; ".join(messages[:3])[:200]
    if isinstance(payload, str):
        return payload.strip()[:200] or None
    return None


def build_error_message(ctx: str, status: int, payload: Any) -> str:
    code = extract_error_code(payload)
    if code:
        return f"{ctx}: {code} (HTTP {status})"
    return f"{ctx}: HTTP {status}"


def parse_retry_after(resp: Any) -> Optional[float]:
    """Return the ``Retry-After`` header in seconds, if present and numeric."""
    headers = getattr(resp, "headers", None) or {}
    raw = headers.get("Retry-After")
    if raw is None:
        return None
    try:
        return max(0.0, float(str(raw).strip()))
    except ValueError:
        return None


def ensure_ok(resp: Any, ctx: str) -> None:
    """Raise ``HttpStatusError`` for non-2xx responses."""
    status = int(getattr(resp, "status_code", 0) or 0)
    if 200 <= status < 300:
        return
    payload = parse_error_payload(resp)
    raise HttpStatusError(
        build_error_message(ctx, status, payload),
        status=status,
        error_code=extract_error_code(payload),
        hint=extract_error_hint(payload),
        payload=payload,
        retry_after=parse_retry_after(resp),
        context=ctx,
    )


__all__ = [
    "build_error_message",
    "ensure_ok",
    "extract_error_code",
    "extract_error_hint",
    "parse_error_payload",
    "parse_retry_after",
]
