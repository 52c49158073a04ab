"""Shared HTTP response helpers for Strava requests."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from ..errors import AuthError, FetchError

__all__ = [
    "raise_for_status",
    "extract_error",
]

LOGGER = logging.getLogger(__name__)


def raise_for_status(response: requests.Response, context: str) -> None:
    """Raise the matching typed error for a non-success response."""

    status = response.status_code
    if status < 400:
        return
    detail = extract_error(response)
    suffix = f" | {detail}" if detail else ""
    url = getattr(response, "url", None)

    if status in (401, 403):
        message = f"{context} forbidden (status {status}){suffix}"
        LOGGER.warning(message)
        raise AuthError(message)

    message = f"{context} request failed (status {status}){suffix}"
    LOGGER.error(message)
    raise FetchError(message, url=url, status_code=status)


def extract_error(resp: Optional[requests.Response]) -> Optional[str]:
    """Return compact string with Strava error info (message + codes) if present."""

    if resp is None:
        return None
    headers = getattr(resp, "headers", None) or {}
    content_type = str(headers.get("Content-Type", "")).lower()
    if "json" in content_type:
        data = _safe_json(resp)
        if isinstance(data, dict):
            parts = _collect_error_parts(data)
            return " | ".join(parts) if parts else None
    return _extract_error_text(resp)


def _safe_json(resp: requests.Response) -> Optional[Any]:
    try:
        return resp.json()
    except ValueError as exc:  # pragma: no cover - logging path
        LOGGER.debug(
            "Failed to decode JSON from %s: %s", getattr(resp, "url", "?"), exc
        )
        return None


def _extract_error_text(resp: requests.Response) -> Optional[str]:
    text = getattr(resp, "text", "")
    if not isinstance(text, str):
        return None
    trimmed = text.strip()
    if not trimmed:
        return None
    return (trimmed[:197] + "...") if len(trimmed) > 200 else trimmed


def _collect_error_parts(data: Dict[str, Any]) -> List[str]:
    """Build error snippets from the standard Strava error response."""

    parts: List[str] = []
    message = data.get("message")
    if message:
        parts.append(str(message))
    errors = data.get("errors")
    if isinstance(errors, list):
        for err in errors:
            if not isinstance(err, dict):
                continue
            resource = err.get("resource")
            field = err.get("field")
            code = err.get("code")
            scope = "/".join(filter(None, (resource, field)))
            if code and scope:
                parts.append(f"{scope}:{code}")
            elif code:
                parts.append(str(code))
    return parts
