"""Shared request path: rate limiting, counting and error mapping."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from ..config import LOG_REQUESTS, REQUEST_TIMEOUT
from ..errors import FetchError, ParseError, StravaError
from .rate_limiter import RateLimiter
from .response_handling import raise_for_status

LOGGER = logging.getLogger(__name__)


class StravaTransport:
    """Issue GETs through one session under one combined rate budget.

    ``request_count`` is bumped once per outbound request. It is not
    synchronised; one transport serves one logical caller at a time.
    """

    def __init__(
        self,
        session: requests.Session,
        limiter: Optional[RateLimiter] = None,
        *,
        timeout: int = REQUEST_TIMEOUT,
    ) -> None:
        self.session = session
        self._limiter = limiter
        self._timeout = timeout
        self.request_count = 0

    def get(
        self,
        url: str,
        context: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        """GET ``url``; the caller owns (and must close) the response."""

        if self._limiter is not None:
            self._limiter.acquire()
        self.request_count += 1
        if LOG_REQUESTS:
            LOGGER.debug("GET %s params=%s (request #%d)", url, params, self.request_count)
        try:
            response = self.session.get(
                url,
                params=params,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            message = f"{context} network error: {exc.__class__.__name__}: {exc}"
            LOGGER.error(message)
            raise FetchError(message, url=url) from exc
        try:
            raise_for_status(response, context)
        except StravaError:
            response.close()
            raise
        return response

    def get_text(self, url: str, context: str) -> str:
        """GET ``url`` and return the decoded body, releasing the response."""

        response = self.get(url, context)
        try:
            return response.text
        finally:
            response.close()

    def get_json(
        self,
        url: str,
        context: str,
        *,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        response = self.get(url, context, headers=headers)
        try:
            return response.json()
        except ValueError as exc:
            message = f"{context} returned non-JSON payload"
            LOGGER.error(message)
            raise ParseError(message, field="json") from exc
        finally:
            response.close()
