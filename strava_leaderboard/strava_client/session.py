"""HTTP session factory for Strava frontend and API calls."""

from __future__ import annotations

import requests
from requests import Session
from requests.adapters import HTTPAdapter

from ..config import USER_AGENT

__all__ = ["create_default_session"]


def create_default_session() -> Session:
    """Return a cookie-keeping session that never retries on its own.

    A failed request aborts the whole retrieval, so the adapter is mounted
    with ``max_retries=0``.
    """

    session = requests.Session()
    adapter = HTTPAdapter(max_retries=0)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update(
        {
            "User-Agent": USER_AGENT,
            "Accept-Encoding": "gzip, deflate",
        }
    )
    return session
