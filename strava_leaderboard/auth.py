"""Web login for the Strava frontend.

Leaderboard pages are only complete for a logged in user, so the scraper
signs in with email/password the way the browser does: read the CSRF pair
from the login form, post the credentials and confirm we landed on the
dashboard. Any deviation raises :class:`AuthError`.
"""

from __future__ import annotations

import logging

import requests

from .config import (
    DASHBOARD_TITLE,
    REQUEST_TIMEOUT,
    STRAVA_LOGIN_URL,
    STRAVA_SESSION_URL,
)
from .errors import AuthError
from .parsing import parse_document

LOGGER = logging.getLogger(__name__)


def _mask_email(email: str) -> str:
    local, _, domain = email.partition("@")
    if not domain:
        return "****"
    return f"{local[:1]}****@{domain}"


def login(session: requests.Session, email: str, password: str) -> requests.Session:
    """Sign ``session`` in; its cookie jar carries the authenticated state.

    Raises:
        AuthError: If the login page is unreachable, the CSRF tokens are
            missing, or Strava does not accept the credentials.
    """
    if not email or not password:
        raise AuthError("Missing email or password")

    LOGGER.info("Logging in to Strava as %s", _mask_email(email))
    login_page = _fetch(session, "GET", STRAVA_LOGIN_URL)
    document = parse_document(login_page)
    csrf_param = document.select_one("meta[name=csrf-param]")
    if csrf_param is None or not csrf_param.get("content"):
        raise AuthError("Could not find csrf-param on login page")
    csrf_token = document.select_one("meta[name=csrf-token]")
    if csrf_token is None or not csrf_token.get("content"):
        raise AuthError("Could not find csrf-token on login page")

    form = {
        "email": email,
        "password": password,
        "remember_me": "on",
        str(csrf_param["content"]): str(csrf_token["content"]),
    }
    landing = parse_document(_fetch(session, "POST", STRAVA_SESSION_URL, data=form))
    title = landing.title.get_text().strip() if landing.title else ""
    if title != DASHBOARD_TITLE:
        LOGGER.error("Login unsuccessful; landed on page titled %r", title)
        raise AuthError("Login was unsuccessful")

    LOGGER.info("Strava login succeeded")
    return session


def _fetch(session: requests.Session, method: str, url: str, **kwargs) -> str:
    try:
        response = session.request(method, url, timeout=REQUEST_TIMEOUT, **kwargs)
    except requests.RequestException as exc:
        LOGGER.error("Login transport error for %s: %s", url, exc)
        raise AuthError(f"Could not reach {url}") from exc
    try:
        if response.status_code >= 400:
            LOGGER.error("Login request to %s failed status=%s", url, response.status_code)
            raise AuthError(f"Login request failed with status {response.status_code}")
        return response.text
    finally:
        response.close()
