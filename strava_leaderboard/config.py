"""Central configuration for the Strava leaderboard scraper.

All values are constants imported by the rest of the package. Secrets are
read from environment variables (optionally via a local `.env`).
"""

from __future__ import annotations

import importlib
import os


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


# Load .env variables when python-dotenv is available.
_load_dotenv = None
try:
    _dotenv_mod = importlib.import_module("dotenv")
    _load_dotenv = getattr(_dotenv_mod, "load_dotenv", None)
except ImportError:
    _load_dotenv = None

if callable(_load_dotenv):
    # Load .env from the current directory or any parent folder.
    _load_dotenv()


# ---------------------------------------------------------------------------
# Strava endpoints
# ---------------------------------------------------------------------------
# Frontend (scraped) and typed API base URLs.
STRAVA_WEB_URL = "https://www.strava.com"
STRAVA_BASE_URL = "https://www.strava.com/api/v3"
STRAVA_LOGIN_URL = f"{STRAVA_WEB_URL}/login"
STRAVA_SESSION_URL = f"{STRAVA_WEB_URL}/session"

# Title of the page served after a successful web login.
DASHBOARD_TITLE = "Dashboard | Strava"

# User agent sent with every request against the frontend and API.
USER_AGENT = "strava-leaderboard/0.1.0"


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------
# Pulled from the environment. Do not hardcode secrets.
STRAVA_EMAIL = os.getenv("STRAVA_EMAIL", "")
STRAVA_PASSWORD = os.getenv("STRAVA_PASSWORD", "")
# Optional API token; only required for typed segment lookups.
STRAVA_ACCESS_TOKEN = os.getenv("STRAVA_ACCESS_TOKEN", "")


# ---------------------------------------------------------------------------
# Request pacing
# ---------------------------------------------------------------------------
# Maximum requests per second against the API and frontend combined.
QPS_LIMIT = _env_float("STRAVA_QPS_LIMIT", 10.0)

# Largest page the frontend honours (the API accepts more).
MAX_PER_PAGE = 100

# Request timeout in seconds.
REQUEST_TIMEOUT = _env_int("STRAVA_REQUEST_TIMEOUT", 10)

# Log every outbound request at DEBUG level.
LOG_REQUESTS = _env_bool("STRAVA_LOG_REQUESTS", False)


# ---------------------------------------------------------------------------
# Excel formatting
# ---------------------------------------------------------------------------
# Automatically size columns after writing each sheet (openpyxl only).
EXCEL_AUTOSIZE_COLUMNS = True
EXCEL_AUTOSIZE_MAX_WIDTH = 50  # characters
EXCEL_AUTOSIZE_MIN_WIDTH = 6  # characters
EXCEL_AUTOSIZE_PADDING = 2  # extra characters added to the detected max
