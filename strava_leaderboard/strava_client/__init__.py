"""Strava client components (rate limiter, session, pagination, segment lookup)."""

from .base import StravaTransport  # noqa: F401
from .pagination import LeaderboardPage, LeaderboardPager  # noqa: F401
from .rate_limiter import RateLimiter  # noqa: F401
from .segments import SegmentAPI  # noqa: F401
from .session import create_default_session  # noqa: F401
