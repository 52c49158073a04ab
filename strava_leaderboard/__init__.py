"""Strava segment leaderboard scraper package."""

from .errors import AuthError, FetchError, ParseError, StravaError
from .models import Athlete, Filter, Gender, Leaderboard, LeaderboardEntry, Segment
from .strava_api import StravaLeaderboardClient, leaderboard_url

__all__ = [
    "StravaLeaderboardClient",
    "leaderboard_url",
    "Athlete",
    "Filter",
    "Gender",
    "Leaderboard",
    "LeaderboardEntry",
    "Segment",
    "StravaError",
    "AuthError",
    "FetchError",
    "ParseError",
]
