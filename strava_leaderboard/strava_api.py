"""Strava leaderboard client: typed API segment lookup plus scraped leaderboards.

Public surface:
- StravaLeaderboardClient.login(email, password, access_token=None)
- get_segment, get_leaderboard, get_leaderboard_and_segment,
  get_leaderboard_page, get_leaderboard_page_and_segment
- leaderboard_url(segment_id, gender, filter)
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import requests

from .auth import login
from .config import MAX_PER_PAGE, STRAVA_WEB_URL
from .models import Filter, Gender, Leaderboard, Segment
from .strava_client import (
    LeaderboardPager,
    RateLimiter,
    SegmentAPI,
    StravaTransport,
    create_default_session,
)

LOGGER = logging.getLogger(__name__)


def leaderboard_url(segment_id: int, gender: Gender, filter: Filter) -> str:
    """Return the frontend leaderboard URL without the ``page`` parameter."""

    url = f"{STRAVA_WEB_URL}/segments/{segment_id}?"
    # current_year is ignored by Strava unless a date_range accompanies it.
    if filter is Filter.CURRENT_YEAR:
        url = f"{url}date_range=this_year&"
    return (
        f"{url}filter={filter.value}&gender={gender.value}&per_page={MAX_PER_PAGE}"
    )


class StravaLeaderboardClient:
    """Retrieves segments and leaderboards for a logged in Strava user.

    Every request (API or frontend) waits on the same rate limiter and is
    counted in :attr:`request_count`. Calls are sequential and blocking; use
    one client per caller.
    """

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        limiter: RateLimiter | None = None,
        access_token: str | None = None,
    ) -> None:
        self._transport = StravaTransport(session or create_default_session(), limiter)
        self._pager = LeaderboardPager(self._transport)
        self._segments = SegmentAPI(self._transport, access_token)

    @classmethod
    def login(
        cls,
        email: str,
        password: str,
        access_token: str | None = None,
        *,
        limiter: RateLimiter | None = None,
    ) -> "StravaLeaderboardClient":
        """Return a client whose session is signed in to the frontend."""

        session = login(create_default_session(), email, password)
        return cls(
            session=session,
            limiter=limiter if limiter is not None else RateLimiter(),
            access_token=access_token,
        )

    @property
    def request_count(self) -> int:
        return self._transport.request_count

    def get_segment(self, segment_id: int) -> Segment:
        return self._segments.get_segment(segment_id)

    def get_leaderboard(
        self, segment_id: int, gender: Gender, filter: Filter
    ) -> Leaderboard:
        leaderboard, _ = self._pager.fetch_all(
            leaderboard_url(segment_id, gender, filter), gender
        )
        return leaderboard

    def get_leaderboard_and_segment(
        self, segment_id: int, gender: Gender, filter: Filter
    ) -> Tuple[Leaderboard, Optional[Segment]]:
        return self._pager.fetch_all(
            leaderboard_url(segment_id, gender, filter), gender, include_segment=True
        )

    def get_leaderboard_page(
        self, segment_id: int, gender: Gender, filter: Filter, page: int
    ) -> Leaderboard:
        result = self._pager.fetch_page(
            leaderboard_url(segment_id, gender, filter), page, gender
        )
        return result.leaderboard

    def get_leaderboard_page_and_segment(
        self, segment_id: int, gender: Gender, filter: Filter, page: int
    ) -> Tuple[Leaderboard, Optional[Segment]]:
        result = self._pager.fetch_page(
            leaderboard_url(segment_id, gender, filter),
            page,
            gender,
            include_segment=True,
        )
        return result.leaderboard, result.segment
