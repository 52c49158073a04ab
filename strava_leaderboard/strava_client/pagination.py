"""Leaderboard page fetching and multi-page reconciliation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from ..models import Gender, Leaderboard, Segment
from ..parsing import is_final_page, parse_document, parse_leaderboard, parse_segment
from .base import StravaTransport

LOGGER = logging.getLogger(__name__)


@dataclass
class LeaderboardPage:
    """One parsed leaderboard page and whether it is the last one."""

    leaderboard: Leaderboard
    segment: Optional[Segment]
    final: bool


class LeaderboardPager:
    """Fetches frontend leaderboard pages and stitches them together."""

    def __init__(self, transport: StravaTransport) -> None:
        self._transport = transport

    def fetch_page(
        self,
        url_base: str,
        page: int,
        gender: Gender,
        include_segment: bool = False,
    ) -> LeaderboardPage:
        """Fetch and parse a single page of ``url_base``.

        ``final`` is set when the page has no entries or the pagination
        controls mark it as the last one; the page count itself is unreliable.
        """

        url = f"{url_base}&page={page}"
        body = self._transport.get_text(url, f"Leaderboard page {page}")
        document = parse_document(body)

        segment = parse_segment(document) if include_segment else None
        leaderboard = parse_leaderboard(document, gender)
        final = not leaderboard.entries or is_final_page(document)
        LOGGER.debug(
            "Parsed leaderboard page=%s entries=%s entries_count=%s final=%s",
            page,
            len(leaderboard.entries),
            leaderboard.entries_count,
            final,
        )
        return LeaderboardPage(leaderboard=leaderboard, segment=segment, final=final)

    def fetch_all(
        self,
        url_base: str,
        gender: Gender,
        include_segment: bool = False,
    ) -> Tuple[Leaderboard, Optional[Segment]]:
        """Walk pages from 1 until a final page, merging entries in order.

        Stopping on ``len(entries) == entries_count`` is not an option: efforts
        are uploaded and deleted while we page, so that equality may never
        hold. The count of the newest page always replaces the previous one.
        Any error aborts the walk and nothing gathered so far is returned.
        """

        page = 1
        first = self.fetch_page(url_base, page, gender, include_segment)
        leaderboard, segment = first.leaderboard, first.segment
        final = first.final
        while not final:
            page += 1
            following = self.fetch_page(url_base, page, gender)
            if following.leaderboard.entries_count != leaderboard.entries_count:
                LOGGER.info(
                    "Leaderboard entries_count changed %s -> %s on page %s",
                    leaderboard.entries_count,
                    following.leaderboard.entries_count,
                    page,
                )
            leaderboard.extend(following.leaderboard)
            final = following.final

        LOGGER.info(
            "Fetched leaderboard pages=%s entries=%s entries_count=%s",
            page,
            len(leaderboard.entries),
            leaderboard.entries_count,
        )
        return leaderboard, segment
