"""Parsers for Strava leaderboard pages.

Field parsers are strict and raise :class:`ParseError`; the document parsers
build typed records from a BeautifulSoup tree of a ``/segments/{id}`` page.
Selectors mirror the frontend markup and break if Strava changes its layout.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Iterable, List, Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup
from bs4.element import Comment, NavigableString, Tag

from .config import STRAVA_WEB_URL
from .errors import ParseError
from .models import Athlete, Gender, Leaderboard, LeaderboardEntry, Segment

LOGGER = logging.getLogger(__name__)

START_DATE_FORMAT = "%b %d, %Y"

_INT_RE = re.compile(r"[+-]?[0-9]+")

# Columns of a leaderboard row.
_RANK_COL = 0
_ATHLETE_COL = 1
_DATE_COL = 2
_ELAPSED_COL = 7

# Indices into the segment heading ``.stat-text`` blocks.
_DISTANCE_STAT = 0
_ELEVATION_LOW_STAT = 2
_ELEVATION_HIGH_STAT = 3
_ELEVATION_GAIN_STAT = 4

__all__ = [
    "parse_document",
    "parse_int",
    "parse_float",
    "parse_elapsed",
    "parse_start_date",
    "is_final_page",
    "parse_segment",
    "parse_leaderboard",
]


def parse_document(markup: str | bytes) -> BeautifulSoup:
    return BeautifulSoup(markup, "html.parser")


# ---------------------------------------------------------------------------
# Field parsers
# ---------------------------------------------------------------------------
def parse_int(text: str, *, field: str = "int") -> int:
    if not isinstance(text, str) or not _INT_RE.fullmatch(text):
        raise ParseError(f"Invalid integer for {field}", field=field, raw=text)
    return int(text)


def parse_float(text: str, *, field: str = "float") -> float:
    # float() tolerates padding and digit separators; the frontend never does.
    if not isinstance(text, str) or not text or text != text.strip() or "_" in text:
        raise ParseError(f"Invalid number for {field}", field=field, raw=text)
    try:
        return float(text)
    except ValueError as exc:
        raise ParseError(f"Invalid number for {field}", field=field, raw=text) from exc


def parse_elapsed(text: str) -> int:
    """Return seconds for ``H:MM:SS``, ``M:SS`` or ``Ss`` elapsed times.

    Strava picks the format from the magnitude of the effort, so the number of
    ``:`` separated parts decides what the leading parts mean.
    """

    parts = text.split(":")
    if len(parts) > 3:
        raise ParseError("Too many components in elapsed time", field="elapsed_time", raw=text)
    hours = minutes = 0
    if len(parts) == 3:
        hours = parse_int(parts.pop(0), field="elapsed_time")
    if len(parts) == 2:
        minutes = parse_int(parts.pop(0), field="elapsed_time")
    seconds_text = parts[0]
    if seconds_text.endswith("s"):
        seconds_text = seconds_text[:-1]
    seconds = parse_int(seconds_text, field="elapsed_time")
    return hours * 3600 + minutes * 60 + seconds


def parse_start_date(text: str) -> date:
    try:
        return datetime.strptime(text, START_DATE_FORMAT).date()
    except ValueError as exc:
        raise ParseError("Invalid start date", field="start_date", raw=text) from exc


def is_final_page(document: BeautifulSoup) -> bool:
    """Return True when the pagination controls say this is the last page."""

    # TODO: confirm against live markup whether both signals must hold (AND).
    on_last = _any_has_class(
        document.select(".pagination li:nth-last-child(2)"), "active"
    )
    next_disabled = _any_has_class(
        document.select(".pagination li.next_page"), "disabled"
    )
    return on_last or next_disabled


# ---------------------------------------------------------------------------
# Document parsers
# ---------------------------------------------------------------------------
def parse_segment(document: BeautifulSoup) -> Segment:
    button = document.select_one(".segment-name button[data-segment-id]")
    if button is None:
        raise ParseError("Could not find segment ID", field="segment_id")
    segment_id = parse_int(str(button["data-segment-id"]), field="segment_id")

    heading = document.select_one(".segment-heading")
    if heading is None:
        raise ParseError("Could not find segment heading", field="segment_heading")
    name_tag = heading.select_one(".segment-name span[data-full-name]")
    if name_tag is None:
        raise ParseError("Could not find segment name", field="name")

    location_tag = heading.select_one(".location")
    location = (
        _text_excluding(location_tag, "strong").strip() if location_tag else ""
    )

    stats = heading.select(".stat-text")
    distance_km = _parse_stat(stats, _DISTANCE_STAT, "distance")
    return Segment.from_stats(
        id=segment_id,
        name=str(name_tag["data-full-name"]),
        location=location,
        distance=distance_km * 1000.0,
        elevation_low=_parse_stat(stats, _ELEVATION_LOW_STAT, "elevation_low"),
        elevation_high=_parse_stat(stats, _ELEVATION_HIGH_STAT, "elevation_high"),
        total_elevation_gain=_parse_stat(
            stats, _ELEVATION_GAIN_STAT, "total_elevation_gain"
        ),
    )


def parse_leaderboard(document: BeautifulSoup, gender: Gender) -> Leaderboard:
    """Parse the standings banner and every row of the leaderboard table.

    A row that fails on anything but its elapsed time fails the whole page:
    skipping it would shift the positions of every following entry.
    """

    standing = "".join(tag.get_text() for tag in document.select(".standing"))
    entries_count = parse_int(
        standing.split("/")[-1].strip(), field="entries_count"
    )

    entries: List[LeaderboardEntry] = []
    for row in document.select(".table-leaderboard tbody tr"):
        entries.append(_parse_row(row, gender))
    return Leaderboard(entries=entries, entries_count=entries_count)


def _parse_row(row: Tag, gender: Gender) -> LeaderboardEntry:
    cells = row.find_all("td")

    rank_text = _cell_text(cells, _RANK_COL)
    rank = parse_int(rank_text, field="rank") if rank_text else 1

    athlete_cell = _cell(cells, _ATHLETE_COL)
    athlete_link = athlete_cell.find("a", href=True) if athlete_cell else None
    if athlete_link is None:
        raise ParseError("Could not find athlete URL", field="athlete")
    athlete = Athlete(
        url=urljoin(STRAVA_WEB_URL, str(athlete_link["href"])),
        name=" ".join(athlete_cell.get_text().split()),
        gender=gender,
    )

    date_cell = _cell(cells, _DATE_COL)
    if date_cell is None:
        raise ParseError("Could not find start date", field="start_date")
    start_date = parse_start_date(date_cell.get_text().strip())
    effort_link = date_cell.find("a", href=True)
    if effort_link is None:
        raise ParseError("Could not find effort ID", field="effort_id")
    effort_path = urlparse(str(effort_link["href"])).path.rstrip("/")
    effort_id = parse_int(effort_path.rsplit("/", 1)[-1], field="effort_id")

    elapsed_text = _cell_text(cells, _ELAPSED_COL)
    try:
        elapsed = parse_elapsed(elapsed_text)
    except ParseError:
        LOGGER.debug(
            "Unparsable elapsed time %r for effort %s; using 0",
            elapsed_text,
            effort_id,
        )
        elapsed = 0

    return LeaderboardEntry(
        rank=rank,
        athlete=athlete,
        effort_id=effort_id,
        start_date=start_date,
        elapsed_time=elapsed,
    )


def _cell(cells: List[Tag], index: int) -> Optional[Tag]:
    return cells[index] if index < len(cells) else None


def _cell_text(cells: List[Tag], index: int) -> str:
    cell = _cell(cells, index)
    return cell.get_text().strip() if cell is not None else ""


def _parse_stat(stats: List[Tag], index: int, field: str) -> float:
    if index >= len(stats):
        raise ParseError(f"Could not find segment stat {field}", field=field)
    # Values carry an <abbr> unit and may use thousands separators.
    text = _text_excluding(stats[index], "abbr").strip().replace(",", "")
    return parse_float(text, field=field)


def _text_excluding(tag: Tag, excluded: str) -> str:
    """Text of ``tag``'s direct children, skipping ``excluded`` elements."""

    parts = []
    for child in tag.children:
        if isinstance(child, Tag):
            if child.name != excluded:
                parts.append(child.get_text())
        elif isinstance(child, NavigableString) and not isinstance(child, Comment):
            parts.append(str(child))
    return "".join(parts)


def _any_has_class(tags: Iterable[Tag], css_class: str) -> bool:
    return any(css_class in (tag.get("class") or []) for tag in tags)
