"""Global pytest fixtures & helpers.

Adds project root to path and provides canned leaderboard markup plus a fake
HTTP session so no test touches the network.
"""
from __future__ import annotations

import json
import os
import sys
from typing import Iterable, List, Optional

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


# --- Markup builders -------------------------------------------------
SEGMENT_HEADING = """
<div class="segment-heading">
  <div class="segment-name">
    <span data-full-name="{name}">{name}</span>
    <button data-segment-id="{segment_id}">Star</button>
  </div>
  <div class="location"><strong>Location</strong> {location}</div>
  <ul class="stats">
    <li><div class="stat-text">{distance_km}<abbr class="unit">km</abbr></div></li>
    <li><div class="stat-text">0.1<abbr class="unit">%</abbr></div></li>
    <li><div class="stat-text">{low}<abbr class="unit">m</abbr></div></li>
    <li><div class="stat-text">{high}<abbr class="unit">m</abbr></div></li>
    <li><div class="stat-text">{gain}<abbr class="unit">m</abbr></div></li>
  </ul>
</div>
"""


def make_row(
    rank="1",
    name="Alice Runner",
    athlete_id=1,
    date_text="Jan 2, 2017",
    effort_id=1001,
    elapsed="5:30",
    athlete_link=True,
):
    if athlete_link:
        athlete = f'<td><img src="a.png"><a href="/athletes/{athlete_id}">{name}</a></td>'
    else:
        athlete = f"<td>{name}</td>"
    return (
        f"<tr><td>{rank}</td>{athlete}"
        f'<td><a href="/segment_efforts/{effort_id}">{date_text}</a></td>'
        "<td>150bpm</td><td>-</td><td>30.1km/h</td><td>210W</td>"
        f"<td>{elapsed}</td></tr>"
    )


def make_rows(count: int, start: int = 1) -> List[str]:
    return [
        make_row(
            rank=str(i),
            name=f"Athlete {i}",
            athlete_id=i,
            effort_id=100000 + i,
            elapsed=f"{i // 60}:{i % 60:02d}" if i >= 60 else f"{i}s",
        )
        for i in range(start, start + count)
    ]


def make_pagination(current: int, total: int) -> str:
    items = ['<li class="prev_page{}"><span>&larr;</span></li>'.format(
        " disabled" if current == 1 else ""
    )]
    for n in range(1, total + 1):
        cls = ' class="active"' if n == current else ""
        items.append(f'<li{cls}><a href="?page={n}">{n}</a></li>')
    items.append('<li class="next_page{}"><a>&rarr;</a></li>'.format(
        " disabled" if current == total else ""
    ))
    return '<div class="pagination"><ul>' + "".join(items) + "</ul></div>"


def make_page(
    rows: Iterable[str],
    *,
    total: Optional[int],
    pagination: str = "",
    segment_id: int = 2198806,
    name: str = "PCSD",
    location: str = "Dixon, CA",
    distance_km: str = "16.11",
    low: str = "83",
    high: str = "96",
    gain: str = "13",
) -> str:
    rows = list(rows)
    heading = SEGMENT_HEADING.format(
        name=name,
        segment_id=segment_id,
        location=location,
        distance_km=distance_km,
        low=low,
        high=high,
        gain=gain,
    )
    standing = (
        f'<div class="standing"><strong>{len(rows)}</strong> / {total}</div>'
        if total is not None
        else ""
    )
    return (
        "<html><head><title>PCSD | Strava Ride Segment</title></head><body>"
        f"{heading}{standing}"
        '<table class="table-leaderboard"><thead><tr><th>Rank</th></tr></thead>'
        f"<tbody>{''.join(rows)}</tbody></table>"
        f"{pagination}</body></html>"
    )


# --- Fake HTTP -------------------------------------------------------
class FakeResp:
    """Minimal fake response matching needed parts of requests.Response."""

    def __init__(self, status_code=200, text="", data=None, headers=None):
        self.status_code = status_code
        self._text = text
        self._data = data
        self.headers = headers or {}
        self.url = None
        self.closed = False

    @property
    def text(self):
        if self._data is not None:
            return json.dumps(self._data)
        return self._text

    def json(self):
        if self._data is None:
            return json.loads(self._text)
        return self._data

    def close(self):
        self.closed = True


class FakeSession:
    """Serves queued responses in order and records every request."""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []
        self.headers = {}

    def _next(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if not self.responses:
            raise AssertionError(f"Unexpected request {method} {url}")
        resp = self.responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        if isinstance(resp, str):
            resp = FakeResp(200, text=resp)
        resp.url = url
        return resp

    def get(self, url, params=None, headers=None, timeout=None):
        return self._next("GET", url, params=params, headers=headers, timeout=timeout)

    def request(self, method, url, timeout=None, **kwargs):
        return self._next(method, url, timeout=timeout, **kwargs)

    @property
    def urls(self):
        return [url for _, url, _ in self.calls]


class FakeClock:
    def __init__(self, start=100.0):
        self.now = start
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def five_pages():
    """Male/overall leaderboard split over five pages (474 entries).

    The banner total grows by one mid-fetch to mimic a new upload.
    """

    sizes = [100, 100, 100, 100, 74]
    totals = [473, 473, 474, 474, 474]
    pages = []
    start = 1
    for number, (size, total) in enumerate(zip(sizes, totals), start=1):
        pages.append(
            make_page(
                make_rows(size, start=start),
                total=total,
                pagination=make_pagination(number, 5),
            )
        )
        start += size
    return pages
