"""Typed Strava API segment lookup."""

from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import STRAVA_BASE_URL
from ..errors import AuthError, ParseError
from ..models import Segment
from .base import StravaTransport

LOGGER = logging.getLogger(__name__)


class SegmentAPI:
    """Reads segment details from ``/api/v3/segments/{id}``.

    The API figures are more accurate than the ones shown on the frontend
    leaderboard page.
    """

    def __init__(self, transport: StravaTransport, access_token: str | None) -> None:
        self._transport = transport
        self._access_token = access_token

    def get_segment(self, segment_id: int) -> Segment:
        if not self._access_token:
            raise AuthError("An API access token is required to look up segments")
        url = f"{STRAVA_BASE_URL}/segments/{segment_id}"
        data = self._transport.get_json(
            url,
            f"Segment {segment_id}",
            headers={
                "Authorization": f"Bearer {self._access_token}",
                "Accept": "application/json",
            },
        )
        if not isinstance(data, dict):
            raise ParseError(
                f"Unexpected segment payload type {type(data).__name__}",
                field="segment",
            )
        return segment_from_api(segment_id, data)


def segment_from_api(segment_id: int, data: Dict[str, Any]) -> Segment:
    try:
        distance = float(data["distance"])
        elevation_low = float(data.get("elevation_low") or 0.0)
        elevation_high = float(data.get("elevation_high") or 0.0)
        gain = float(data.get("total_elevation_gain") or 0.0)
    except (KeyError, TypeError, ValueError) as exc:
        raise ParseError(
            f"Segment {segment_id} payload is missing numeric fields",
            field="segment",
            raw=repr(exc),
        ) from exc
    location = ", ".join(
        str(part) for part in (data.get("city"), data.get("state")) if part
    )
    LOGGER.debug("Loaded segment %s (%s) from API", segment_id, data.get("name"))
    return Segment.from_stats(
        id=segment_id,
        name=str(data.get("name") or ""),
        location=location,
        distance=distance,
        elevation_low=elevation_low,
        elevation_high=elevation_high,
        total_elevation_gain=gain,
    )
