from dataclasses import asdict, dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List


class Gender(str, Enum):
    UNSPECIFIED = ""
    MALE = "M"
    FEMALE = "F"


class Filter(str, Enum):
    OVERALL = "overall"
    CURRENT_YEAR = "current_year"


@dataclass(frozen=True)
class Athlete:
    url: str
    name: str
    # Taken from the query filter; leaderboard rows do not expose it.
    gender: Gender = Gender.UNSPECIFIED


@dataclass(frozen=True)
class Segment:
    id: int
    name: str
    location: str
    distance: float  # metres
    average_grade: float  # percent
    elevation_low: float
    elevation_high: float
    total_elevation_gain: float
    median_elevation: float

    @classmethod
    def from_stats(
        cls,
        *,
        id: int,
        name: str,
        location: str,
        distance: float,
        elevation_low: float,
        elevation_high: float,
        total_elevation_gain: float,
    ) -> "Segment":
        """Build a segment, deriving gain, grade and median elevation.

        The reported gain is sometimes lower than the high/low delta, in which
        case the delta wins.
        """

        gain = max(total_elevation_gain, elevation_high - elevation_low)
        grade = gain / distance * 100.0 if distance else 0.0
        return cls(
            id=id,
            name=name,
            location=location,
            distance=distance,
            average_grade=grade,
            elevation_low=elevation_low,
            elevation_high=elevation_high,
            total_elevation_gain=gain,
            median_elevation=(elevation_low + elevation_high) / 2.0,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    athlete: Athlete
    effort_id: int
    start_date: date
    elapsed_time: int  # seconds, 0 when the row could not be parsed

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rank": self.rank,
            "athlete": {
                "url": self.athlete.url,
                "name": self.athlete.name,
                "gender": self.athlete.gender.value,
            },
            "effort_id": self.effort_id,
            "start_date": self.start_date.isoformat(),
            "elapsed_time": self.elapsed_time,
        }


@dataclass
class Leaderboard:
    """Entries in fetch order plus the last total Strava reported.

    ``len(entries)`` may differ from ``entries_count`` when the board was only
    partially fetched or efforts were added/removed between page requests.
    """

    entries: List[LeaderboardEntry] = field(default_factory=list)
    entries_count: int = 0

    def extend(self, page: "Leaderboard") -> None:
        """Append a later page; its count replaces the current one."""

        self.entries.extend(page.entries)
        self.entries_count = page.entries_count

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entries": [entry.to_dict() for entry in self.entries],
            "entries_count": self.entries_count,
        }
