"""Command line entry point: print (or export) a segment leaderboard.

Usage examples:

    # Full male overall leaderboard plus segment details scraped from the page
    python -m strava_leaderboard.main --segment-id 2198806

    # A single page of this year's female leaderboard as JSON
    python -m strava_leaderboard.main --segment-id 2198806 \
        --gender F --filter current_year --page 1 --json

Credentials default to ``STRAVA_EMAIL``, ``STRAVA_PASSWORD`` and
``STRAVA_ACCESS_TOKEN`` (optionally stored in ``.env``). With an access token
the segment details come from the API instead of the scraped page.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional, Sequence

from .config import STRAVA_ACCESS_TOKEN, STRAVA_EMAIL, STRAVA_PASSWORD
from .errors import StravaError
from .models import Filter, Gender, Leaderboard, Segment
from .strava_api import StravaLeaderboardClient
from .utils import format_duration

LOGGER = logging.getLogger(__name__)

_GENDER_CHOICES = {"M": Gender.MALE, "F": Gender.FEMALE, "": Gender.UNSPECIFIED}


def _setup_logging(level: str) -> None:
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=getattr(logging, level),
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Retrieve a Strava segment leaderboard",
    )
    parser.add_argument("--segment-id", type=int, required=True, help="Segment ID")
    parser.add_argument("--email", default=STRAVA_EMAIL, help="Strava login email")
    parser.add_argument(
        "--password", default=STRAVA_PASSWORD, help="Strava login password"
    )
    parser.add_argument(
        "--token",
        default=STRAVA_ACCESS_TOKEN,
        help="API access token used for segment details (optional)",
    )
    parser.add_argument(
        "--gender",
        default="M",
        choices=sorted(_GENDER_CHOICES),
        help="Leaderboard gender (empty string for unspecified)",
    )
    parser.add_argument(
        "--filter",
        default=Filter.OVERALL.value,
        choices=[f.value for f in Filter],
        help="Leaderboard filter",
    )
    parser.add_argument(
        "--page",
        type=int,
        help="Fetch only this page instead of the whole leaderboard",
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the result as JSON"
    )
    parser.add_argument("--output-file", help="Also write the result to an .xlsx file")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Python logging level",
    )
    return parser


def _retrieve(
    client: StravaLeaderboardClient,
    args: argparse.Namespace,
) -> tuple[Leaderboard, Optional[Segment]]:
    gender = _GENDER_CHOICES[args.gender]
    board_filter = Filter(args.filter)
    use_api = bool(args.token)
    if args.page is not None:
        if use_api:
            leaderboard = client.get_leaderboard_page(
                args.segment_id, gender, board_filter, args.page
            )
            return leaderboard, client.get_segment(args.segment_id)
        return client.get_leaderboard_page_and_segment(
            args.segment_id, gender, board_filter, args.page
        )
    if use_api:
        leaderboard = client.get_leaderboard(args.segment_id, gender, board_filter)
        return leaderboard, client.get_segment(args.segment_id)
    return client.get_leaderboard_and_segment(args.segment_id, gender, board_filter)


def render(leaderboard: Leaderboard, segment: Optional[Segment]) -> List[str]:
    lines: List[str] = []
    if segment is not None:
        lines.append(
            f"{segment.name} ({segment.id}): {segment.distance / 1000:.2f} km "
            f"@ {segment.average_grade:.2f}%"
        )
    for entry in leaderboard.entries:
        lines.append(
            f"{entry.rank}) {entry.athlete.name}: "
            f"{format_duration(entry.elapsed_time)} ({entry.start_date.isoformat()})"
        )
    return lines


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    _setup_logging(args.log_level)

    if not args.email or not args.password:
        print("Please provide an email and password", file=sys.stderr)
        return 2

    try:
        client = StravaLeaderboardClient.login(
            args.email, args.password, access_token=args.token or None
        )
        leaderboard, segment = _retrieve(client, args)
    except StravaError as exc:
        print(exc, file=sys.stderr)
        return 1
    LOGGER.info("Completed with %d requests", client.request_count)

    if args.json:
        payload = {
            "segment": segment.to_dict() if segment is not None else None,
            "leaderboard": leaderboard.to_dict(),
        }
        print(json.dumps(payload, indent=2))
    else:
        for line in render(leaderboard, segment):
            print(line)

    if args.output_file:
        from .excel_writer import write_leaderboard  # local import (pandas)

        write_leaderboard(args.output_file, leaderboard, segment)
    return 0


if __name__ == "__main__":
    sys.exit(main())
