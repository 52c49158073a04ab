"""Excel export for a fetched leaderboard (and its segment)."""

from __future__ import annotations

import logging
from os import PathLike
from pathlib import Path
from typing import Optional

import pandas as pd
from openpyxl.styles import Border, Font, PatternFill, Side
from openpyxl.worksheet.worksheet import Worksheet

from .config import (
    EXCEL_AUTOSIZE_COLUMNS,
    EXCEL_AUTOSIZE_MAX_WIDTH,
    EXCEL_AUTOSIZE_MIN_WIDTH,
    EXCEL_AUTOSIZE_PADDING,
)
from .models import Leaderboard, Segment
from .utils import format_duration

LEADERBOARD_SHEET = "Leaderboard"
SEGMENT_SHEET = "Segment"
EXCEL_DATE_FORMAT = "yyyy-mm-dd"

LEADERBOARD_COLUMNS = [
    "Rank",
    "Athlete",
    "Athlete URL",
    "Effort ID",
    "Date",
    "Elapsed (sec)",
    "Elapsed (h:mm:ss)",
]

HEADER_FONT = Font(bold=True)
HEADER_FILL = PatternFill(patternType="solid", fgColor="FFFC4C02")
HEADER_BORDER = Border(
    left=Side(style="thin", color="000000"),
    right=Side(style="thin", color="000000"),
    top=Side(style="thin", color="000000"),
    bottom=Side(style="thin", color="000000"),
)

PathInput = str | Path | PathLike[str]

LOGGER = logging.getLogger(__name__)

__all__ = ["leaderboard_frame", "segment_frame", "write_leaderboard"]


def leaderboard_frame(leaderboard: Leaderboard) -> pd.DataFrame:
    rows = [
        {
            "Rank": entry.rank,
            "Athlete": entry.athlete.name,
            "Athlete URL": entry.athlete.url,
            "Effort ID": entry.effort_id,
            "Date": entry.start_date,
            "Elapsed (sec)": entry.elapsed_time,
            "Elapsed (h:mm:ss)": format_duration(entry.elapsed_time),
        }
        for entry in leaderboard.entries
    ]
    return pd.DataFrame(rows, columns=LEADERBOARD_COLUMNS)


def segment_frame(segment: Segment) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "Field": [
                "ID",
                "Name",
                "Location",
                "Distance (m)",
                "Average Grade (%)",
                "Elevation Low (m)",
                "Elevation High (m)",
                "Total Elevation Gain (m)",
                "Median Elevation (m)",
            ],
            "Value": [
                segment.id,
                segment.name,
                segment.location,
                segment.distance,
                round(segment.average_grade, 2),
                segment.elevation_low,
                segment.elevation_high,
                segment.total_elevation_gain,
                segment.median_elevation,
            ],
        }
    )


def write_leaderboard(
    filepath: PathInput,
    leaderboard: Leaderboard,
    segment: Optional[Segment] = None,
) -> None:
    """Write the leaderboard (plus a segment sheet when given) to ``filepath``."""

    filepath = str(Path(filepath))
    with pd.ExcelWriter(
        filepath, engine="openpyxl", date_format=EXCEL_DATE_FORMAT
    ) as writer:
        leaderboard_frame(leaderboard).to_excel(
            writer, sheet_name=LEADERBOARD_SHEET, index=False
        )
        sheets = [LEADERBOARD_SHEET]
        if segment is not None:
            segment_frame(segment).to_excel(
                writer, sheet_name=SEGMENT_SHEET, index=False
            )
            sheets.append(SEGMENT_SHEET)
        for name in sheets:
            ws = writer.sheets[name]
            _style_header_row(ws)
            _autosize(ws)
    LOGGER.info(
        "Wrote %s leaderboard rows (entries_count=%s) to %s",
        len(leaderboard.entries),
        leaderboard.entries_count,
        filepath,
    )


def _style_header_row(ws: Worksheet) -> None:
    for cell in ws[1]:
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.border = HEADER_BORDER


def _autosize(ws: Worksheet) -> None:
    if not EXCEL_AUTOSIZE_COLUMNS:
        return
    for col_cells in ws.columns:
        col_letter = getattr(col_cells[0], "column_letter", None)
        if not col_letter:
            continue
        max_len = max(
            (len(str(cell.value)) for cell in col_cells if cell.value is not None),
            default=0,
        )
        ws.column_dimensions[col_letter].width = min(
            EXCEL_AUTOSIZE_MAX_WIDTH,
            max(EXCEL_AUTOSIZE_MIN_WIDTH, max_len + EXCEL_AUTOSIZE_PADDING),
        )
