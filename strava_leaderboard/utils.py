"""General utility helpers shared across modules."""

from __future__ import annotations


def format_duration(seconds: int) -> str:
    """Format seconds as ``h:mm:ss`` (or ``m:ss`` under an hour)."""

    hours, rem = divmod(int(seconds), 3600)
    mins, sec = divmod(rem, 60)
    if hours:
        return f"{hours}:{mins:02d}:{sec:02d}"
    return f"{mins}:{sec:02d}"
