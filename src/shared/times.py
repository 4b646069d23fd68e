"""Helpers for studio-local "HH:MM" clock strings."""

import re

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"
_TIME_RE = re.compile(TIME_PATTERN)

MINUTES_PER_DAY = 24 * 60


def time_str_to_minutes(value: str) -> int:
    """Convert "HH:MM" to minutes since midnight."""
    if not _TIME_RE.match(value):
        raise ValueError(f"invalid time {value!r}, expected HH:MM")
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time_str(total_minutes: int) -> str:
    """Convert minutes since midnight to "HH:MM"."""
    if not 0 <= total_minutes < MINUTES_PER_DAY:
        raise ValueError(f"minute offset {total_minutes} out of range")
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"
