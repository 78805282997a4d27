"""Helpers for provider-local wall-clock times.

Times travel through the system as ``HH:MM`` labels and are compared as
minutes since midnight.
"""
from datetime import date, time
from typing import Union


def parse_time_label(value: Union[str, time]) -> int:
    """Convert ``HH:MM`` (or ``HH:MM:SS``, or a ``time``) to minutes since midnight."""
    if isinstance(value, time):
        return value.hour * 60 + value.minute

    parts = value.strip().split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid time '{value}', expected HH:MM")

    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except ValueError:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")

    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise ValueError(f"Invalid time '{value}', out of range")

    return hours * 60 + minutes


def minutes_to_label(minutes: int) -> str:
    """Format minutes since midnight as ``HH:MM``."""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def minutes_to_time(minutes: int) -> time:
    hours, mins = divmod(minutes, 60)
    return time(hour=hours, minute=mins)


def weekday_index(target_date: date) -> int:
    """Weekday with 0 = Sunday ... 6 = Saturday."""
    return (target_date.weekday() + 1) % 7


def ranges_overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """Half-open interval intersection: touching ends do not overlap."""
    return a_start < b_end and a_end > b_start
