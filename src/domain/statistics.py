"""
Statistics Module

Derives weekday and per-month attendance totals across the whole ledger.
"""

from datetime import date, timedelta
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .entities import AttendanceEntry, RateColorTier


# Sunday-first, matching weekday numbers 0-6
WEEKDAY_NAMES = ['Sunday', 'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday']


def entry_date(entry: AttendanceEntry) -> date:
    """
    Resolve an entry to a calendar date.

    Out-of-range days roll over into the next month (2024-02-30 -> 2024-03-01),
    so leniently imported rows still land on a real weekday.

    Raises:
        ValueError: If the year lies outside what datetime.date can represent
    """
    year = entry.year + (entry.month - 1) // 12
    month = (entry.month - 1) % 12 + 1
    return date(year, month, 1) + timedelta(days=entry.day - 1)


def sunday_weekday(d: date) -> int:
    """Weekday number with 0=Sunday ... 6=Saturday."""
    return (d.weekday() + 1) % 7


def entry_weekday(entry: AttendanceEntry) -> Optional[int]:
    """Sunday-first weekday of an entry, or None when it has no calendar date."""
    try:
        return sunday_weekday(entry_date(entry))
    except (ValueError, OverflowError):
        return None


def attendance_by_weekday(ledger) -> Dict[int, int]:
    """
    Count attended days per weekday across every bucket of the ledger.

    Entries without a calendar date (e.g. an imported year 0) are not counted.

    Args:
        ledger: Anything exposing get_all() -> {key: [AttendanceEntry]}

    Returns:
        Mapping of weekday (0=Sunday) to count, always with all 7 keys
    """
    totals = {weekday: 0 for weekday in range(7)}
    for entries in ledger.get_all().values():
        for entry in entries:
            weekday = entry_weekday(entry)
            if weekday is not None:
                totals[weekday] += 1
    return totals


def weekday_bar_widths(totals: Mapping[int, int]) -> Dict[int, float]:
    """Each weekday's total as a percentage of the busiest weekday."""
    max_count = max(max(totals.values(), default=0), 1)
    return {weekday: (count / max_count) * 100 for weekday, count in totals.items()}


def monthly_counts(history: Mapping[str, Sequence[AttendanceEntry]]) -> List[Tuple[str, int]]:
    """Month keys newest first, each with its number of entries."""
    return [
        (key, len(history[key]))
        for key in sorted(history, reverse=True)
    ]


def calculate_rate_color(rate: float, threshold: float = 55) -> RateColorTier:
    """
    Calculate the color tier based on attendance rate.

    Args:
        rate: Attendance rate as percentage (0-100)
        threshold: The lower threshold, usually the attendance goal

    Returns:
        RateColorTier for display
    """
    if rate < threshold:
        return RateColorTier.RED
    elif rate < 90:
        return RateColorTier.YELLOW
    else:
        return RateColorTier.GREEN
