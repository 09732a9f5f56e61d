"""
Validation Module

Input checks for dates, goal percentages, theme colours and CSV rows.
"""

import re
from datetime import date

MIN_YEAR = 1900
MAX_YEAR = 2100

_HEX_COLOR = re.compile(r'^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$')
_INT_FIELD = re.compile(r'[+-]?[0-9]+', re.ASCII)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_date(year, month, day) -> bool:
    """
    Check that the components form a real calendar date.

    Args:
        year: Year (1900-2100)
        month: Calendar month, 0-indexed (0-11)
        day: Day of month (1-31)

    Returns:
        True if valid, e.g. False for day 31 in a 30-day month
    """
    if not (_is_int(year) and _is_int(month) and _is_int(day)):
        return False
    if not MIN_YEAR <= year <= MAX_YEAR:
        return False
    if not 0 <= month <= 11:
        return False
    if not 1 <= day <= 31:
        return False
    try:
        date(year, month + 1, day)
    except ValueError:
        return False
    return True


def validate_goal(goal) -> bool:
    """Check that a goal percentage is a number between 0 and 100."""
    if isinstance(goal, bool) or not isinstance(goal, (int, float)):
        return False
    if goal != goal:  # NaN
        return False
    return 0 <= goal <= 100


def validate_color(color) -> bool:
    """Check for a #rgb or #rrggbb hex colour string."""
    if not isinstance(color, str):
        return False
    return bool(_HEX_COLOR.match(color))


def validate_csv_line(line) -> bool:
    """Check that a CSV line has exactly three non-empty fields."""
    if not isinstance(line, str):
        return False
    parts = line.split(',')
    return len(parts) == 3 and all(part.strip() != '' for part in parts)


def validate_int_field(text) -> bool:
    """Check for an optionally signed run of ASCII digits (no '_', no other scripts)."""
    if not isinstance(text, str):
        return False
    return bool(_INT_FIELD.fullmatch(text))
