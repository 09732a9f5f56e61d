"""
Business Calendar Module

Computes paid holidays and business days (Mon-Fri minus holidays) per month.
"""

from calendar import monthrange
from datetime import date
from typing import Dict, List

from .entities import CalendarMonth, to_storage_month


# National holiday calendar as (month, day, name), months 1-indexed.
# Dates are fixed; moved holidays use their override date regardless of weekday.
HOLIDAY_TABLE = (
    (1, 1, "New Year's Day"),
    (5, 1, "Labour Day"),
    (12, 25, "Christmas Day"),
    (1, 6, "Epiphany"),
    (3, 3, "Carnival"),
    (3, 4, "Carnival"),
    (4, 18, "Landing of the 33"),  # moved
    (6, 19, "Birth of Artigas"),
    (7, 18, "Constitution Day"),
    (8, 25, "Independence Day"),
)


def holidays_for(year: int) -> List[date]:
    """
    Get the holidays of a year, in table order.

    Args:
        year: Year to pair with each (month, day) of the table

    Returns:
        List of holiday dates, all within `year`
    """
    return [date(year, month, day) for month, day, _ in HOLIDAY_TABLE]


def holiday_names_for(year: int) -> Dict[date, str]:
    """Map each holiday date of `year` to its name."""
    return {date(year, month, day): name for month, day, name in HOLIDAY_TABLE}


def is_holiday(day: date) -> bool:
    """Check whether a date is one of the holidays of its own year."""
    return (day.month, day.day) in {(m, d) for m, d, _ in HOLIDAY_TABLE}


def days_in_month(year: int, month: CalendarMonth) -> int:
    """Number of calendar days in a 0-indexed month."""
    _, num_days = monthrange(year, to_storage_month(month))
    return num_days


def business_days_in_month(year: int, month: CalendarMonth) -> int:
    """
    Count business days in a month.

    A day counts if it falls Mon-Fri and is not a holiday of the same year.

    Args:
        year: Year
        month: Calendar month, 0-indexed (0-11)

    Returns:
        Number of business days
    """
    holidays = set(holidays_for(year))
    storage_month = to_storage_month(month)
    count = 0

    for day in range(1, days_in_month(year, month) + 1):
        d = date(year, storage_month, day)
        if d.weekday() < 5 and d not in holidays:
            count += 1

    return count
