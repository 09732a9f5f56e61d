"""
Domain Entities Module

Core domain entities using dataclasses for the attendance tracker.
These entities represent the core business concepts independent of infrastructure.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import NewType


# Calendar months are 0-indexed (0=January) and drive date arithmetic.
# Storage months are 1-indexed (1=January) and address ledger buckets.
CalendarMonth = NewType("CalendarMonth", int)
StorageMonth = NewType("StorageMonth", int)


def to_storage_month(month: CalendarMonth) -> StorageMonth:
    """Convert a 0-indexed calendar month to its 1-indexed storage month."""
    return StorageMonth(month + 1)


def to_calendar_month(month: StorageMonth) -> CalendarMonth:
    """Convert a 1-indexed storage month to its 0-indexed calendar month."""
    return CalendarMonth(month - 1)


@dataclass(frozen=True)
class AttendanceEntry:
    """
    A single day on which attendance was recorded.

    Attributes:
        day: Day of month (1-31)
        month: Storage month (1-12)
        year: Four-digit year
    """
    day: int
    month: int
    year: int

    def to_dict(self) -> dict:
        """Serialise to the JSON object layout used by the history blob."""
        return {"day": self.day, "month": self.month, "year": self.year}

    @classmethod
    def from_dict(cls, data: dict) -> "AttendanceEntry":
        """
        Build an entry from a stored JSON object.

        Raises:
            TypeError: If a field is missing or not an integer
        """
        values = []
        for name in ("day", "month", "year"):
            value = data.get(name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"Field {name!r} must be an integer, got {value!r}")
            values.append(value)
        return cls(day=values[0], month=values[1], year=values[2])


@dataclass
class ImportResult:
    """
    Outcome of a CSV import.

    Attributes:
        imported_count: Rows appended to the ledger
        duplicate_count: Rows skipped because the entry already existed
        error_count: Rows skipped because they could not be parsed
    """
    imported_count: int = 0
    duplicate_count: int = 0
    error_count: int = 0

    def summary(self) -> str:
        """Human readable message for the import report."""
        message = f"Import complete. {self.imported_count} entries imported."
        if self.duplicate_count > 0:
            noun = "entry" if self.duplicate_count == 1 else "entries"
            message += f" {self.duplicate_count} duplicate {noun} were skipped."
        if self.error_count > 0:
            noun = "row" if self.error_count == 1 else "rows"
            message += f" {self.error_count} {noun} had errors and were skipped."
        return message


@dataclass
class MonthSummary:
    """
    Per-month attendance figures for reports.

    Attributes:
        key: Month bucket key ("YYYY-MM")
        year: Year of the bucket
        month: Storage month (1-12)
        attended_days: Number of entries in the bucket
        business_days: Business days in that month
    """
    key: str
    year: int
    month: int
    attended_days: int = 0
    business_days: int = 0

    @property
    def attendance_rate(self) -> float:
        """Attended days as a percentage of business days."""
        if self.business_days == 0:
            return 100.0
        return (self.attended_days / self.business_days) * 100


class RateColorTier(Enum):
    """Color tier for attendance rate display."""
    RED = auto()     # < goal
    YELLOW = auto()  # >= goal and < 90%
    GREEN = auto()   # >= 90%
