"""
Attendance Tracker Module

Single-month view over the shared attendance ledger, with goal tracking.
"""

import math
from typing import List

from config.config_manager import DEFAULT_ATTENDANCE_GOAL
from domain.business_calendar import business_days_in_month
from domain.entities import AttendanceEntry, CalendarMonth, to_storage_month
from domain.exceptions import InvalidDateError, InvalidGoalError
from domain.validation import validate_date, validate_goal
from infrastructure.attendance_ledger import AttendanceLedger
from infrastructure.logger import get_logger

logger = get_logger("AttendanceTracker")


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class AttendanceTracker:
    """
    Tracks attendance for one year + month.

    The ledger is shared, not owned: several trackers for different months
    may hold the same ledger at once. All persistence goes through it.

    Attributes:
        year: Tracked year
        calendar_month: 0-indexed month used for date arithmetic
        storage_month: 1-indexed month used to address the ledger bucket
        business_days: Business days in the month
        required_count: Days needed to meet the goal
    """

    def __init__(
        self,
        year: int,
        calendar_month: CalendarMonth,
        ledger: AttendanceLedger,
        goal_percent: float = DEFAULT_ATTENDANCE_GOAL
    ):
        self.year = year
        self.calendar_month = calendar_month
        self.storage_month = to_storage_month(calendar_month)
        self.ledger = ledger
        self._entries: List[AttendanceEntry] = self._load()
        self.business_days = business_days_in_month(year, calendar_month)
        self.required_count = 0
        self.set_goal_percent(goal_percent)

    def _load(self) -> List[AttendanceEntry]:
        return self.ledger.get_month(self.year, self.storage_month)

    def _save(self) -> None:
        self.ledger.set_month(self.year, self.storage_month, self._entries)

    @property
    def entries(self) -> List[AttendanceEntry]:
        """Copy of the month's entries in insertion order."""
        return list(self._entries)

    def reload(self) -> None:
        """Re-read this month's entries after a bulk change to the ledger."""
        self._entries = self._load()

    def has_mark(self, day: int) -> bool:
        """Check whether a day of this month is marked."""
        return any(entry.day == day for entry in self._entries)

    def mark(self, day: int) -> None:
        """
        Mark a day as attended. Marking an already marked day is a no-op.

        Raises:
            InvalidDateError: If the day does not exist in this month
        """
        if not validate_date(self.year, self.calendar_month, day):
            raise InvalidDateError(self.year, self.calendar_month, day)
        if self.has_mark(day):
            return
        self._entries.append(
            AttendanceEntry(day=day, month=self.storage_month, year=self.year)
        )
        self._save()
        logger.debug(f"Marked {self.year}-{self.storage_month:02d}-{day:02d}")

    def unmark(self, day: int) -> None:
        """Remove the mark for a day, if present."""
        for index, entry in enumerate(self._entries):
            if entry.day == day:
                del self._entries[index]
                self._save()
                logger.debug(f"Unmarked {self.year}-{self.storage_month:02d}-{day:02d}")
                return

    def toggle(self, day: int) -> bool:
        """Flip the mark for a day and return whether it is now marked."""
        if self.has_mark(day):
            self.unmark(day)
            return False
        self.mark(day)
        return True

    def clear(self) -> None:
        """Drop every mark of this month and delete its ledger bucket."""
        self._entries = []
        self.ledger.clear_month(self.year, self.storage_month)

    def count(self) -> int:
        """Number of marked days."""
        return len(self._entries)

    def set_goal_percent(self, percent: float) -> None:
        """
        Set the goal as a percentage of business days.

        Raises:
            InvalidGoalError: If percent is outside 0-100
        """
        if not validate_goal(percent):
            raise InvalidGoalError(percent)
        self.required_count = math.floor(self.business_days * percent / 100)

    def goal_percent(self) -> int:
        """
        Goal percentage derived back from required_count.

        Lossy: setting 55 may read back as a neighbouring value.
        """
        if self.business_days == 0:
            return 0
        return _round_half_up(self.required_count / self.business_days * 100)

    def mark_first_days(self, count: int) -> int:
        """
        Mark up to `count` more days, starting from day 1.

        Stops once the number of marks reaches business_days.

        Returns:
            Number of days newly marked
        """
        added = 0
        day = 1
        while added < count and self.count() < self.business_days:
            if not validate_date(self.year, self.calendar_month, day):
                break
            if not self.has_mark(day):
                self.mark(day)
                added += 1
            day += 1
        return added
