"""
Progress Service Module

Derives the progress summary and the month calendar grid shown to the user.
"""

from calendar import month_name
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from application.attendance_tracker import AttendanceTracker
from domain.business_calendar import days_in_month, holidays_for
from domain.statistics import sunday_weekday


@dataclass
class ProgressSummary:
    """Progress towards the monthly attendance goal."""
    month_name: str
    year: int
    business_days: int
    goal_percent: float
    required_count: int
    count: int

    @property
    def remaining(self) -> int:
        return max(self.required_count - self.count, 0)

    @property
    def goal_reached(self) -> bool:
        return self.count >= self.required_count

    @property
    def progress_ratio(self) -> float:
        """Attended / required; a zero requirement counts as complete."""
        if self.required_count == 0:
            return 1.0
        return self.count / self.required_count

    @property
    def status_message(self) -> str:
        if self.goal_reached:
            return "You have reached your attendance goal for this month."
        plural = "s" if self.remaining > 1 else ""
        return f"Keep going! You need {self.remaining} more day{plural} to reach your goal."

    def header_lines(self) -> List[str]:
        plural = "s" if self.required_count > 1 else ""
        return [
            f"Month: {self.month_name} {self.year}",
            f"Total Working Days (Mon-Fri): {self.business_days}",
            f"Attendance Goal ({self.goal_percent:g}%): {self.required_count} day{plural}",
            f"Attendance so far: {self.count}",
        ]


@dataclass
class CalendarCell:
    """One day in the month grid."""
    day: int
    attended: bool = False
    holiday: bool = False
    weekend: bool = False


def build_summary(tracker: AttendanceTracker, goal_percent: Optional[float] = None) -> ProgressSummary:
    """
    Summarise a tracker's progress.

    Args:
        tracker: Tracker for the month
        goal_percent: Goal as configured by the user; defaults to the
            tracker's derived goal_percent()
    """
    if goal_percent is None:
        goal_percent = tracker.goal_percent()
    return ProgressSummary(
        month_name=month_name[tracker.storage_month],
        year=tracker.year,
        business_days=tracker.business_days,
        goal_percent=goal_percent,
        required_count=tracker.required_count,
        count=tracker.count(),
    )


def build_month_grid(tracker: AttendanceTracker) -> List[List[Optional[CalendarCell]]]:
    """
    Lay the month out as Sunday-first weeks.

    Leading and trailing slots are None. Holidays are only flagged on days
    that are not attended.
    """
    holidays = set(holidays_for(tracker.year))
    first_weekday = sunday_weekday(date(tracker.year, tracker.storage_month, 1))

    weeks: List[List[Optional[CalendarCell]]] = []
    week: List[Optional[CalendarCell]] = [None] * first_weekday

    for day in range(1, days_in_month(tracker.year, tracker.calendar_month) + 1):
        d = date(tracker.year, tracker.storage_month, day)
        attended = tracker.has_mark(day)
        week.append(CalendarCell(
            day=day,
            attended=attended,
            holiday=d in holidays and not attended,
            weekend=d.weekday() >= 5,
        ))
        if len(week) == 7:
            weeks.append(week)
            week = []

    if week:
        week.extend([None] * (7 - len(week)))
        weeks.append(week)

    return weeks


def render_month_grid(grid: List[List[Optional[CalendarCell]]]) -> str:
    """Plain-text calendar: [dd] attended, (dd) holiday."""
    lines = [" ".join(f"{name:>4}" for name in ('Sun', 'Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat'))]
    for week in grid:
        cells = []
        for cell in week:
            if cell is None:
                cells.append("    ")
            elif cell.attended:
                cells.append(f"[{cell.day:>2}]")
            elif cell.holiday:
                cells.append(f"({cell.day:>2})")
            else:
                cells.append(f" {cell.day:>2} ")
        lines.append(" ".join(cells))
    return "\n".join(lines)
