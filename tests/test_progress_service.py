"""
Unit tests for the progress summary and month calendar grid.
"""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from application.attendance_tracker import AttendanceTracker
from application.progress_service import (
    CalendarCell, build_month_grid, build_summary, render_month_grid
)
from infrastructure.attendance_ledger import AttendanceLedger
from infrastructure.storage import MemoryStorage


@pytest.fixture
def january():
    return AttendanceTracker(2024, 0, AttendanceLedger(MemoryStorage()))


class TestProgressSummary:
    """Tests for build_summary and its derived messages."""

    def test_initial_summary(self, january):
        summary = build_summary(january, 55)

        assert summary.month_name == "January"
        assert summary.business_days == 22
        assert summary.required_count == 12
        assert summary.count == 0
        assert summary.remaining == 12
        assert not summary.goal_reached
        assert summary.status_message == "Keep going! You need 12 more days to reach your goal."

    def test_one_day_remaining(self, january):
        january.mark_first_days(11)

        summary = build_summary(january)

        assert summary.remaining == 1
        assert summary.status_message == "Keep going! You need 1 more day to reach your goal."

    def test_goal_reached(self, january):
        january.mark_first_days(12)

        summary = build_summary(january)

        assert summary.goal_reached
        assert summary.remaining == 0
        assert summary.progress_ratio == 1
        assert summary.status_message == "You have reached your attendance goal for this month."

    def test_progress_ratio(self, january):
        january.mark_first_days(3)
        assert build_summary(january).progress_ratio == pytest.approx(3 / 12)

    def test_zero_requirement(self, january):
        january.set_goal_percent(0)

        summary = build_summary(january)

        assert summary.goal_reached
        assert summary.progress_ratio == 1.0

    def test_goal_defaults_to_derived_percent(self):
        february = AttendanceTracker(2024, 1, AttendanceLedger(MemoryStorage()))
        assert build_summary(february).goal_percent == 52

    def test_header_lines(self, january):
        january.mark(2)

        assert build_summary(january, 55).header_lines() == [
            "Month: January 2024",
            "Total Working Days (Mon-Fri): 22",
            "Attendance Goal (55%): 12 days",
            "Attendance so far: 1",
        ]


class TestMonthGrid:
    """Tests for build_month_grid (Sunday-first weeks)."""

    def test_february_2024_layout(self):
        """Feb 1 2024 is a Thursday: four leading blanks, five weeks."""
        february = AttendanceTracker(2024, 1, AttendanceLedger(MemoryStorage()))

        grid = build_month_grid(february)

        assert len(grid) == 5
        assert all(len(week) == 7 for week in grid)
        assert grid[0][:4] == [None, None, None, None]
        assert grid[0][4].day == 1
        assert grid[4][4].day == 29
        assert grid[4][5:] == [None, None]

    def test_weekend_flags(self, january):
        grid = build_month_grid(january)
        # Jan 2024 starts on Monday; Jan 6 is Saturday, Jan 7 Sunday
        assert grid[0][6].day == 6 and grid[0][6].weekend
        assert grid[1][0].day == 7 and grid[1][0].weekend
        assert not grid[0][1].weekend

    def test_holiday_flag_only_when_not_attended(self, january):
        grid = build_month_grid(january)
        assert grid[0][1] == CalendarCell(day=1, attended=False, holiday=True, weekend=False)

        january.mark(1)
        grid = build_month_grid(january)
        assert grid[0][1] == CalendarCell(day=1, attended=True, holiday=False, weekend=False)

    def test_render(self, january):
        january.mark(2)
        text = render_month_grid(build_month_grid(january))
        lines = text.splitlines()

        assert lines[0].split() == ['Sun', 'Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat']
        assert "( 1)" in lines[1]
        assert "[ 2]" in lines[1]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
