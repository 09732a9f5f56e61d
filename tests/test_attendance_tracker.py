"""
Unit tests for AttendanceTracker: marking, goal arithmetic and month indexing.
"""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from application.attendance_tracker import AttendanceTracker
from domain.entities import AttendanceEntry
from domain.exceptions import InvalidDateError, InvalidGoalError
from infrastructure.attendance_ledger import AttendanceLedger
from infrastructure.storage import MemoryStorage


@pytest.fixture
def ledger():
    return AttendanceLedger(MemoryStorage())


@pytest.fixture
def january(ledger):
    """Tracker for January 2024 (calendar month 0)."""
    return AttendanceTracker(2024, 0, ledger)


class TestConstruction:
    """Tests for the dual month indexing and derived figures."""

    def test_keeps_both_month_indices(self, january):
        assert january.calendar_month == 0
        assert january.storage_month == 1

    def test_december_indices(self, ledger):
        tracker = AttendanceTracker(2024, 11, ledger)
        assert tracker.calendar_month == 11
        assert tracker.storage_month == 12

    def test_business_days_use_calendar_month(self, ledger):
        """Calendar month 1 is February: 21 business days, not January's 22."""
        tracker = AttendanceTracker(2024, 1, ledger)
        assert tracker.business_days == 21

    def test_default_goal(self, january):
        """floor(22 * 55 / 100) = 12."""
        assert january.business_days == 22
        assert january.required_count == 12

    def test_custom_initial_goal(self, ledger):
        tracker = AttendanceTracker(2024, 0, ledger, goal_percent=100)
        assert tracker.required_count == 22

    def test_loads_existing_entries(self, ledger):
        ledger.set_month(2024, 1, [AttendanceEntry(15, 1, 2024)])

        tracker = AttendanceTracker(2024, 0, ledger)

        assert tracker.has_mark(15)
        assert tracker.count() == 1


class TestMarking:
    """Tests for mark/unmark/toggle/clear."""

    def test_mark_writes_storage_month_bucket(self, january, ledger):
        january.mark(15)

        assert ledger.get_month(2024, 1) == [AttendanceEntry(day=15, month=1, year=2024)]
        assert ledger.get_month(2024, 0) == []
        assert "2024-01" in ledger.get_all()
        assert "2024-00" not in ledger.get_all()

    def test_mark_increments_count(self, january):
        january.mark(15)
        assert january.has_mark(15)
        assert january.count() == 1

    def test_mark_is_idempotent(self, january, ledger):
        january.mark(15)
        january.mark(15)

        assert january.count() == 1
        assert len(ledger.get_month(2024, 1)) == 1

    @pytest.mark.parametrize("day", [0, 32, -1])
    def test_mark_out_of_range_day(self, january, day):
        with pytest.raises(InvalidDateError):
            january.mark(day)
        assert january.count() == 0

    def test_mark_day_31_in_30_day_month(self, ledger):
        """April has 30 days."""
        april = AttendanceTracker(2024, 3, ledger)

        with pytest.raises(InvalidDateError):
            april.mark(31)
        assert ledger.get_all() == {}

    def test_mark_feb_29(self, ledger):
        AttendanceTracker(2024, 1, ledger).mark(29)
        with pytest.raises(InvalidDateError):
            AttendanceTracker(2023, 1, ledger).mark(29)

    def test_mark_year_out_of_range(self, ledger):
        with pytest.raises(InvalidDateError):
            AttendanceTracker(1899, 0, ledger).mark(2)

    def test_invalid_date_error_is_value_error(self, january):
        with pytest.raises(ValueError):
            january.mark(40)

    def test_mark_unmark_round_trip(self, january, ledger):
        january.mark(10)
        before = ledger.get_month(2024, 1)

        january.mark(15)
        january.unmark(15)

        assert ledger.get_month(2024, 1) == before
        assert not january.has_mark(15)

    def test_unmark_absent_is_noop(self, january, ledger):
        january.unmark(3)
        assert january.count() == 0
        assert ledger.get_all() == {}

    def test_unmark_keeps_order(self, january, ledger):
        for day in (9, 2, 20):
            january.mark(day)
        january.unmark(2)

        assert [e.day for e in ledger.get_month(2024, 1)] == [9, 20]

    def test_toggle(self, january):
        assert january.toggle(5) is True
        assert january.has_mark(5)
        assert january.toggle(5) is False
        assert not january.has_mark(5)

    def test_clear_deletes_bucket(self, january, ledger):
        january.mark(3)
        january.mark(4)

        january.clear()

        assert january.count() == 0
        assert "2024-01" not in ledger.get_all()

    def test_entries_property_is_copy(self, january):
        january.mark(3)
        january.entries.clear()
        assert january.count() == 1


class TestMonthIsolation:
    """Trackers for different months share one ledger without interference."""

    def test_marks_do_not_leak_between_months(self, ledger):
        january = AttendanceTracker(2024, 0, ledger)
        february = AttendanceTracker(2024, 1, ledger)

        january.mark(15)

        assert january.has_mark(15)
        assert not february.has_mark(15)
        assert february.count() == 0

    def test_both_months_persist(self, ledger):
        AttendanceTracker(2024, 0, ledger).mark(15)
        AttendanceTracker(2024, 1, ledger).mark(1)

        assert set(ledger.get_all()) == {"2024-01", "2024-02"}

    def test_clear_only_affects_own_month(self, ledger):
        january = AttendanceTracker(2024, 0, ledger)
        february = AttendanceTracker(2024, 1, ledger)
        january.mark(15)
        february.mark(1)

        february.clear()

        assert ledger.get_month(2024, 1) == [AttendanceEntry(15, 1, 2024)]

    def test_same_day_other_year(self, ledger):
        AttendanceTracker(2023, 0, ledger).mark(15)
        assert not AttendanceTracker(2024, 0, ledger).has_mark(15)

    def test_reload_picks_up_bulk_changes(self, january, ledger):
        ledger.set_all({"2024-01": [AttendanceEntry(8, 1, 2024)]})
        assert not january.has_mark(8)

        january.reload()

        assert january.has_mark(8)


class TestGoal:
    """Tests for goal percentage arithmetic."""

    @pytest.mark.parametrize("percent", range(0, 101))
    def test_required_count_is_floor(self, january, percent):
        january.set_goal_percent(percent)
        assert january.required_count == (january.business_days * percent) // 100

    @pytest.mark.parametrize("percent", [-1, 101, 150, True, "50", None, float("nan")])
    def test_invalid_goal(self, january, percent):
        with pytest.raises(InvalidGoalError):
            january.set_goal_percent(percent)
        assert january.required_count == 12

    def test_fractional_goal(self, january):
        january.set_goal_percent(50.5)
        assert january.required_count == 11

    def test_goal_percent_derived_from_required(self, january):
        """12 / 22 = 54.5% rounds to 55."""
        assert january.goal_percent() == 55

    def test_goal_percent_is_lossy(self, ledger):
        """February 2024: floor(21 * 0.55) = 11 and 11 / 21 reads back as 52."""
        february = AttendanceTracker(2024, 1, ledger)
        february.set_goal_percent(55)

        assert february.required_count == 11
        assert february.goal_percent() == 52

    def test_goal_percent_rounds_half_up(self, ledger):
        """March 2024 has 20 business days; 1 / 20 is exactly 5%, 10 / 20 is 50%."""
        march = AttendanceTracker(2024, 2, ledger)
        march.set_goal_percent(5)
        assert march.goal_percent() == 5
        march.set_goal_percent(50)
        assert march.goal_percent() == 50

    def test_goal_extremes(self, january):
        january.set_goal_percent(0)
        assert january.goal_percent() == 0
        january.set_goal_percent(100)
        assert january.goal_percent() == 100


class TestMarkFirstDays:
    """Tests for bulk marking from the start of the month."""

    def test_marks_leading_days(self, ledger):
        february = AttendanceTracker(2024, 1, ledger)

        assert february.mark_first_days(3) == 3
        assert [e.day for e in february.entries] == [1, 2, 3]

    def test_skips_marked_days(self, ledger):
        february = AttendanceTracker(2024, 1, ledger)
        february.mark(2)

        february.mark_first_days(2)

        assert sorted(e.day for e in february.entries) == [1, 2, 3]

    def test_capped_at_business_days(self, ledger):
        february = AttendanceTracker(2024, 1, ledger)

        assert february.mark_first_days(100) == 21
        assert february.count() == february.business_days


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
