"""
Domain Exceptions Module

Error taxonomy shared by the attendance engine and its collaborators.
"""


class AttendanceError(Exception):
    """Base exception for attendance tracker failures."""


class InvalidDateError(AttendanceError, ValueError):
    """Raised when (year, month, day) does not form a real calendar date."""

    def __init__(self, year, month, day):
        self.year = year
        self.month = month
        self.day = day
        super().__init__(f"Invalid date: year={year}, month={month}, day={day}")


class InvalidGoalError(AttendanceError, ValueError):
    """Raised when a goal percentage falls outside 0-100."""

    def __init__(self, goal):
        self.goal = goal
        super().__init__(f"Goal percentage must be between 0 and 100, got {goal!r}")


class CsvFormatError(AttendanceError, ValueError):
    """Raised when an imported CSV file is empty or has the wrong header."""


class StorageError(AttendanceError, OSError):
    """Raised by storage backends when a blob cannot be read or written."""
