"""
Report Service Module

Application layer service behind the history log and reporting views.
Reads the whole ledger; never goes through a single-month tracker.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from domain.business_calendar import business_days_in_month
from domain.entities import AttendanceEntry, MonthSummary, to_calendar_month
from domain.statistics import attendance_by_weekday, entry_weekday, monthly_counts
from infrastructure.attendance_ledger import AttendanceLedger
from infrastructure.logger import get_logger

logger = get_logger("ReportService")


@dataclass
class MonthLog:
    """Entries of one month bucket for the log view."""
    key: str
    entries: List[AttendanceEntry] = field(default_factory=list)


class ReportService:
    """
    Builds the log view, weekday statistics and the history workbook.

    Depends only on the ledger and domain functions, not on any UI.
    """

    def __init__(self, ledger: AttendanceLedger, goal_percent: float = 55):
        self.ledger = ledger
        self.goal_percent = goal_percent

    def log_view(self) -> List[MonthLog]:
        """Month buckets newest first, entries in stored order."""
        history = self.ledger.get_all()
        return [MonthLog(key=key, entries=history[key]) for key, _ in monthly_counts(history)]

    def weekday_totals(self) -> Dict[int, int]:
        for key, entries in self.ledger.get_all().items():
            for entry in entries:
                if entry_weekday(entry) is None:
                    logger.warning(f"Entry {entry} in {key} has no calendar date, not counted")
        return attendance_by_weekday(self.ledger)

    def month_summaries(self) -> List[MonthSummary]:
        """Per-month attended and business days, newest first."""
        summaries = []
        for key, count in monthly_counts(self.ledger.get_all()):
            try:
                year_str, month_str = key.split('-')
                year, month = int(year_str), int(month_str)
                business_days = business_days_in_month(year, to_calendar_month(month))
            except ValueError:
                logger.warning(f"Skipping unrecognised month key {key!r}")
                continue
            summaries.append(MonthSummary(
                key=key,
                year=year,
                month=month,
                attended_days=count,
                business_days=business_days,
            ))
        return summaries

    def export_workbook(self, output_path: Path) -> Path:
        """
        Write the history workbook.

        Args:
            output_path: Path of the .xlsx file to create

        Returns:
            Path to the created file
        """
        from infrastructure.excel_writer import ExcelWriter

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        logger.info(f"Writing history workbook: {output_path}")
        writer = ExcelWriter(goal_percent=self.goal_percent)
        writer.create_history_report(
            self.ledger.get_all(),
            self.month_summaries(),
            self.weekday_totals(),
            output_path,
        )
        logger.info("History workbook written")
        return output_path
