"""
Excel Writer Module

Generates a formatted Excel workbook of the attendance history with styling.
Applies color grading to monthly attendance rates.
"""

from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from domain.entities import AttendanceEntry, MonthSummary, RateColorTier
from domain.statistics import (
    WEEKDAY_NAMES, calculate_rate_color, entry_weekday
)


class ExcelWriter:
    """
    Generates the attendance history workbook.

    Sheets:
    - Summary: one row per month with attended days, business days and rate
    - Log: one row per entry, newest month first
    - By Weekday: attended days per weekday (Sunday first)

    Styling:
    - Blue header rows with white bold text
    - 3-tier color for attendance rates against the goal
    """

    COLORS = {
        'green': PatternFill(start_color='90EE90', end_color='90EE90', fill_type='solid'),
        'red': PatternFill(start_color='FF6B6B', end_color='FF6B6B', fill_type='solid'),
        'yellow': PatternFill(start_color='FFD700', end_color='FFD700', fill_type='solid'),
        'gray': PatternFill(start_color='D3D3D3', end_color='D3D3D3', fill_type='solid'),
        'header': PatternFill(start_color='4472C4', end_color='4472C4', fill_type='solid'),
    }

    TIER_COLORS = {
        RateColorTier.GREEN: 'green',
        RateColorTier.YELLOW: 'yellow',
        RateColorTier.RED: 'red',
    }

    BORDER = Border(
        left=Side(style='thin'),
        right=Side(style='thin'),
        top=Side(style='thin'),
        bottom=Side(style='thin')
    )

    def __init__(self, goal_percent: float = 55):
        self.goal_percent = goal_percent
        self.wb: Optional[Workbook] = None

    def create_history_report(
        self,
        history: Mapping[str, Sequence[AttendanceEntry]],
        month_summaries: List[MonthSummary],
        weekday_totals: Mapping[int, int],
        output_path: Path
    ) -> Path:
        """
        Create the history workbook.

        Args:
            history: Ledger mapping {month_key: [AttendanceEntry]}
            month_summaries: Per-month figures, in display order
            weekday_totals: {weekday (0=Sunday): count}
            output_path: Path to save the Excel file

        Returns:
            Path to the created file
        """
        self.wb = Workbook()

        # Remove default sheet
        self.wb.remove(self.wb.active)

        self._write_summary_sheet(self.wb.create_sheet("Summary"), month_summaries)
        self._write_log_sheet(self.wb.create_sheet("Log"), history)
        self._write_weekday_sheet(self.wb.create_sheet("By Weekday"), weekday_totals)

        self.wb.save(output_path)
        return Path(output_path)

    def _write_header(self, ws, titles: List[str]) -> None:
        for col, title in enumerate(titles, start=1):
            cell = ws.cell(1, col, title)
            cell.font = Font(bold=True, color='FFFFFF')
            cell.fill = self.COLORS['header']
            cell.alignment = Alignment(horizontal='center', vertical='center')
            cell.border = self.BORDER

    def _write_cell(self, ws, row: int, col: int, value):
        cell = ws.cell(row, col, value)
        cell.alignment = Alignment(horizontal='center')
        cell.border = self.BORDER
        return cell

    def _write_summary_sheet(self, ws, month_summaries: List[MonthSummary]) -> None:
        self._write_header(ws, ["Month", "Attended Days", "Business Days", "Attendance Rate"])

        for row, summary in enumerate(month_summaries, start=2):
            self._write_cell(ws, row, 1, summary.key)
            self._write_cell(ws, row, 2, summary.attended_days)
            self._write_cell(ws, row, 3, summary.business_days)
            rate_cell = self._write_cell(ws, row, 4, f"{summary.attendance_rate:.1f}%")

            tier = calculate_rate_color(summary.attendance_rate, self.goal_percent)
            rate_cell.fill = self.COLORS[self.TIER_COLORS[tier]]

        ws.column_dimensions['A'].width = 12
        for col in range(2, 5):
            ws.column_dimensions[get_column_letter(col)].width = 16

    def _write_log_sheet(self, ws, history: Mapping[str, Sequence[AttendanceEntry]]) -> None:
        """Write one row per entry; month buckets newest first, entries in stored order."""
        self._write_header(ws, ["Year", "Month", "Day", "Weekday"])

        row = 2
        for month_key in sorted(history, reverse=True):
            for entry in history[month_key]:
                weekday = entry_weekday(entry)
                self._write_cell(ws, row, 1, entry.year)
                self._write_cell(ws, row, 2, entry.month)
                self._write_cell(ws, row, 3, entry.day)
                # Years datetime cannot represent get no weekday
                weekday_name = WEEKDAY_NAMES[weekday] if weekday is not None else None
                weekday_cell = self._write_cell(ws, row, 4, weekday_name)
                # Weekend attendance stands out
                if weekday in (0, 6):
                    weekday_cell.fill = self.COLORS['gray']
                row += 1

        ws.column_dimensions['D'].width = 12

    def _write_weekday_sheet(self, ws, weekday_totals: Mapping[int, int]) -> None:
        self._write_header(ws, ["Weekday", "Attended Days"])

        for weekday, name in enumerate(WEEKDAY_NAMES):
            row = weekday + 2
            self._write_cell(ws, row, 1, name)
            self._write_cell(ws, row, 2, weekday_totals.get(weekday, 0))

        ws.column_dimensions['A'].width = 12
        ws.column_dimensions['B'].width = 16
