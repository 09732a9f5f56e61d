"""
Attendance Goal Tracker

Command-line front end for tracking monthly office attendance against a
business-day goal. Data is kept in the local data directory.
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

from application.attendance_tracker import AttendanceTracker
from application.progress_service import build_month_grid, build_summary, render_month_grid
from application.report_service import ReportService
from config.config_manager import THEMES, ConfigManager
from domain.entities import CalendarMonth, to_calendar_month
from domain.exceptions import AttendanceError
from domain.statistics import WEEKDAY_NAMES, weekday_bar_widths
from domain.validation import MAX_YEAR, MIN_YEAR
from infrastructure.attendance_ledger import AttendanceLedger
from infrastructure.csv_io import export_csv_file, import_csv_file
from infrastructure.logger import set_console_level
from infrastructure.storage import FileStorage, get_data_dir


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Track monthly attendance against a goal.")
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory for stored data")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging on stderr")
    parser.add_argument("--year", type=int, default=None, help="Year (default: current)")
    parser.add_argument("--month", type=int, default=None, help="Month 1-12 (default: current)")

    sub = parser.add_subparsers(dest="command")
    sub.add_parser("status", help="Show progress towards the goal")
    sub.add_parser("calendar", help="Show the month calendar")

    mark = sub.add_parser("mark", help="Mark a day (default: today)")
    mark.add_argument("day", type=int, nargs="?")
    unmark = sub.add_parser("unmark", help="Remove a day's mark")
    unmark.add_argument("day", type=int)
    toggle = sub.add_parser("toggle", help="Flip a day's mark")
    toggle.add_argument("day", type=int)

    sub.add_parser("clear", help="Clear the month")
    sub.add_parser("clear-all", help="Clear the whole history")

    goal = sub.add_parser("goal", help="Set the attendance goal percentage")
    goal.add_argument("percent", type=float)
    theme = sub.add_parser("theme", help="Apply a colour theme")
    theme.add_argument("name", choices=sorted(THEMES))

    export = sub.add_parser("export", help="Export history as CSV")
    export.add_argument("path", type=Path)
    imp = sub.add_parser("import", help="Import history from CSV")
    imp.add_argument("path", type=Path)

    sub.add_parser("stats", help="Attendance per weekday")
    sub.add_parser("log", help="List recorded days, newest month first")
    report = sub.add_parser("report", help="Write the history workbook (.xlsx)")
    report.add_argument("path", type=Path)
    return parser


def run(args) -> int:
    today = date.today()
    year = args.year if args.year is not None else today.year
    calendar_month = to_calendar_month(args.month) if args.month is not None else CalendarMonth(today.month - 1)
    if not 0 <= calendar_month <= 11:
        print(f"Invalid month: {args.month}", file=sys.stderr)
        return 1
    if not MIN_YEAR <= year <= MAX_YEAR:
        print(f"Invalid year: {year} (expected {MIN_YEAR}-{MAX_YEAR})", file=sys.stderr)
        return 1

    storage = FileStorage(args.data_dir or get_data_dir())
    config_manager = ConfigManager(storage)
    options = config_manager.load().options
    ledger = AttendanceLedger(storage)
    tracker = AttendanceTracker(year, calendar_month, ledger, options.attendance_goal)
    command = args.command or "status"

    if command == "mark":
        tracker.mark(args.day if args.day is not None else today.day)
    elif command == "unmark":
        tracker.unmark(args.day)
    elif command == "toggle":
        state = "marked" if tracker.toggle(args.day) else "unmarked"
        print(f"Day {args.day} {state}.")
    elif command == "clear":
        tracker.clear()
    elif command == "clear-all":
        ledger.clear_all()
        tracker.reload()
    elif command == "goal":
        config_manager.update_option("attendance_goal", args.percent)
        tracker.set_goal_percent(args.percent)
    elif command == "theme":
        applied = config_manager.apply_theme(args.name)
        print(f"Theme {args.name}: {applied.background} / {applied.foreground} / {applied.accent}")
        return 0
    elif command == "export":
        export_csv_file(ledger, args.path)
        print(f"Exported to {args.path}")
        return 0
    elif command == "import":
        result = import_csv_file(ledger, args.path)
        print(result.summary())
        return 0
    elif command == "stats":
        totals = ReportService(ledger).weekday_totals()
        widths = weekday_bar_widths(totals)
        for weekday, name in enumerate(WEEKDAY_NAMES):
            bar = "#" * max(1, round(widths[weekday] / 5)) if totals[weekday] else ""
            print(f"{name:<10} {totals[weekday]:>4} {bar}")
        return 0
    elif command == "log":
        for month_log in ReportService(ledger).log_view():
            print(f"Month: {month_log.key}")
            for entry in month_log.entries:
                print(f"  Day: {entry.day}, Month: {entry.month}, Year: {entry.year}")
        return 0
    elif command == "report":
        path = ReportService(ledger, options.attendance_goal).export_workbook(args.path)
        print(f"Report written to {path}")
        return 0
    elif command == "calendar":
        print(render_month_grid(build_month_grid(tracker)))
        return 0

    summary = build_summary(tracker, options.attendance_goal)
    for line in summary.header_lines():
        print(line)
    print(summary.status_message)
    return 0


def main(argv=None) -> int:
    """Application entry point."""
    args = build_parser().parse_args(argv)
    if args.verbose:
        set_console_level(logging.DEBUG)
    try:
        return run(args)
    except AttendanceError as e:
        print(str(e), file=sys.stderr)
        return 1
    except OSError as e:
        print(f"File error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
