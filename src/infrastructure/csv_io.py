"""
CSV Import/Export Module

Serialises the whole attendance ledger to `year,month,day` CSV text and merges
CSV text back into it with duplicate detection and per-row error accounting.
"""

from pathlib import Path
from typing import List, Optional, Tuple

from domain.entities import AttendanceEntry, ImportResult
from domain.exceptions import CsvFormatError
from domain.validation import validate_csv_line, validate_int_field
from infrastructure.logger import get_logger

logger = get_logger("CsvIO")

CSV_HEADER = "year,month,day"


def export_csv(ledger) -> str:
    """
    Export every entry of the ledger, bucket by bucket in insertion order.

    Args:
        ledger: AttendanceLedger (or anything exposing get_all())

    Returns:
        CSV text with a header line; every line ends with a newline
    """
    lines = [CSV_HEADER]
    for entries in ledger.get_all().values():
        for entry in entries:
            lines.append(f"{entry.year},{entry.month},{entry.day}")
    return "\n".join(lines) + "\n"


def _parse_row(line: str) -> Optional[Tuple[int, int, int]]:
    """Parse one data line into (year, month, day), or None if it is an error row."""
    if not validate_csv_line(line):
        return None
    fields = [part.strip() for part in line.split(',')]
    if not all(validate_int_field(field) for field in fields):
        return None
    year, month, day = (int(field) for field in fields)
    # Coarse range check only: 2024,2,30 passes
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        return None
    return year, month, day


def import_csv(ledger, text: str) -> ImportResult:
    """
    Merge CSV text into the ledger.

    Rows already present in their month bucket are counted as duplicates;
    malformed rows are counted as errors. Both are skipped. The mutated
    history is persisted once at the end.

    Args:
        ledger: AttendanceLedger to merge into
        text: CSV text with a `year,month,day` header

    Returns:
        ImportResult with imported, duplicate and error counts

    Raises:
        CsvFormatError: If the text has no data lines or the header is wrong.
            The ledger is left untouched.
    """
    lines: List[str] = text.strip().split('\n')
    if len(lines) < 2:
        raise CsvFormatError("CSV file is empty or missing data.")

    header = lines[0].strip().lower()
    if header != CSV_HEADER:
        raise CsvFormatError(f"Invalid CSV header. Expected '{CSV_HEADER}'.")

    result = ImportResult()
    history = ledger.get_all()

    for line_no, raw_line in enumerate(lines[1:], start=2):
        line = raw_line.strip()
        if not line:
            continue

        row = _parse_row(line)
        if row is None:
            logger.debug(f"Line {line_no} rejected: {line!r}")
            result.error_count += 1
            continue

        year, month, day = row
        bucket = history.setdefault(ledger.month_key(year, month), [])
        entry = AttendanceEntry(day=day, month=month, year=year)
        if entry in bucket:
            result.duplicate_count += 1
            continue

        bucket.append(entry)
        result.imported_count += 1

    ledger.set_all(history)
    logger.info(
        f"CSV import: {result.imported_count} imported, "
        f"{result.duplicate_count} duplicates, {result.error_count} errors"
    )
    return result


def export_csv_file(ledger, path: Path) -> Path:
    """Write the ledger export to a file."""
    path = Path(path)
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(export_csv(ledger))
    logger.info(f"Exported attendance history to {path}")
    return path


def import_csv_file(ledger, path: Path) -> ImportResult:
    """Read a CSV file (BOM tolerated) and merge it into the ledger."""
    with open(Path(path), 'r', encoding='utf-8-sig') as f:
        text = f.read()
    return import_csv(ledger, text)
