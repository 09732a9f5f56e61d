"""
Attendance Ledger Module

Persistent history of attendance entries, bucketed per "YYYY-MM" month key.
The ledger is the single source of truth on disk: every mutation rewrites the
whole mapping. Storage failures are logged and never reach the caller.
"""

import json
from typing import Dict, Iterable, List, Mapping

from domain.entities import AttendanceEntry, StorageMonth
from domain.exceptions import StorageError
from infrastructure.logger import get_logger
from infrastructure.storage import HISTORY_KEY, KeyValueStorage

logger = get_logger("AttendanceLedger")


class AttendanceLedger:
    """
    Month-bucketed attendance store.

    State:
        _data: {month_key -> [AttendanceEntry]} in insertion order.
            Entries are not sorted by day; readers must not assume it.
    """

    def __init__(self, storage: KeyValueStorage, key: str = HISTORY_KEY):
        self.storage = storage
        self.key = key
        self._data: Dict[str, List[AttendanceEntry]] = self._load()

    @staticmethod
    def month_key(year: int, month: StorageMonth) -> str:
        """Build the bucket key, e.g. (2024, 1) -> "2024-01"."""
        return f"{year}-{month:02d}"

    def _load(self) -> Dict[str, List[AttendanceEntry]]:
        """Read and parse the stored blob; anything unusable yields an empty mapping."""
        try:
            raw = self.storage.get_item(self.key)
        except StorageError as e:
            logger.error(f"Error reading attendance history: {e}")
            return {}

        if not raw:
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Error parsing attendance history, starting empty: {e}")
            return {}

        if not isinstance(data, dict):
            logger.error("Attendance history is not a JSON object, starting empty")
            return {}

        history: Dict[str, List[AttendanceEntry]] = {}
        for month_key, items in data.items():
            if not isinstance(items, list):
                logger.warning(f"Skipping bucket {month_key}: not a list")
                continue
            entries = []
            for item in items:
                if not isinstance(item, dict):
                    logger.warning(f"Skipping malformed entry in {month_key}: {item!r}")
                    continue
                try:
                    entries.append(AttendanceEntry.from_dict(item))
                except TypeError as e:
                    logger.warning(f"Skipping malformed entry in {month_key}: {e}")
            history[month_key] = entries

        logger.debug(f"Loaded {len(history)} month buckets")
        return history

    def _persist(self) -> None:
        """Write the whole mapping. On failure memory and storage may diverge."""
        payload = {
            month_key: [entry.to_dict() for entry in entries]
            for month_key, entries in self._data.items()
        }
        try:
            self.storage.set_item(self.key, json.dumps(payload))
        except StorageError as e:
            logger.error(f"Error saving attendance history: {e}")

    def get_month(self, year: int, month: StorageMonth) -> List[AttendanceEntry]:
        """Entries of one month as a fresh list (empty if the bucket is absent)."""
        return list(self._data.get(self.month_key(year, month), []))

    def set_month(self, year: int, month: StorageMonth, entries: Iterable[AttendanceEntry]) -> None:
        """Replace one month's entries wholesale and persist."""
        self._data[self.month_key(year, month)] = list(entries)
        self._persist()

    def clear_month(self, year: int, month: StorageMonth) -> None:
        """Remove a month's bucket entirely and persist. Absent buckets are a no-op."""
        self._data.pop(self.month_key(year, month), None)
        self._persist()

    def get_all(self) -> Dict[str, List[AttendanceEntry]]:
        """Copy of the full bucket mapping."""
        return {month_key: list(entries) for month_key, entries in self._data.items()}

    def set_all(self, history: Mapping[str, Iterable[AttendanceEntry]]) -> None:
        """Replace the entire mapping and persist."""
        self._data = {month_key: list(entries) for month_key, entries in history.items()}
        self._persist()
        logger.info(f"Replaced attendance history ({len(self._data)} months)")

    def clear_all(self) -> None:
        """Empty the mapping and persist."""
        self._data = {}
        self._persist()
        logger.info("Cleared all attendance history")
