"""
Storage Module

Key-value store for whole string blobs (the attendance history and the
custom options). Backends raise StorageError; callers decide how to degrade.
"""

import os
from pathlib import Path
from typing import Dict, Optional, Protocol

from domain.exceptions import StorageError

# Overrides the data directory when set
DATA_DIR_ENV = "ATTENDANCE_DATA_DIR"

HISTORY_KEY = "attendanceHistory"
OPTIONS_KEY = "customOptions"


def get_data_dir() -> Path:
    """Resolve the data directory: environment override, else <project root>/data."""
    env_dir = os.environ.get(DATA_DIR_ENV)
    if env_dir:
        return Path(env_dir)
    return Path(__file__).resolve().parent.parent.parent / "data"


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]:
        """Return the blob stored under key, or None if absent."""
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError


class FileStorage:
    """
    Stores each key as <directory>/<key>.json.

    The directory is created on first write.
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Cannot read {path}: {e}") from e

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                f.write(value)
        except OSError as e:
            raise StorageError(f"Cannot write {path}: {e}") from e

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot remove {path}: {e}") from e


class MemoryStorage:
    """In-process storage backed by a dict."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)
