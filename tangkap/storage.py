"""
Persistence adapters.

Key/value storage of whole text documents, the same contract as browser
localStorage: every read returns the full document, every write replaces
it. Callers serialize to JSON themselves.

- JsonFileStorage: one file per key in a data directory
- MemoryStorage: in-process dict (tests, throwaway sessions)
"""

import os
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

from tangkap.logging import get_logger

log = get_logger('storage')


class StorageError(Exception):
    """Raised when a storage backend cannot write a document."""
    pass


class Storage(ABC):
    """Abstract key/value document store."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the stored document, or None if absent or unreadable."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Replace the document stored under key.

        Raises:
            StorageError: If the document could not be written
        """

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete the document stored under key (no-op if absent)."""


class MemoryStorage(Storage):
    """Dict-backed storage."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._items


_SAFE_KEY = re.compile(r'[^A-Za-z0-9._-]')


class JsonFileStorage(Storage):
    """
    File-backed storage, one `<key>.json` file per key.

    Writes go to a temporary file first and are moved into place, so a
    crash mid-write leaves the previous document intact.

    Args:
        directory: Data directory (created on first write)
    """

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{_SAFE_KEY.sub('_', key)}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            log.warning("Could not read %s: %s", path, e)
            return None

    def set_item(self, key: str, value: str) -> None:
        path = self.path_for(key)
        tmp_path = path.with_suffix('.json.tmp')
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding='utf-8')
            os.replace(tmp_path, path)
        except OSError as e:
            raise StorageError(f"Could not write {path}: {e}") from e

    def remove_item(self, key: str) -> None:
        try:
            self.path_for(key).unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StorageError(f"Could not remove {key}: {e}") from e
