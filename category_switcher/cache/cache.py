"""Persistent cache of resolved application categories."""

import json
import os
import tempfile
import threading
from typing import Any, Dict, Optional
from ..categories import Category

DEFAULT_SETTINGS_PATH = os.path.expanduser("~/.category_switcher.json")
DEFAULT_CACHE_KEY = "appCategoryCache"

# Module-level singleton instance
_instance: Optional['ClassificationCache'] = None


def get_classification_cache() -> Optional['ClassificationCache']:
    """
    Get the global classification cache instance.

    Returns:
        ClassificationCache instance if initialized, None otherwise
    """
    return _instance


def initialize_classification_cache(
    settings_path: Optional[str] = None,
    cache_key: str = DEFAULT_CACHE_KEY
) -> 'ClassificationCache':
    """
    Initialize the global classification cache instance.

    This function is idempotent - if called multiple times, it returns
    the existing instance without re-initializing.

    Args:
        settings_path: Path to the JSON settings file (defaults to ~/.category_switcher.json)
        cache_key: Key under which the cache blob is stored in the settings file

    Returns:
        ClassificationCache instance
    """
    global _instance

    if _instance is not None:
        return _instance

    _instance = ClassificationCache(settings_path=settings_path, cache_key=cache_key)
    return _instance


def reset_classification_cache() -> None:
    """
    Reset the global classification cache instance (for testing).

    This sets the global instance to None, allowing a fresh instance
    to be created on the next call to initialize_classification_cache().
    """
    global _instance
    _instance = None


class ClassificationCache:
    """Maps application identifiers to their resolved category.

    The whole mapping is stored as one blob under a single key of a JSON
    settings file. It is read once on construction and written back in
    full, synchronously, after every update. Other keys in the settings
    file are preserved.
    """

    def __init__(self, settings_path: Optional[str] = None, cache_key: str = DEFAULT_CACHE_KEY):
        """
        Initialize the classification cache.

        Args:
            settings_path: Path to the JSON settings file (defaults to ~/.category_switcher.json)
            cache_key: Key under which the cache blob is stored
        """
        self.settings_path = settings_path or DEFAULT_SETTINGS_PATH
        self.cache_key = cache_key
        self._entries: Dict[str, Category] = {}
        # _lock guards _entries; _io_lock serializes writes so lookups never wait on disk
        self._lock = threading.Lock()
        self._io_lock = threading.Lock()
        self._load()

    def get(self, identifier: str) -> Optional[Category]:
        """
        Look up the cached category for an identifier.

        Args:
            identifier: Application bundle identifier

        Returns:
            Cached Category, or None on a miss
        """
        with self._lock:
            return self._entries.get(identifier)

    def set(self, identifier: str, category: Category) -> None:
        """
        Store a category and persist the cache before returning.

        Args:
            identifier: Application bundle identifier
            category: Resolved category
        """
        with self._lock:
            self._entries[identifier] = category
        self._persist()

    def remove(self, identifier: str) -> None:
        """Forget the cached category for an identifier."""
        with self._lock:
            removed = self._entries.pop(identifier, None) is not None
        if removed:
            self._persist()

    def clear(self) -> None:
        """Remove every cached entry."""
        with self._lock:
            self._entries.clear()
        self._persist()

    def snapshot(self) -> Dict[str, Category]:
        """Return a copy of all cached entries."""
        with self._lock:
            return dict(self._entries)

    def __contains__(self, identifier: object) -> bool:
        with self._lock:
            return identifier in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _read_settings(self) -> Dict[str, Any]:
        """Read the whole settings file. A missing or corrupt file reads as empty."""
        if not os.path.exists(self.settings_path):
            return {}

        try:
            with open(self.settings_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            print(f"Warning: Failed to load settings from {self.settings_path}: {e}")
            return {}

        if not isinstance(data, dict):
            print(f"Warning: Ignoring malformed settings in {self.settings_path}")
            return {}
        return data

    def _load(self) -> None:
        """Load cached entries from disk, dropping anything unrecognized."""
        blob = self._read_settings().get(self.cache_key)
        if blob is None:
            return

        if not isinstance(blob, dict):
            print(f"Warning: Ignoring malformed category cache under '{self.cache_key}'")
            return

        for identifier, label in blob.items():
            category = Category.from_label(label) if isinstance(label, str) else None
            if category is None:
                print(f"Warning: Dropping cached entry for '{identifier}' with unknown category {label!r}")
                continue
            self._entries[identifier] = category

    def _persist(self) -> None:
        """Write the current entries to disk before returning."""
        with self._io_lock:
            # Snapshot inside the I/O lock so the last writer saves the newest state
            with self._lock:
                entries = dict(self._entries)
            self._save(entries)

    def _save(self, entries: Dict[str, Category]) -> None:
        """Write the cache blob to disk. Caller must hold the I/O lock."""
        settings = self._read_settings()
        settings[self.cache_key] = {
            identifier: category.label for identifier, category in entries.items()
        }

        try:
            # Ensure directory exists
            data_dir = os.path.dirname(self.settings_path)
            if data_dir and not os.path.exists(data_dir):
                os.makedirs(data_dir, exist_ok=True)

            # Write to a sibling temp file and swap it in so readers never see a partial file
            fd, tmp_path = tempfile.mkstemp(dir=data_dir or None, prefix=".switcher-", suffix=".json")
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(settings, f, indent=2, sort_keys=True)
                os.replace(tmp_path, self.settings_path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as e:
            print(f"Warning: Failed to save category cache to {self.settings_path}: {e}")


__all__ = [
    'ClassificationCache',
    'get_classification_cache',
    'initialize_classification_cache',
    'reset_classification_cache',
]
