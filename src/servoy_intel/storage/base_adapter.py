"""
Base cache adapter interface.

The core persists per-file extraction results through this interface so a
restart can skip re-extracting unchanged files. Implementations are
best-effort: callers treat every failure as a miss.

Key format:
- Relative POSIX paths: "globals/crm/<hash>.json"
- Folder keys have no trailing slash: "globals"
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional

logger = logging.getLogger(__name__)

KeyFilter = Callable[[str], bool]


class CacheAdapter(ABC):
    """Abstract key/bytes store used for extraction results."""

    @abstractmethod
    def save(self, key: str, data: bytes) -> None:
        """
        Store `data` under `key`, replacing any previous value.

        Raises:
            CacheError: If the write fails
        """
        pass

    @abstractmethod
    def load(self, key: str) -> Optional[bytes]:
        """Return the stored bytes, or None when absent or unreadable."""
        pass

    @abstractmethod
    def list_folder(self, key: str, recursive: bool = True, key_filter: Optional[KeyFilter] = None) -> List[str]:
        """
        List keys stored below a folder key.

        Args:
            key: Folder key
            recursive: Descend into sub-folders
            key_filter: Predicate on the entry's base name

        Returns:
            Sorted list of full keys; empty when the folder does not exist
        """
        pass

    def save_json(self, key: str, value: Any) -> bool:
        """Serialize and store a JSON value; returns False on failure."""
        try:
            self.save(key, json.dumps(value, indent=2).encode('utf-8'))
            return True
        except Exception as e:
            logger.warning(f"Failed to write cache entry '{key}': {e}")
            return False

    def load_json(self, key: str) -> Optional[Any]:
        """Load a JSON value; a missing or corrupt entry is a miss."""
        data = self.load(key)
        if data is None:
            return None
        try:
            return json.loads(data.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring corrupt cache entry '{key}': {e}")
            return None
