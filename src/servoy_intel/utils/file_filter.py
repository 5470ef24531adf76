"""
Centralized file filtering and discovery for project scans.
"""

import fnmatch
import logging
import os
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from ..constants import FILTER_CONFIG

logger = logging.getLogger(__name__)


class FileFilter:
    """Centralized file filtering logic."""

    def __init__(self, additional_excludes: Optional[Iterable[str]] = None):
        """
        Initialize the file filter.

        Args:
            additional_excludes: Additional directory names to exclude
        """
        self.exclude_dirs = set(FILTER_CONFIG["exclude_directories"])
        self.exclude_files = set(FILTER_CONFIG["exclude_files"])

        if additional_excludes:
            self.exclude_dirs.update(additional_excludes)

    def should_exclude_directory(self, dir_name: str) -> bool:
        """
        Check if directory should be excluded from processing.

        Args:
            dir_name: Directory name to check

        Returns:
            True if directory should be excluded, False otherwise
        """
        # Skip hidden directories
        if dir_name.startswith('.'):
            return True
        return dir_name in self.exclude_dirs

    def should_exclude_file(self, file_name: str) -> bool:
        """Check a file's base name against the exclusion patterns."""
        for pattern in self.exclude_files:
            if fnmatch.fnmatch(file_name, pattern):
                return True
        return False

    def find_files(self, root: str, predicate: Callable[[str], bool]) -> List[str]:
        """
        Recursively collect files under `root` whose base name satisfies `predicate`.

        Excluded directories are pruned. Results are sorted so repeated scans
        of an unchanged tree agree.

        Args:
            root: Directory to scan
            predicate: Test applied to each file's base name

        Returns:
            Sorted list of absolute file paths
        """
        found = []
        try:
            for current, dirs, files in os.walk(root):
                dirs[:] = sorted(d for d in dirs if not self.should_exclude_directory(d))
                for name in files:
                    if self.should_exclude_file(name) or not predicate(name):
                        continue
                    found.append(str(Path(current, name).resolve()))
        except OSError as e:
            logger.error(f"Error scanning directory {root}: {e}")

        found.sort()
        logger.debug(f"Found {len(found)} matching files under {root}")
        return found
