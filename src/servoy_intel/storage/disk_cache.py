"""
Disk-backed cache under the per-user configuration directory.
"""

import hashlib
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from ..constants import CACHE_DIR
from ..errors import CacheError
from .base_adapter import CacheAdapter, KeyFilter

logger = logging.getLogger(__name__)


def default_cache_root(workspace: str) -> Path:
    """Platform config dir / CACHE_DIR / sha1(workspace)."""
    if sys.platform == 'win32':
        base = Path(os.environ.get('APPDATA') or Path.home() / 'AppData' / 'Roaming')
    else:
        base = Path.home() / '.config'
    workspace_hash = hashlib.sha1(workspace.encode()).hexdigest()
    return base / CACHE_DIR / workspace_hash


class DiskCache(CacheAdapter):
    """Stores each key as a file below a root directory."""

    def __init__(self, workspace: str, root: Optional[str] = None):
        self.workspace = workspace
        self.root = Path(root) if root else default_cache_root(workspace)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Cache directory unavailable at '{self.root}': {e}")
        logger.info(f"Cache initialized at '{self.root}'")

    def _resolve(self, key: str) -> Path:
        path = (self.root / key).resolve()
        root = self.root.resolve()
        if path != root and root not in path.parents:
            raise CacheError(f"Cache key escapes cache root: {key}")
        return path

    def save(self, key: str, data: bytes) -> None:
        path = self._resolve(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = path.with_name(path.name + '.tmp')
            tmp_path.write_bytes(data)
            os.replace(tmp_path, path)
        except OSError as e:
            raise CacheError(f"Failed to write cache at '{path}': {e}") from e

    def load(self, key: str) -> Optional[bytes]:
        try:
            return self._resolve(key).read_bytes()
        except (OSError, CacheError):
            logger.debug(f"Cache miss for '{key}'")
            return None

    def list_folder(self, key: str, recursive: bool = True, key_filter: Optional[KeyFilter] = None) -> List[str]:
        try:
            folder = self._resolve(key)
        except CacheError as e:
            logger.warning(str(e))
            return []
        if not folder.is_dir():
            return []

        pattern = '**/*' if recursive else '*'
        keys = []
        try:
            for path in folder.glob(pattern):
                if not path.is_file() or path.name.endswith('.tmp'):
                    continue
                if key_filter and not key_filter(path.name):
                    continue
                keys.append(path.relative_to(self.root.resolve()).as_posix())
        except OSError as e:
            logger.error(f"Failed to list cache folder '{folder}': {e}")
            return []
        return sorted(keys)
