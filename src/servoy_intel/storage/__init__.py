"""
Storage package: the cache collaborator used to persist extraction results.

Architecture:
- CacheAdapter: abstract save/load/list_folder interface
- DiskCache: files under the per-user config directory
"""

from .base_adapter import CacheAdapter
from .disk_cache import DiskCache, default_cache_root

__all__ = ["CacheAdapter", "DiskCache", "default_cache_root"]
