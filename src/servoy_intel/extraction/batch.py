"""
Cached, parallel extraction over many files.

Each file is an independent task; a failing task never affects the others
and results are only assembled after every task has settled.
"""

import hashlib
import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional, Sequence

from ..errors import ScriptParseError
from ..models import ExtractionResult
from ..storage import CacheAdapter
from .extractor import ScriptExtractor

logger = logging.getLogger(__name__)


class CachedExtractor:
    """Runs ScriptExtractor through the cache collaborator."""

    def __init__(self, extractor: ScriptExtractor, cache: Optional[CacheAdapter]):
        self.extractor = extractor
        self.cache = cache

    def extract(self, file_path: str, cache_key_prefix: str) -> Optional[ExtractionResult]:
        """
        Extract one file, reusing a cached result for identical content.

        Args:
            file_path: Script to extract
            cache_key_prefix: Folder key for this file's entries

        Returns:
            The extraction result, or None if the file could not be read or parsed
        """
        try:
            with open(file_path, 'r', encoding='utf-8', errors='ignore') as f:
                content = f.read()
        except OSError as e:
            logger.warning(f"Error reading {file_path}: {e}")
            return None

        content_hash = hashlib.sha1(content.encode('utf-8')).hexdigest()
        key = f"{cache_key_prefix}/{content_hash}.json"

        if self.cache is not None:
            cached = self.cache.load_json(key)
            if cached is not None:
                try:
                    return ExtractionResult.from_dict(cached)
                except (KeyError, TypeError, ValueError) as e:
                    logger.warning(f"Discarding malformed cache entry '{key}': {e}")

        try:
            result = self.extractor.parse_file(file_path, content)
        except ScriptParseError as e:
            logger.warning(f"Skipping unparseable script {e}")
            return None

        if self.cache is not None:
            self.cache.save_json(key, result.to_dict())
        return result


def extract_all(cached: CachedExtractor, jobs: Sequence[tuple], max_workers: int) -> Dict[str, ExtractionResult]:
    """
    Extract many files in parallel.

    Args:
        cached: Extractor to use
        jobs: (file_path, cache_key_prefix) pairs
        max_workers: Thread pool size

    Returns:
        file_path -> result for every successful file, in job order
    """
    if not jobs:
        return {}

    start_time = time.time()
    settled: Dict[str, Optional[ExtractionResult]] = {}
    failed: List[str] = []

    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(jobs)))) as executor:
        future_to_file = {
            executor.submit(cached.extract, file_path, prefix): file_path
            for file_path, prefix in jobs
        }
        for future in as_completed(future_to_file):
            file_path = future_to_file[future]
            try:
                settled[file_path] = future.result()
            except Exception as e:
                logger.error(f"Extraction task failed for {file_path}: {e}")
                settled[file_path] = None
            if settled[file_path] is None:
                failed.append(file_path)

    results = {}
    for file_path, _ in jobs:
        result = settled.get(file_path)
        if result is not None:
            results[file_path] = result

    elapsed = time.time() - start_time
    logger.info(f"Extracted {len(results)}/{len(jobs)} files in {elapsed:.2f}s ({len(failed)} skipped)")
    return results
