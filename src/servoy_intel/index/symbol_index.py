"""
Symbol index: platform catalog objects merged with the project's globals.

Built once by `initialize()` and read-only afterwards, so any number of
concurrent readers can query it without locking.
"""

import logging
import os
import time
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..config import AnalyzerConfig
from ..constants import GLOBALS_CACHE_FOLDER, GLOBALS_OBJECT
from ..errors import CatalogError, NotInitializedError
from ..extraction import CachedExtractor, ScriptExtractor, extract_all
from ..models import ExtractionResult, Function, ScriptObject, Variable
from ..storage import CacheAdapter
from ..utils import FileFilter
from .catalog import load_platform_catalog
from .fuzzy import fuzzy_search

logger = logging.getLogger(__name__)


def aggregate_globals(results: Iterable[Tuple[str, ExtractionResult]]) -> ScriptObject:
    """
    Merge per-module extraction results into one globals object.

    Functions are deduplicated by name: an identical signature is dropped,
    a differing one is kept alongside the first as an overload and logged.
    Variables become properties without deduplication.

    Args:
        results: (module name, extraction result) pairs in a stable order
    """
    by_name: Dict[str, List[Function]] = {}
    properties: List[Variable] = []

    for module_name, result in results:
        for func in result.functions:
            existing = by_name.get(func.name)
            if existing is None:
                by_name[func.name] = [func]
            elif not any(func.same_signature(other) for other in existing):
                logger.warning(f"Duplicate but not identical function '{func.name}' in module "
                               f"'{module_name}'; keeping both")
                existing.append(func)
        properties.extend(result.variables)

    functions = [func for overloads in by_name.values() for func in overloads]
    return ScriptObject(name=GLOBALS_OBJECT, functions=functions, properties=properties)


class SymbolIndex:
    """Named ScriptObjects available for completion, hover and call checking."""

    def __init__(self, workspace: str, config: Optional[AnalyzerConfig] = None,
                 cache: Optional[CacheAdapter] = None):
        self.workspace = workspace
        self.config = config or AnalyzerConfig()
        self.cache = cache
        self._objects: Dict[str, ScriptObject] = {}
        self._initialized = False
        self._extractor = CachedExtractor(ScriptExtractor(), cache)
        self._file_filter = FileFilter(self.config.vendor_dirs)

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> "SymbolIndex":
        """Load the catalog and merge project globals. Runs once."""
        if self._initialized:
            logger.warning("SymbolIndex already initialized")
            return self

        start_time = time.time()
        objects: Dict[str, ScriptObject] = {}

        try:
            catalog_objects = load_platform_catalog(self.config.catalog_path)
        except CatalogError as e:
            logger.error(str(e))
            catalog_objects = []

        for obj in catalog_objects:
            if obj.name in objects:
                logger.warning(f"Duplicate catalog object '{obj.name}'; later entry wins")
            objects[obj.name] = obj

        project_globals = self._build_project_globals()
        base = objects.get(GLOBALS_OBJECT)
        if base is None:
            logger.warning(f"Catalog has no '{GLOBALS_OBJECT}' object; creating an empty one")
            base = ScriptObject(name=GLOBALS_OBJECT, description="Project globals")
        objects[GLOBALS_OBJECT] = base.with_members(project_globals.functions, project_globals.properties)

        self._objects = objects
        self._initialized = True

        elapsed = time.time() - start_time
        logger.info(f"Symbol index ready: {len(objects)} objects, "
                    f"{len(project_globals.functions)} global functions in {elapsed:.2f}s")
        return self

    def _build_project_globals(self) -> ScriptObject:
        globals_name = self.config.globals_file_name
        files = self._file_filter.find_files(self.workspace, lambda name: name == globals_name)

        workspace_path = Path(self.workspace).resolve()
        jobs = []
        module_names = {}
        for file_path in files:
            module_names[file_path] = os.path.basename(os.path.dirname(file_path))
            try:
                relative = Path(file_path).relative_to(workspace_path).with_suffix('')
            except ValueError:
                relative = Path(module_names[file_path])
            jobs.append((file_path, f"{GLOBALS_CACHE_FOLDER}/{relative.as_posix()}"))

        results = extract_all(self._extractor, jobs, self.config.worker_count)
        return aggregate_globals((module_names[path], result) for path, result in results.items())

    def _require_initialized(self):
        if not self._initialized:
            raise NotInitializedError("SymbolIndex")

    # Queries

    @property
    def globals(self) -> ScriptObject:
        self._require_initialized()
        return self._objects[GLOBALS_OBJECT]

    def lookup(self, name: str) -> Optional[ScriptObject]:
        """The object registered under `name`, or None."""
        self._require_initialized()
        return self._objects.get(name)

    def list_names(self) -> List[str]:
        """Object names in insertion order."""
        self._require_initialized()
        return list(self._objects.keys())

    def search_objects(self, partial: str) -> List[ScriptObject]:
        """Objects whose names fuzzily match `partial`, best first."""
        return [self._objects[name] for name in fuzzy_search(self.list_names(), partial)]

    @staticmethod
    def search_functions(obj: ScriptObject, partial: str) -> List[Function]:
        """First overload of each of `obj`'s functions fuzzily matching `partial`."""
        first_by_name: Dict[str, Function] = {}
        for func in obj.functions:
            first_by_name.setdefault(func.name, func)
        return [first_by_name[name] for name in fuzzy_search(list(first_by_name), partial)]

    @staticmethod
    def fuzzy_search(candidates: Sequence[str], partial: str) -> List[str]:
        return fuzzy_search(candidates, partial)
