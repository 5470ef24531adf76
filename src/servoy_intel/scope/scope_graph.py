"""
Scope graph: discovered units, their direct visibility and their script modules.
"""

import logging
import os
import time
from pathlib import Path
from typing import Dict, List, Optional, Set

from ..config import AnalyzerConfig
from ..constants import SOLUTIONS_CACHE_FOLDER
from ..errors import NotInitializedError
from ..extraction import CachedExtractor, ScriptExtractor, extract_all
from ..models import ExtractionResult, ModuleRef, SolutionInfo
from ..storage import CacheAdapter
from ..utils import FileFilter
from .graph import DependencyGraph, build_dependency_graph
from .settings import parse_solution_settings

logger = logging.getLogger(__name__)


class ScopeGraph:
    """
    Units of a workspace and which of them each unit can see.

    Built once by `initialize()`; read-only afterwards.
    """

    def __init__(self, workspace: str, config: Optional[AnalyzerConfig] = None,
                 cache: Optional[CacheAdapter] = None):
        self.workspace = workspace
        self.config = config or AnalyzerConfig()
        self.cache = cache
        self._workspace_path = Path(workspace).resolve()
        self._solutions: List[SolutionInfo] = []
        self._graph: DependencyGraph = {}
        self._files_per_solution: Dict[str, List[str]] = {}
        self._declarations: Dict[str, ExtractionResult] = {}
        self._initialized = False
        self._extractor = CachedExtractor(ScriptExtractor(), cache)
        self._file_filter = FileFilter(self.config.vendor_dirs)

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> "ScopeGraph":
        """Discover units, build the graph and extract every unit script. Runs once."""
        if self._initialized:
            logger.warning("ScopeGraph already initialized")
            return self

        start_time = time.time()
        settings_name = self.config.settings_file_name
        settings_files = self._file_filter.find_files(self.workspace, lambda name: name == settings_name)

        solutions: List[SolutionInfo] = []
        names: Set[str] = set()
        for settings_path in settings_files:
            solution = parse_solution_settings(settings_path)
            if solution is None:
                continue
            if solution.name in names:
                logger.warning(f"Duplicate solution name '{solution.name}' at {solution.path}; ignoring it")
                continue
            names.add(solution.name)
            solutions.append(solution)

        files_per_solution = {solution.name: self._solution_files(solution) for solution in solutions}

        jobs = []
        for files in files_per_solution.values():
            jobs.extend((file_path, self._cache_prefix(file_path)) for file_path in files)
        declarations = extract_all(self._extractor, jobs, self.config.worker_count)

        self._solutions = solutions
        self._graph = build_dependency_graph(solutions)
        self._files_per_solution = files_per_solution
        self._declarations = declarations
        self._initialized = True

        elapsed = time.time() - start_time
        logger.info(f"Scope graph ready: {len(solutions)} solutions, {len(jobs)} scripts in {elapsed:.2f}s")
        return self

    def _solution_files(self, solution: SolutionInfo) -> List[str]:
        extension = self.config.script_extension
        globals_name = self.config.globals_file_name
        return self._file_filter.find_files(
            solution.path, lambda name: name.endswith(extension) and name != globals_name)

    def _cache_prefix(self, file_path: str) -> str:
        path = Path(file_path)
        try:
            relative = path.relative_to(self._workspace_path).with_suffix('')
        except ValueError:
            relative = Path(path.stem)
        return f"{SOLUTIONS_CACHE_FOLDER}/{relative.as_posix()}"

    def _module_name(self, file_path: str) -> str:
        name = os.path.basename(file_path)
        extension = self.config.script_extension
        return name[:-len(extension)] if extension and name.endswith(extension) else name

    def _require_initialized(self):
        if not self._initialized:
            raise NotInitializedError("ScopeGraph")

    # Queries

    @property
    def solutions(self) -> List[SolutionInfo]:
        self._require_initialized()
        return list(self._solutions)

    def solution_by_name(self, name: str) -> Optional[SolutionInfo]:
        self._require_initialized()
        for solution in self._solutions:
            if solution.name == name:
                return solution
        return None

    def solution_for_path(self, path: str) -> Optional[SolutionInfo]:
        """
        The unit whose root directory contains `path`.

        Paths inside a vendor directory belong to no unit. When units are
        nested the innermost one wins.
        """
        self._require_initialized()
        target = str(Path(path).resolve())
        vendor_dirs = set(self.config.vendor_dirs)

        best: Optional[SolutionInfo] = None
        for solution in self._solutions:
            try:
                relative = os.path.relpath(target, solution.path)
            except ValueError:
                continue  # different drive
            if relative == os.pardir or relative.startswith(os.pardir + os.sep):
                continue
            if vendor_dirs.intersection(Path(relative).parts):
                continue
            if best is None or len(solution.path) > len(best.path):
                best = solution
        return best

    def references_of(self, solution_name: str) -> Set[str]:
        """Units directly visible from `solution_name`, itself included; empty if unknown."""
        self._require_initialized()
        return set(self._graph.get(solution_name, ()))

    def visible_modules(self, solution_name: str) -> List[ModuleRef]:
        """One ModuleRef per script file of every unit visible from `solution_name`."""
        self._require_initialized()
        modules = []
        for ref in self._graph.get(solution_name, ()):
            for file_path in self._files_per_solution.get(ref, ()):
                modules.append(ModuleRef(self._module_name(file_path), ref))
        return modules

    def module_names(self, solution_name: str) -> List[str]:
        return [module.module_name for module in self.visible_modules(solution_name)]

    def declarations_for(self, file_path: str) -> Optional[ExtractionResult]:
        """Extraction result for a unit script, or None if it was not indexed."""
        self._require_initialized()
        return self._declarations.get(str(Path(file_path).resolve()))
