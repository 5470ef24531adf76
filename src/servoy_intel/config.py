"""
Analyzer configuration.

Settings arrive as a plain mapping (typically an editor's initialization
options). Unknown keys are ignored with a warning so newer clients can talk
to an older core.
"""

import logging
import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional, Tuple

from .constants import CATALOG_FILE, GLOBALS_FILE, SCRIPT_EXTENSION, SETTINGS_FILE

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "catalog", CATALOG_FILE)

# camelCase aliases accepted from editor clients
_ALIASES = {
    "globalsFileName": "globals_file_name",
    "settingsFileName": "settings_file_name",
    "scriptExtension": "script_extension",
    "vendorDirs": "vendor_dirs",
    "catalogPath": "catalog_path",
    "cacheRoot": "cache_root",
    "maxWorkers": "max_workers",
    "allowUnknownActuals": "allow_unknown_actuals",
}


@dataclass(frozen=True)
class AnalyzerConfig:
    """Immutable analyzer settings."""

    globals_file_name: str = GLOBALS_FILE
    settings_file_name: str = SETTINGS_FILE
    script_extension: str = SCRIPT_EXTENSION
    vendor_dirs: Tuple[str, ...] = ("node_modules",)
    catalog_path: str = DEFAULT_CATALOG_PATH
    cache_root: Optional[str] = None  # None -> per-user config directory
    max_workers: Optional[int] = None  # None -> CPU count
    allow_unknown_actuals: bool = False
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, options: Optional[Mapping[str, Any]]) -> "AnalyzerConfig":
        """
        Build a config from a mapping, accepting snake_case or camelCase keys.

        The nested legacy form ``{"typeComparison": {"allowUnknownActuals": true}}``
        is also understood.
        """
        if not options:
            return cls()

        known = {f.name for f in fields(cls)} - {"extra"}
        values: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}

        for key, value in options.items():
            if key == "typeComparison" and isinstance(value, Mapping):
                if "allowUnknownActuals" in value:
                    values["allow_unknown_actuals"] = bool(value["allowUnknownActuals"])
                continue

            name = _ALIASES.get(key, key)
            if name in known:
                values[name] = value
            else:
                logger.warning(f"Ignoring unknown configuration key: {key}")
                extra[key] = value

        if "vendor_dirs" in values:
            vendor = values["vendor_dirs"]
            values["vendor_dirs"] = (vendor,) if isinstance(vendor, str) else tuple(vendor)
        if values.get("max_workers") is not None:
            values["max_workers"] = int(values["max_workers"])
        if "allow_unknown_actuals" in values:
            values["allow_unknown_actuals"] = bool(values["allow_unknown_actuals"])

        return cls(extra=extra, **values)

    @property
    def worker_count(self) -> int:
        return self.max_workers or os.cpu_count() or 4
