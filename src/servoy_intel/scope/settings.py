"""
Reader for per-unit settings files.

The file is a loosely structured text block; only lines of the form
``key: "value",`` are read, everything else is ignored.
"""

import logging
import os
import re
from typing import Dict, List, Optional

from ..errors import SettingsError
from ..models import SolutionInfo

logger = logging.getLogger(__name__)

_SETTING_RE = re.compile(r'^([a-zA-Z0-9_]+)\s*:\s*"(.*?)",?$')

REFERENCES_KEY = 'modulesNames'
UUID_KEY = 'uuid'


def parse_settings_text(content: str) -> Dict[str, str]:
    """Collect ``key: "value"`` pairs, later keys overriding earlier ones."""
    settings = {}
    for line in content.splitlines():
        match = _SETTING_RE.match(line.strip())
        if match:
            settings[match.group(1)] = match.group(2)
    return settings


def split_references(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [name.strip() for name in value.split(',') if name.strip()]


def read_solution_settings(settings_path: str) -> SolutionInfo:
    """
    Read one settings file into a SolutionInfo.

    The unit is named after the directory holding the settings file.

    Raises:
        SettingsError: If the file cannot be read or has no uuid
    """
    try:
        with open(settings_path, 'r', encoding='utf-8', errors='ignore') as f:
            content = f.read()
    except OSError as e:
        raise SettingsError(f"Failed to read {settings_path}: {e}") from e

    settings = parse_settings_text(content)
    if not settings.get(UUID_KEY):
        raise SettingsError(f"No {UUID_KEY} in {settings_path}")

    path = os.path.dirname(settings_path)
    return SolutionInfo(
        path=path,
        settings_path=settings_path,
        name=os.path.basename(path),
        uuid=settings[UUID_KEY],
        references=tuple(split_references(settings.get(REFERENCES_KEY))),
    )


def parse_solution_settings(settings_path: str) -> Optional[SolutionInfo]:
    """Like read_solution_settings, but logs and returns None on failure."""
    try:
        return read_solution_settings(settings_path)
    except SettingsError as e:
        logger.warning(f"Skipping solution settings: {e}")
        return None
