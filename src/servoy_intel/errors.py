"""
Exception hierarchy for the intelligence core.
"""

from typing import Optional


class IntelError(Exception):
    """Base exception for the intelligence core."""

    pass


class ScriptParseError(IntelError):
    """A script could not be parsed into a syntax tree."""

    def __init__(self, message: str, file_path: Optional[str] = None, line: Optional[int] = None):
        self.file_path = file_path
        self.line = line
        location = file_path or "<document>"
        if line is not None:
            location = f"{location}:{line}"
        super().__init__(f"{location}: {message}")


class CatalogError(IntelError):
    """The platform reference catalog is missing or malformed."""

    pass


class SettingsError(IntelError):
    """A unit settings file is unreadable or lacks required fields."""

    pass


class CacheError(IntelError):
    """A cache read or write failed."""

    pass


class NotInitializedError(IntelError):
    """A component was queried before its one-time initialization finished."""

    def __init__(self, component: str):
        self.component = component
        super().__init__(f"{component} not yet initialized")
