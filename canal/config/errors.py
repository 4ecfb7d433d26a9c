"""Configuration exception hierarchy.

All configuration errors inherit from CanalConfigError. Each error keeps
the underlying cause through exception chaining so callers can tell a
read failure apart from a decode failure and still inspect the original
error.
"""

from pathlib import Path


class CanalConfigError(Exception):
    """Base exception for all configuration errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigIOError(CanalConfigError, OSError):
    """Raised when the configuration file cannot be read."""

    def __init__(self, message: str, path: str | Path) -> None:
        super().__init__(message)
        self.path = str(path)


class ConfigDecodeError(CanalConfigError, ValueError):
    """Raised when a document is malformed or a value has the wrong type."""

    def __init__(self, message: str, source: str = "<string>") -> None:
        super().__init__(message)
        self.source = source


class InvalidTablePatternError(CanalConfigError, ValueError):
    """Raised when an include/exclude table pattern is not a valid regex."""

    def __init__(self, message: str, pattern: str) -> None:
        super().__init__(message)
        self.pattern = pattern


class InvalidDumpScopeError(CanalConfigError, ValueError):
    """Raised when a dump ignore entry is not in db.table form."""
