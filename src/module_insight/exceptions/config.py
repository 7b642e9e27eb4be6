"""Configuration and connectivity exceptions: paths, settings, collaborators."""

from pathlib import Path
from typing import Any, Dict, Optional

from .base import ModuleInsightError


class ConfigurationError(ModuleInsightError):
    """Base class for configuration-related errors."""

    pass


class InvalidPathError(ConfigurationError):
    """Raised when a required path is missing or unusable."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Invalid path: {path}", details={"path": str(path), "reason": reason})
        self.path = path
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class RegistryUnavailableError(ConfigurationError):
    """Raised when the component registry cannot be loaded."""

    def __init__(self, reason: str, code_root: Optional[Path] = None):
        details = {"reason": reason}
        if code_root is not None:
            details["code_root"] = str(code_root)

        super().__init__("Component registry unavailable", details=details)
        self.reason = reason
        self.code_root = code_root


class EnabledModulesUnavailableError(ConfigurationError):
    """Raised when the enabled-module list cannot be retrieved.

    ``context`` carries whatever the source knows about the attempt, such as
    the URL it called and the environment keys it read.
    """

    def __init__(self, reason: str, context: Optional[Dict[str, str]] = None):
        details = {"reason": reason}
        details.update(context or {})

        super().__init__("Could not retrieve enabled modules", details=details)
        self.reason = reason
        self.context = context or {}
