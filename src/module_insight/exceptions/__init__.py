"""Exception hierarchy for Module Insight."""

from .analysis import (
    AnalysisError,
    EntityNotFoundError,
    ManifestError,
)
from .base import ModuleInsightError
from .config import (
    ConfigurationError,
    EnabledModulesUnavailableError,
    InvalidConfigError,
    InvalidPathError,
    RegistryUnavailableError,
)

__all__ = [
    "ModuleInsightError",
    "AnalysisError",
    "ManifestError",
    "EntityNotFoundError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
    "RegistryUnavailableError",
    "EnabledModulesUnavailableError",
]
