"""Analysis-related exceptions: manifests and entity lookups."""

from pathlib import Path

from .base import ModuleInsightError


class AnalysisError(ModuleInsightError):
    """Base class for analysis-related errors."""
    pass


class ManifestError(AnalysisError):
    """Raised when a composer manifest cannot be read or parsed."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot read composer manifest: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class EntityNotFoundError(AnalysisError):
    """Raised by entity registries that signal misses with an exception."""

    def __init__(self, name: str, kind: str):
        super().__init__(
            f"{kind} entity not found: {name}",
            details={"name": name, "kind": kind},
        )
        self.name = name
        self.kind = kind
