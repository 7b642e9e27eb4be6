"""Dependency check result models."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List


@dataclass(frozen=True)
class ViolationRecord:
    """A reference to an entity owned only by modules outside the closure."""

    entity_name: str
    referencing_module: str
    offending_owner_modules: tuple[str, ...]
    source_file: Path


@dataclass
class DependencyCheckResult:
    """Outcome of a dependency check run."""

    errors: Dict[str, List[str]] = field(default_factory=dict)  # file -> report blocks
    violations: List[ViolationRecord] = field(default_factory=list)
    summary: str = ""
    files_checked: int = 0

    @property
    def passed(self) -> bool:
        return not self.violations
