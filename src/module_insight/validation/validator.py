"""Reference validation against declared module dependencies.

A file's references are legal when every referenced entity has at least one
owning module that is the referencing module itself, or whose composer
package is in the referencing module's dependency closure. Files and
entities outside every known module are skipped.
"""

from __future__ import annotations

from pathlib import Path
from typing import FrozenSet, Iterable, List, Mapping, Optional

from ..exceptions import ModuleInsightError
from ..graph.models import DependencyClosure
from ..logging_config import get_logger
from ..references.extractor import extract_references
from ..references.models import Entity, ResolvedEntity
from ..references.registry import EntityResolver
from ..resolution.models import ModuleDescriptor
from .models import ViolationRecord
from .module_index import ModulePathIndex

logger = get_logger(__name__)


class ReferenceValidator:
    """Checks test files for references that bypass declared dependencies."""

    def __init__(
        self,
        descriptors: Mapping[str, ModuleDescriptor],
        closures: DependencyClosure,
        resolver: EntityResolver,
        path_index: Optional[ModulePathIndex] = None,
    ):
        self.descriptors = dict(descriptors)
        self.closures = closures
        self.resolver = resolver
        self.path_index = path_index or ModulePathIndex(self.descriptors)

    def resolve_owners(self, entity: Entity) -> ResolvedEntity:
        """Attach the owning modules of every file an entity was merged from."""
        owners: List[str] = []
        for filename in entity.filenames:
            module = self.path_index.module_for(filename)
            if module is not None and module not in owners:
                owners.append(module)
        return ResolvedEntity(
            name=entity.name,
            owning_modules=tuple(owners),
            source_files=tuple(entity.filenames),
        )

    def validate_file(self, filepath: Path, contents: Optional[str] = None) -> List[ViolationRecord]:
        referencing_module = self.path_index.module_for(filepath)
        if referencing_module is None:
            logger.debug(f"Skipping {filepath}: not inside a known module")
            return []

        try:
            references = extract_references(filepath, contents)
        except ModuleInsightError as e:
            logger.warning(f"Skipping unreadable file {filepath}: {e}")
            return []
        entities = self.resolver.resolve_references(references)

        violations: List[ViolationRecord] = []
        for entity in entities:
            resolved = self.resolve_owners(entity)
            if not resolved.owning_modules:
                continue
            if any(self.is_allowed(referencing_module, owner) for owner in resolved.owning_modules):
                continue
            violations.append(
                ViolationRecord(
                    entity_name=resolved.name,
                    referencing_module=referencing_module,
                    offending_owner_modules=resolved.owning_modules,
                    source_file=Path(filepath),
                )
            )
        return violations

    def validate_files(self, filepaths: Iterable[Path]) -> List[ViolationRecord]:
        violations: List[ViolationRecord] = []
        for filepath in filepaths:
            violations.extend(self.validate_file(filepath))
        return violations

    def is_allowed(self, referencing_module: str, owner_module: str) -> bool:
        """Whether ``referencing_module`` may use entities of ``owner_module``."""
        if owner_module == referencing_module:
            return True

        owner_package = self._package_name(owner_module)
        if owner_package is None:
            return False
        if owner_package == self._package_name(referencing_module):
            return True
        return owner_package in self._closure(referencing_module)

    def _package_name(self, module: str) -> Optional[str]:
        descriptor = self.descriptors.get(module)
        return descriptor.composer_package_name if descriptor else None

    def _closure(self, module: str) -> FrozenSet[str]:
        return self.closures.get(module, frozenset())
