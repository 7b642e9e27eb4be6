"""Dependency check orchestration.

Resolves modules, builds dependency closures and an entity index, then
validates every test, action group and data file of every module.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from ..graph.builder import DependencyGraphBuilder
from ..logging_config import get_logger
from ..references.index import build_entity_registries
from ..references.registry import EntityRegistry, EntityResolver
from ..resolution.resolver import ModuleResolver
from .models import DependencyCheckResult
from .report import ERROR_LOG_FILENAME, ERROR_LOG_MESSAGE, group_errors, write_error_report
from .validator import ReferenceValidator

logger = get_logger(__name__)

# Subdirectories whose files can reference other modules
CHECKED_DIRECTORIES = ("Test", "ActionGroup", "Data")


def collect_test_files(module_paths: Iterable[Path]) -> List[Path]:
    """List the XML files that may hold cross-module references."""
    files: List[Path] = []
    for module_path in module_paths:
        for subdirectory in CHECKED_DIRECTORIES:
            directory = Path(module_path) / subdirectory
            if directory.is_dir():
                files.extend(sorted(directory.rglob("*.xml")))
    return files


def run_dependency_check(
    resolver: ModuleResolver,
    registries: Optional[Sequence[EntityRegistry]] = None,
    output_dir: Optional[Path] = None,
    write_report: bool = True,
) -> DependencyCheckResult:
    """Check every module's test content against its declared dependencies.

    All discovered modules are checked regardless of the enabled-module
    filter. Reference misses are ignored; violations are collected, never
    raised.

    Args:
        resolver: Module resolver for the code base under test
        registries: Entity registries in lookup order; indexed from the
            module XML files when omitted
        output_dir: Directory for the error report file
        write_report: Write the error report file when violations exist

    Raises:
        ConfigurationError: If the code root is unusable
    """
    descriptors = resolver.get_module_descriptors(force_all=True)
    module_paths = [path for descriptor in descriptors.values() for path in descriptor.paths]

    closures = DependencyGraphBuilder(descriptors).build_closures()
    if registries is None:
        registries = build_entity_registries(module_paths)

    validator = ReferenceValidator(descriptors, closures, EntityResolver(registries))
    files = resolver.sort_files_by_module_sequence(collect_test_files(module_paths))
    logger.info(f"Checking {len(files)} files across {len(descriptors)} modules")

    violations = validator.validate_files(files)
    errors = group_errors(violations)

    if write_report:
        report_dir = output_dir or resolver.config.output_dir
        summary = write_error_report(errors, ERROR_LOG_FILENAME, ERROR_LOG_MESSAGE, report_dir)
    elif errors:
        summary = f"{ERROR_LOG_MESSAGE}: Errors found across {len(errors)} file(s)."
    else:
        summary = f"{ERROR_LOG_MESSAGE}: No errors found."

    return DependencyCheckResult(
        errors=errors,
        violations=violations,
        summary=summary,
        files_checked=len(files),
    )
