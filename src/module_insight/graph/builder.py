"""Dependency closure construction from composer requirements.

Each module's closure is the set of package names reachable from its
``require`` map. Requirements that name another known module are expanded
through that module's own requirements; anything else (php, libraries,
application modules without test content) is recorded but not expanded.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional

from ..composer import ComposerManifest, find_manifest, read_manifest
from ..exceptions import ManifestError
from ..logging_config import get_logger
from ..resolution.models import ModuleDescriptor
from .models import DependencyClosure, ModuleDependencyGraph

logger = get_logger(__name__)

ManifestReader = Callable[[Path], ComposerManifest]


def build_dependency_graph(
    descriptors: Mapping[str, ModuleDescriptor],
    manifest_reader: ManifestReader = read_manifest,
) -> ModuleDependencyGraph:
    """Read every module's manifest into a ModuleDependencyGraph.

    Modules without a readable manifest get no requirements; the failure is
    logged and the remaining modules are still processed.
    """
    graph = ModuleDependencyGraph()

    for name, descriptor in descriptors.items():
        manifest = _load_manifest(descriptor, manifest_reader)
        package = descriptor.composer_package_name
        if manifest is not None:
            package = package or manifest.package_name
            graph.requires[name] = list(manifest.requires)
        else:
            graph.requires[name] = []

        if package:
            graph.module_to_package[name] = package
            # First module wins when two modules claim one package
            graph.package_to_module.setdefault(package, name)

    return graph


def compute_closures(graph: ModuleDependencyGraph) -> DependencyClosure:
    """Compute the transitive requirement set of every module.

    Uses an explicit work stack with a visited set that is reset for each
    top-level module, so cycles terminate and one module's traversal never
    suppresses another's.
    """
    closures: DependencyClosure = {}

    for module in graph.requires:
        reachable: set[str] = set()
        visited: set[str] = set()
        stack = [module]

        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)

            for package in graph.requires.get(current, []):
                reachable.add(package)
                dependency = graph.module_for_package(package)
                if dependency is not None and dependency not in visited:
                    stack.append(dependency)

        own_package = graph.package_name(module)
        if own_package is not None:
            reachable.discard(own_package)
        closures[module] = frozenset(reachable)

    return closures


class DependencyGraphBuilder:
    """Builds and memoizes dependency closures for a resolved module set."""

    def __init__(
        self,
        descriptors: Mapping[str, ModuleDescriptor],
        manifest_reader: ManifestReader = read_manifest,
    ):
        self.descriptors = dict(descriptors)
        self.manifest_reader = manifest_reader
        self._graph: Optional[ModuleDependencyGraph] = None
        self._closures: Optional[DependencyClosure] = None

    @property
    def graph(self) -> ModuleDependencyGraph:
        if self._graph is None:
            self._graph = build_dependency_graph(self.descriptors, self.manifest_reader)
        return self._graph

    def build_closures(self) -> DependencyClosure:
        if self._closures is None:
            self._closures = compute_closures(self.graph)
            logger.debug(f"Computed dependency closures for {len(self._closures)} modules")
        return self._closures

    def package_name(self, module: str) -> Optional[str]:
        return self.graph.package_name(module)

    def module_for_package(self, package: str) -> Optional[str]:
        return self.graph.module_for_package(package)

    def direct_dependencies(self) -> Dict[str, List[str]]:
        return {name: list(requires) for name, requires in self.graph.requires.items()}


def _load_manifest(
    descriptor: ModuleDescriptor, manifest_reader: ManifestReader
) -> Optional[ComposerManifest]:
    for path in descriptor.paths:
        manifest_file = find_manifest(path)
        if manifest_file is None:
            continue
        try:
            return manifest_reader(manifest_file)
        except ManifestError as e:
            logger.warning(f"Cannot read dependencies of {descriptor.name}: {e.reason}")
            return None

    logger.debug(f"No composer manifest for module {descriptor.name}")
    return None
