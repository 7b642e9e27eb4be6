"""Module dependency graph and transitive closures."""

from .builder import DependencyGraphBuilder, build_dependency_graph, compute_closures
from .models import DependencyClosure, ModuleDependencyGraph

__all__ = [
    "DependencyClosure",
    "DependencyGraphBuilder",
    "ModuleDependencyGraph",
    "build_dependency_graph",
    "compute_closures",
]
