"""
Module Insight - test module resolution and dependency checking

Discovers which test-content modules are active in a code base, merges
their locations from several discovery sources, and checks that
cross-module references in test artifacts are backed by declared
composer dependencies.
"""

__version__ = "0.1.0"

from .api import create_resolver
from .config import ResolverConfig, load_config
from .resolution import ModuleDescriptor, ModuleResolver
from .validation import DependencyCheckResult, ViolationRecord, run_dependency_check

__all__ = [
    "create_resolver",
    "load_config",
    "ResolverConfig",
    "ModuleResolver",
    "ModuleDescriptor",
    "run_dependency_check",
    "DependencyCheckResult",
    "ViolationRecord",
]
