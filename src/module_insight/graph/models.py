"""Dependency graph models."""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional

# module name -> package names reachable through declared requirements
DependencyClosure = Dict[str, FrozenSet[str]]


@dataclass
class ModuleDependencyGraph:
    """Declared composer requirements between resolved modules."""

    requires: Dict[str, List[str]] = field(default_factory=dict)  # module -> required packages
    module_to_package: Dict[str, str] = field(default_factory=dict)
    package_to_module: Dict[str, str] = field(default_factory=dict)

    def package_name(self, module: str) -> Optional[str]:
        return self.module_to_package.get(module)

    def module_for_package(self, package: str) -> Optional[str]:
        """Reverse lookup; None for packages outside the module set."""
        return self.package_to_module.get(package)
