"""Module path resolution: path sources, registry, merger and sequencing."""

from .enabled import EnabledModulesFile, EnabledModuleSource, StaticEnabledModules
from .models import ModuleDescriptor, PathOwnershipMap
from .naming import UNKNOWN_VENDOR, possible_vendor_module_name, possible_vendor_name
from .registry import ComponentRegistry, RegistrationFileRegistry, StaticComponentRegistry
from .resolver import MODULE_BLOCKLIST, ModuleResolver, flatten_ownership
from .sequence import PassthroughSequenceSorter, SequenceSorter
from .sources import (
    ComposerInstalledScanner,
    ComposerJsonScanner,
    ConventionScanner,
    PathSource,
    RegistryScanner,
)

__all__ = [
    "MODULE_BLOCKLIST",
    "UNKNOWN_VENDOR",
    "ComponentRegistry",
    "ComposerInstalledScanner",
    "ComposerJsonScanner",
    "ConventionScanner",
    "EnabledModuleSource",
    "EnabledModulesFile",
    "ModuleDescriptor",
    "ModuleResolver",
    "PassthroughSequenceSorter",
    "PathOwnershipMap",
    "PathSource",
    "RegistrationFileRegistry",
    "RegistryScanner",
    "SequenceSorter",
    "StaticComponentRegistry",
    "StaticEnabledModules",
    "flatten_ownership",
    "possible_vendor_module_name",
    "possible_vendor_name",
]
