"""Module path resolution.

Merges the path sources into one ownership map, flattens it to
``module name -> path`` under the enabled-module filter, removes
block-listed modules and appends operator supplied paths:

1. Convention scanners, then the component registry, then the composer
   sources; later layers win when they claim the same path
2. Flatten, naming ambiguous paths by vendor inference (all-or-nothing)
3. Block-list
4. Custom module paths
5. Memoize for the lifetime of the resolver
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from ..composer import find_manifest, read_manifest
from ..config import DEV_TESTS, ResolverConfig
from ..exceptions import InvalidConfigError, InvalidPathError, ManifestError
from ..logging_config import get_logger
from .enabled import EnabledModuleSource
from .models import ModuleDescriptor, PathOwnershipMap, add_owner, overlay_ownership
from .naming import APP_CODE, VENDOR_DIR, possible_vendor_module_name
from .registry import ComponentRegistry
from .sequence import PassthroughSequenceSorter, SequenceSorter
from .sources import (
    ComposerInstalledScanner,
    ComposerJsonScanner,
    ConventionScanner,
    PathSource,
    RegistryScanner,
)

logger = get_logger(__name__)

# Module names never resolved, even when explicitly enabled
MODULE_BLOCKLIST = ("SampleTests", "SampleTemplates")

DEPRECATED_DEV_TESTS = DEV_TESTS / "Magento" / "FunctionalTest"

TEST_PATTERN = Path("Test", "Mftf")


def flatten_ownership(
    ownership: PathOwnershipMap, module_filter: Optional[Iterable[str]] = None
) -> Dict[str, List[Path]]:
    """Flip ``path -> [names]`` into ``name -> [paths]``.

    A path with a single candidate is bound to it when the filter allows
    that name. A path with several candidates is a shared directory: it is
    named by vendor inference and kept only when every candidate passes the
    filter. ``module_filter=None`` keeps everything.
    """
    allowed = set(module_filter) if module_filter is not None else None
    grouped: Dict[str, List[Path]] = {}

    for path, names in ownership.items():
        if len(names) == 1:
            if allowed is None or names[0] in allowed:
                grouped.setdefault(names[0], []).append(path)
            continue

        if allowed is not None and not all(name in allowed for name in names):
            logger.debug(f"Skipping shared path {path}: not all of {names} are enabled")
            continue
        grouped.setdefault(possible_vendor_module_name(path), []).append(path)

    return grouped


class ModuleResolver:
    """Resolves module paths for enabled modules of the target application.

    Collaborators are injected: the component registry, the enabled-module
    source and the file sequencing strategy. Results are memoized per
    resolver, so build a new resolver for a new run.
    """

    def __init__(
        self,
        config: ResolverConfig,
        registry: Optional[ComponentRegistry] = None,
        enabled_source: Optional[EnabledModuleSource] = None,
        sequence_sorter: Optional[SequenceSorter] = None,
        registry_required: bool = False,
    ):
        self.config = config
        self.registry = registry
        self.enabled_source = enabled_source
        self.sequence_sorter = sequence_sorter or PassthroughSequenceSorter()
        self.registry_required = registry_required

        self._enabled_modules: Optional[List[str]] = None
        self._ownership: Optional[PathOwnershipMap] = None
        self._resolved: Dict[bool, Dict[str, List[Path]]] = {}
        self._descriptors: Dict[bool, Dict[str, ModuleDescriptor]] = {}

    @property
    def code_root(self) -> Path:
        code_root = self.config.code_root
        if code_root is None:
            raise InvalidConfigError("code_root", None, "MAGENTO_BP is not set")
        if not code_root.is_dir():
            raise InvalidPathError(code_root, "code root does not exist or is not a directory")
        return code_root

    def get_enabled_modules(self) -> Optional[List[str]]:
        """Return the enabled module list, or None when no source is configured.

        Raises:
            EnabledModulesUnavailableError: If the configured source fails
        """
        if self._enabled_modules is not None:
            return self._enabled_modules
        if self.enabled_source is None:
            return None

        self._enabled_modules = list(self.enabled_source.fetch())
        logger.debug(f"{len(self._enabled_modules)} modules enabled in the application")
        return self._enabled_modules

    def get_module_whitelist(self) -> List[str]:
        return list(self.config.module_whitelist)

    def get_modules_path(self, flat: bool = True, force_all: bool = False):
        """Return resolved module paths.

        Args:
            flat: ``name -> path`` when True, ``name -> [paths]`` otherwise
            force_all: Skip enabled-module filtering for this call

        Raises:
            ConfigurationError: If the code root is unusable or the enabled
                module list is required but cannot be fetched
        """
        grouped = self._resolve(force_all or self.config.force_generate)
        if flat:
            return {name: paths[-1] for name, paths in grouped.items()}
        return {name: list(paths) for name, paths in grouped.items()}

    def resolve_module_paths(self, force_all: bool = False) -> Dict[str, Path]:
        return self.get_modules_path(flat=True, force_all=force_all)

    def all_module_paths(self, force_all: bool = False) -> List[Path]:
        """Every retained path, including extra paths of multi-path modules."""
        paths: List[Path] = []
        for module_paths in self._resolve(force_all or self.config.force_generate).values():
            for path in module_paths:
                if path not in paths:
                    paths.append(path)
        return paths

    def get_module_descriptors(self, force_all: bool = False) -> Dict[str, ModuleDescriptor]:
        """Resolved modules joined with their composer package names."""
        force = force_all or self.config.force_generate
        if force in self._descriptors:
            return dict(self._descriptors[force])

        descriptors: Dict[str, ModuleDescriptor] = {}
        for name, paths in self._resolve(force).items():
            descriptors[name] = ModuleDescriptor(
                name=name,
                paths=tuple(paths),
                composer_package_name=_package_name(paths),
            )
        self._descriptors[force] = descriptors
        return dict(descriptors)

    def sort_files_by_module_sequence(self, files: Sequence[Path]) -> List[Path]:
        return self.sequence_sorter.sort(files)

    def aggregate_paths(self) -> PathOwnershipMap:
        """Merge every path source into one ownership map (memoized)."""
        if self._ownership is not None:
            return self._ownership

        code_root = self.code_root

        registry_paths: PathOwnershipMap = {}
        if self.registry is not None:
            registry_paths = RegistryScanner(self.registry, required=self.registry_required).scan()
        known_names = {path: names[0] for path, names in registry_paths.items()}

        ownership = _union(self._convention_sources(code_root, known_names))
        ownership = overlay_ownership(ownership, registry_paths)
        ownership = overlay_ownership(ownership, _union(self._composer_sources(code_root)))

        logger.debug(f"Discovered {len(ownership)} candidate module paths")
        self._ownership = ownership
        return ownership

    def _convention_sources(self, code_root: Path, known_names: Dict[Path, str]) -> List[PathSource]:
        sources: List[PathSource] = []
        deprecated_root = code_root / DEPRECATED_DEV_TESTS
        tests_module_path = self.config.tests_module_path
        if tests_module_path is not None and tests_module_path != deprecated_root:
            sources.append(ConventionScanner(tests_module_path, "", known_names))
        sources.extend(
            [
                ConventionScanner(code_root / VENDOR_DIR, TEST_PATTERN, known_names),
                ConventionScanner(code_root / APP_CODE, TEST_PATTERN, known_names),
                ConventionScanner(deprecated_root, "", known_names, deprecated=True),
            ]
        )
        return sources

    def _composer_sources(self, code_root: Path) -> List[PathSource]:
        search_paths = [code_root / DEV_TESTS]
        tests_module_path = self.config.tests_module_path
        if tests_module_path is not None and tests_module_path not in search_paths:
            search_paths.append(tests_module_path)
        return [
            ComposerJsonScanner(search_paths),
            ComposerInstalledScanner(code_root / "composer.json"),
        ]

    def _resolve(self, force: bool) -> Dict[str, List[Path]]:
        if force in self._resolved:
            return self._resolved[force]

        ownership = self.aggregate_paths()

        module_filter: Optional[List[str]] = None
        if not force:
            enabled = self.get_enabled_modules()
            if enabled is None:
                logger.warning("No enabled-module list available, including every discovered module")
            else:
                module_filter = enabled + self.get_module_whitelist()

        grouped = flatten_ownership(ownership, module_filter)
        grouped = self._remove_blocklisted(grouped)

        for custom_path in self.config.custom_module_paths:
            name = possible_vendor_module_name(custom_path)
            if name in grouped:
                logger.info(f"custom module {custom_path} overrides resolved path of {name}")
            logger.info(f"including custom module {custom_path}")
            grouped.setdefault(name, []).append(Path(custom_path))

        self._resolved[force] = grouped
        return grouped

    def _remove_blocklisted(self, grouped: Dict[str, List[Path]]) -> Dict[str, List[Path]]:
        result = {}
        for name, paths in grouped.items():
            if name in MODULE_BLOCKLIST:
                logger.info(f"excluding module {name}")
                continue
            result[name] = paths
        return result


def _union(sources: List[PathSource]) -> PathOwnershipMap:
    ownership: PathOwnershipMap = {}
    for source in sources:
        for path, names in source.scan().items():
            for name in names:
                add_owner(ownership, path, name)
    return ownership


def _package_name(paths: Sequence[Path]) -> Optional[str]:
    for path in paths:
        manifest_file = find_manifest(path)
        if manifest_file is None:
            continue
        try:
            return read_manifest(manifest_file).package_name
        except ManifestError as e:
            logger.warning(f"Ignoring unreadable manifest {manifest_file}: {e.reason}")
    return None
