"""Path source adapters.

Each source scans one kind of location and reports a PathOwnershipMap:
test-content directory -> candidate module names. Sources never resolve
ambiguous ownership; that is the merger's job.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Mapping, Optional, Union

from ..composer import (
    TEST_CONTENT_SUFFIX,
    ComposerManifest,
    find_test_module_manifests,
    read_installed_packages,
)
from ..exceptions import ManifestError, RegistryUnavailableError
from ..logging_config import get_logger
from .models import PathOwnershipMap, add_owner
from .naming import possible_vendor_module_name
from .registry import CATEGORIES, ComponentRegistry

logger = get_logger(__name__)

_SKIPPED_DIRS = {"node_modules"}


class PathSource(ABC):
    """Abstract base class for module path sources."""

    name = "source"

    @abstractmethod
    def scan(self) -> PathOwnershipMap:
        """Return every discovered test-content path with its candidate owners."""
        pass


class ConventionScanner(PathSource):
    """Finds module directories by directory convention under a code root.

    With an empty pattern the immediate subdirectories of the root are
    modules. With a pattern such as ``Test/Mftf`` every directory below the
    root that contains the pattern is a module, at any depth, since vendor
    trees nest modules one level deeper than app-code trees.
    """

    name = "convention"

    def __init__(
        self,
        code_root: Path,
        pattern: Union[str, Path] = "",
        known_names: Optional[Mapping[Path, str]] = None,
        deprecated: bool = False,
    ):
        self.code_root = Path(code_root)
        self.pattern = Path(pattern) if str(pattern) else None
        self.known_names = dict(known_names or {})
        self.deprecated = deprecated

    def scan(self) -> PathOwnershipMap:
        modules: PathOwnershipMap = {}
        if not self.code_root.is_dir():
            logger.debug(f"Convention root {self.code_root} does not exist")
            return modules

        for code_path in self._relevant_paths():
            code_path = self._resolve_symlink(code_path)
            module_name = self.known_names.get(code_path) or possible_vendor_module_name(code_path)
            add_owner(modules, code_path, module_name)
            logger.debug(f"including module {module_name} from {code_path}")

        if self.deprecated and modules:
            logger.warning(
                f"DEPRECATION: {self.code_root} is deprecated! "
                "Please move test modules to dev/tests/acceptance/tests/functional/<Vendor>"
            )
        return modules

    def _relevant_paths(self) -> list[Path]:
        if self.pattern is None:
            return _subdirectories(self.code_root.resolve())

        matches: list[Path] = []
        visited: set[Path] = set()
        stack = [self.code_root.resolve()]
        while stack:
            directory = stack.pop()
            real = directory.resolve()
            if real in visited:
                continue
            visited.add(real)

            children = _subdirectories(directory)
            for child in children:
                candidate = child / self.pattern
                if candidate.is_dir():
                    matches.append(candidate)
            stack.extend(reversed(children))

        return sorted(matches)

    def _resolve_symlink(self, code_path: Path) -> Path:
        """Resolve a symlinked module directory so paths match the registry."""
        if self.pattern is None:
            return code_path.resolve() if code_path.is_symlink() else code_path

        module_dir = Path(*code_path.parts[: -len(self.pattern.parts)])
        if module_dir.is_symlink():
            return module_dir.resolve() / self.pattern
        return code_path


class RegistryScanner(PathSource):
    """Reports the test-content directories of every registered component."""

    name = "registry"

    def __init__(self, registry: ComponentRegistry, required: bool = False):
        self.registry = registry
        self.required = required

    def scan(self) -> PathOwnershipMap:
        modules: PathOwnershipMap = {}
        try:
            for category in CATEGORIES:
                for component, path in sorted(self.registry.get_paths(category).items()):
                    test_path = Path(path).resolve() / TEST_CONTENT_SUFFIX
                    if test_path.is_dir():
                        add_owner(modules, test_path, component)
        except RegistryUnavailableError as e:
            if self.required:
                raise
            logger.warning(f"Registry lookup failed, continuing without it: {e}")
            return {}

        logger.debug(f"Registry reported {len(modules)} test module paths")
        return modules


class ComposerJsonScanner(PathSource):
    """Finds functional-test packages by their composer.json under search paths."""

    name = "composer-json"

    def __init__(self, search_paths: list[Path]):
        self.search_paths = [Path(p) for p in search_paths]

    def scan(self) -> PathOwnershipMap:
        modules: PathOwnershipMap = {}
        for manifest in find_test_module_manifests(self.search_paths):
            _record_package(modules, manifest.path.parent, manifest)
        return modules


class ComposerInstalledScanner(PathSource):
    """Finds functional-test packages composer installed for the root project."""

    name = "composer-installed"

    def __init__(self, root_manifest: Path):
        self.root_manifest = Path(root_manifest)

    def scan(self) -> PathOwnershipMap:
        modules: PathOwnershipMap = {}
        if not self.root_manifest.is_file():
            logger.debug(f"No root composer manifest at {self.root_manifest}")
            return modules

        try:
            packages = read_installed_packages(self.root_manifest)
        except ManifestError as e:
            logger.warning(f"Cannot read installed packages: {e}")
            return modules

        for package in packages:
            if not package.manifest.is_test_module:
                continue
            if not package.install_path.is_dir():
                logger.debug(f"Installed package {package.manifest.package_name} missing on disk")
                continue
            _record_package(modules, package.install_path, package.manifest)
        return modules


def _record_package(modules: PathOwnershipMap, path: Path, manifest: ComposerManifest) -> None:
    names = manifest.suggested_modules or [manifest.package_name or ""]
    path = path.resolve()
    for module_name in names:
        add_owner(modules, path, module_name)
    logger.debug(f"including test package {manifest.package_name} for {names} at {path}")


def _subdirectories(directory: Path) -> list[Path]:
    try:
        return sorted(
            child
            for child in directory.iterdir()
            if child.is_dir() and not child.name.startswith(".") and child.name not in _SKIPPED_DIRS
        )
    except OSError as e:
        logger.warning(f"Cannot list {directory}: {e}")
        return []
