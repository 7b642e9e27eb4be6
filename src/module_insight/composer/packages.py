"""Discovery of functional-test packages on disk.

Two places hold test packages: source trees that contain their own
composer.json files, and the vendor directory of the root project where
composer installed them as dependencies.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from ..exceptions import ManifestError
from ..logging_config import get_logger
from .manifest import MANIFEST_NAME, ComposerManifest, manifest_from_data, read_manifest

logger = get_logger(__name__)

# Directories never worth descending into while looking for manifests
_PRUNED_DIRS = {"node_modules", ".git"}


@dataclass(frozen=True)
class InstalledPackage:
    """A package composer installed into the vendor directory."""

    manifest: ComposerManifest
    install_path: Path


def iter_manifest_files(root: Path) -> Iterator[Path]:
    """Yield every composer.json below ``root`` in a stable order."""
    for path in sorted(Path(root).rglob(MANIFEST_NAME)):
        if _PRUNED_DIRS.intersection(path.parts):
            continue
        if path.is_file():
            yield path


def find_test_module_manifests(search_paths: list[Path]) -> list[ComposerManifest]:
    """Parse every functional-test composer.json found under the search paths.

    Unreadable manifests are logged and skipped so one broken package does
    not hide the others.
    """
    manifests: list[ComposerManifest] = []
    seen: set[Path] = set()

    for root in search_paths:
        if not Path(root).is_dir():
            logger.debug(f"Skipping missing search path {root}")
            continue
        for manifest_file in iter_manifest_files(root):
            resolved = manifest_file.resolve()
            if resolved in seen:
                continue
            seen.add(resolved)
            try:
                manifest = read_manifest(manifest_file)
            except ManifestError as e:
                logger.warning(f"Skipping composer manifest {manifest_file}: {e.reason}")
                continue
            if manifest.is_test_module:
                manifests.append(manifest)

    return manifests


def vendor_dir_for(root_manifest: Path) -> Path:
    """Return the vendor directory configured by a root composer.json."""
    root_manifest = Path(root_manifest)
    vendor_name = "vendor"
    try:
        data = json.loads(root_manifest.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        data = {}
    if isinstance(data, dict):
        config = data.get("config") or {}
        if isinstance(config, dict) and config.get("vendor-dir"):
            vendor_name = str(config["vendor-dir"])
    return root_manifest.parent / vendor_name


def read_installed_packages(root_manifest: Path) -> list[InstalledPackage]:
    """List the packages installed for a root composer project.

    Reads ``vendor/composer/installed.json`` (composer 1 list or composer 2
    object form) and falls back to ``composer.lock`` next to the root
    manifest. Returns an empty list when neither exists.

    Raises:
        ManifestError: If the file that exists is not valid JSON
    """
    root_manifest = Path(root_manifest)
    vendor_dir = vendor_dir_for(root_manifest)
    installed_json = vendor_dir / "composer" / "installed.json"
    lock_file = root_manifest.parent / "composer.lock"

    if installed_json.is_file():
        source = installed_json
        entries = _load_package_entries(installed_json)
    elif lock_file.is_file():
        source = lock_file
        entries = _load_package_entries(lock_file)
    else:
        logger.debug(f"No installed package list for {root_manifest}")
        return []

    packages: list[InstalledPackage] = []
    for entry in entries:
        if not isinstance(entry, dict) or not entry.get("name"):
            continue
        if source == installed_json and entry.get("install-path"):
            install_path = (installed_json.parent / entry["install-path"]).resolve()
        else:
            install_path = vendor_dir / entry["name"]
        try:
            manifest = manifest_from_data(entry, install_path / MANIFEST_NAME)
        except ManifestError as e:
            logger.warning(f"Skipping installed package {entry['name']}: {e.reason}")
            continue
        packages.append(InstalledPackage(manifest=manifest, install_path=install_path))

    return packages


def _load_package_entries(path: Path) -> list:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ManifestError(path, str(e))
    except ValueError as e:
        raise ManifestError(path, f"invalid JSON: {e}")

    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        return list(data.get("packages") or []) + list(data.get("packages-dev") or [])
    raise ManifestError(path, "unexpected package list format")
