"""Composer manifest reading.

Only the fields the resolver and dependency checker need are kept: the
package name, its ``require`` map, the package type and its ``suggest`` map
(functional-test packages list the application modules they cover there).
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..exceptions import ManifestError

MANIFEST_NAME = "composer.json"

# Package type of standalone functional-test modules
TEST_MODULE_PACKAGE_TYPE = "magento2-functional-test-module"

# Directory suffix under which a module keeps its test content
TEST_CONTENT_SUFFIX = Path("Test", "Mftf")

# "type: magento2-module, name: Magento_Catalog, version: *"
_SUGGEST_MODULE_RE = re.compile(r"type:\s*magento2-module\s*,\s*name:\s*(?P<name>[^,\s]+)")


@dataclass(frozen=True)
class ComposerManifest:
    """The parts of a composer.json relevant to module discovery."""

    path: Path
    package_name: Optional[str]
    requires: dict[str, str] = field(default_factory=dict)
    package_type: Optional[str] = None
    suggest: dict[str, str] = field(default_factory=dict)

    @property
    def is_test_module(self) -> bool:
        return self.package_type == TEST_MODULE_PACKAGE_TYPE

    @property
    def suggested_modules(self) -> list[str]:
        return parse_suggested_modules(self.suggest)


def read_manifest(path: Path) -> ComposerManifest:
    """Read a composer.json file, or the one inside a directory.

    Raises:
        ManifestError: If the file is missing, unreadable or not a JSON object
    """
    path = Path(path)
    if path.is_dir():
        path = path / MANIFEST_NAME

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ManifestError(path, str(e))
    except ValueError as e:
        raise ManifestError(path, f"invalid JSON: {e}")

    if not isinstance(data, dict):
        raise ManifestError(path, "top-level value is not an object")

    return manifest_from_data(data, path)


def manifest_from_data(data: dict, path: Path) -> ComposerManifest:
    """Build a manifest from an already decoded package entry.

    Lock files and installed.json hold package entries with the same shape as
    composer.json, so both readers share this.
    """
    requires = data.get("require") or {}
    suggest = data.get("suggest") or {}
    if not isinstance(requires, dict):
        raise ManifestError(path, "'require' is not an object")
    if not isinstance(suggest, dict):
        suggest = {}

    return ComposerManifest(
        path=path,
        package_name=data.get("name"),
        requires={str(k): str(v) for k, v in requires.items()},
        package_type=data.get("type"),
        suggest={str(k): str(v) for k, v in suggest.items()},
    )


def parse_suggested_modules(suggest: dict[str, str]) -> list[str]:
    """Extract application module names from a ``suggest`` map.

    >>> parse_suggested_modules({"magento/module-catalog": "type: magento2-module, name: Magento_Catalog, version: *"})
    ['Magento_Catalog']
    """
    names: list[str] = []
    for description in suggest.values():
        match = _SUGGEST_MODULE_RE.search(description)
        if match and match.group("name") not in names:
            names.append(match.group("name"))
    return names


def strip_test_suffix(path: Path) -> Path:
    """Drop a trailing Test/Mftf from a module path."""
    suffix_len = len(TEST_CONTENT_SUFFIX.parts)
    if path.parts[-suffix_len:] == TEST_CONTENT_SUFFIX.parts:
        return Path(*path.parts[:-suffix_len])
    return path


def find_manifest(module_path: Path) -> Optional[Path]:
    """Locate the composer.json that governs a module path.

    Standalone test packages carry their manifest next to the test content;
    application modules carry it at the module root above Test/Mftf.
    """
    module_path = Path(module_path)
    for candidate in (module_path, strip_test_suffix(module_path)):
        manifest = candidate / MANIFEST_NAME
        if manifest.is_file():
            return manifest
    return None
