"""Composer manifest reading and functional-test package discovery."""

from .manifest import (
    MANIFEST_NAME,
    TEST_CONTENT_SUFFIX,
    TEST_MODULE_PACKAGE_TYPE,
    ComposerManifest,
    find_manifest,
    parse_suggested_modules,
    read_manifest,
    strip_test_suffix,
)
from .packages import (
    InstalledPackage,
    find_test_module_manifests,
    read_installed_packages,
)

__all__ = [
    "MANIFEST_NAME",
    "TEST_CONTENT_SUFFIX",
    "TEST_MODULE_PACKAGE_TYPE",
    "ComposerManifest",
    "InstalledPackage",
    "find_manifest",
    "find_test_module_manifests",
    "parse_suggested_modules",
    "read_installed_packages",
    "read_manifest",
    "strip_test_suffix",
]
