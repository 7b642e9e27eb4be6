"""Vendor inference for module paths that carry no explicit owner.

A path such as ``<root>/vendor/magento/module-catalog/Test/Mftf`` is named
``Magento_module-catalog``: the segment after the nearest recognized root
marker is the vendor, the last directory (test suffix removed) the module.
"""

import re
from pathlib import Path, PurePath

from ..composer.manifest import strip_test_suffix
from ..config import DEV_TESTS
from ..logging_config import get_logger

logger = get_logger(__name__)

UNKNOWN_VENDOR = "UnknownVendor"

VENDOR_DIR = "vendor"
APP_CODE = PurePath("app", "code")

# Checked in order; the first marker that matches decides the vendor
ROOT_MARKERS = (VENDOR_DIR, APP_CODE.as_posix(), DEV_TESTS.as_posix())

_VENDOR_PATTERNS = [
    re.compile(r".+/" + re.escape(marker) + r"/(?P<vendor>[^/]+)/.+") for marker in ROOT_MARKERS
]


def possible_vendor_name(path: Path) -> str:
    """Infer the vendor segment of a path, or UnknownVendor."""
    posix = PurePath(path).as_posix()
    for pattern in _VENDOR_PATTERNS:
        match = pattern.match(posix)
        if match:
            vendor = match.group("vendor")
            return vendor[:1].upper() + vendor[1:]

    # TODO: surface unmatched paths as a validation error once callers can opt in
    logger.debug(f"No vendor marker in {posix}, using {UNKNOWN_VENDOR}")
    return UNKNOWN_VENDOR


def possible_vendor_module_name(path: Path) -> str:
    """Synthesize ``Vendor_Basename`` for a module path."""
    path = strip_test_suffix(Path(path))
    return f"{possible_vendor_name(path)}_{path.name}"
