"""Module discovery models.

Defines ModuleDescriptor and the path-ownership map shared by every path
source and the merger.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

# path -> candidate module names; a path with no names is never recorded
PathOwnershipMap = Dict[Path, List[str]]


@dataclass(frozen=True)
class ModuleDescriptor:
    """A resolved module: its name, retained paths and composer identity."""

    name: str
    paths: tuple[Path, ...]
    composer_package_name: Optional[str] = None

    @property
    def primary_path(self) -> Path:
        """The path the flattened view binds this module to."""
        return self.paths[-1]


def add_owner(ownership: PathOwnershipMap, path: Path, name: str) -> None:
    """Record ``name`` as a candidate owner of ``path``, keeping order."""
    if not name:
        return
    names = ownership.setdefault(path, [])
    if name not in names:
        names.append(name)


def overlay_ownership(base: PathOwnershipMap, overlay: PathOwnershipMap) -> PathOwnershipMap:
    """Union two ownership maps; on a shared path the overlay's names win."""
    merged: PathOwnershipMap = {path: list(names) for path, names in base.items()}
    for path, names in overlay.items():
        if names:
            merged[path] = list(names)
    return merged
