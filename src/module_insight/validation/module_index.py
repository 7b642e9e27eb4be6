"""Maps files to the module whose directory contains them."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Mapping, Optional

from ..resolution.models import ModuleDescriptor


class ModulePathIndex:
    """Nearest-ancestor lookup from a file path to a module name."""

    def __init__(self, descriptors: Mapping[str, ModuleDescriptor]):
        self._by_path: Dict[Path, str] = {}
        for name, descriptor in descriptors.items():
            for path in descriptor.paths:
                self._by_path.setdefault(_normalize(path), name)

    def module_for(self, filepath: Path) -> Optional[str]:
        """Return the owning module, or None for files outside every module."""
        for ancestor in _normalize(filepath).parents:
            name = self._by_path.get(ancestor)
            if name is not None:
                return name
        return None

    def __len__(self) -> int:
        return len(self._by_path)


def _normalize(path: Path) -> Path:
    return Path(path).resolve()
