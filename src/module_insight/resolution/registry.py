"""Component registries: where the application says its components live.

The resolver only needs ``get_paths(category)``. ``RegistrationFileRegistry``
reads the ``registration.php`` files of an application checkout so the tool
works without a running application; ``StaticComponentRegistry`` is used when
the caller already knows the components.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Mapping, Optional, Protocol

from ..exceptions import RegistryUnavailableError
from ..logging_config import get_logger

logger = get_logger(__name__)

CATEGORIES = ("module", "library", "theme", "language")

# Where registration.php files sit relative to the code root
REGISTRATION_GLOBS = (
    "app/code/*/*/registration.php",
    "app/design/*/*/*/registration.php",
    "app/i18n/*/*/registration.php",
    "lib/internal/*/*/registration.php",
    "vendor/*/*/registration.php",
)

_REGISTER_RE = re.compile(
    r"ComponentRegistrar::register\(\s*"
    r"[\\\w]*ComponentRegistrar::(?P<category>MODULE|LIBRARY|THEME|LANGUAGE)\s*,\s*"
    r"['\"](?P<name>[^'\"]+)['\"]\s*,\s*__DIR__\s*\)",
    re.IGNORECASE,
)


class ComponentRegistry(Protocol):
    """Anything that maps component names to directories per category."""

    def get_paths(self, category: str) -> Dict[str, str]: ...


class StaticComponentRegistry:
    """Registry backed by a prebuilt ``{category: {name: path}}`` mapping."""

    def __init__(self, components: Mapping[str, Mapping[str, str]]):
        self._components = {cat: dict(paths) for cat, paths in components.items()}

    def get_paths(self, category: str) -> Dict[str, str]:
        return dict(self._components.get(category, {}))


class RegistrationFileRegistry:
    """Registry built by parsing registration.php files under a code root."""

    def __init__(self, code_root: Path):
        self.code_root = Path(code_root)
        self._components: Optional[Dict[str, Dict[str, str]]] = None

    def get_paths(self, category: str) -> Dict[str, str]:
        if self._components is None:
            self._components = self._load()
        return dict(self._components.get(category, {}))

    def _load(self) -> Dict[str, Dict[str, str]]:
        if not any((self.code_root / d).is_dir() for d in ("app/code", "vendor")):
            raise RegistryUnavailableError(
                "application installation not found (no app/code or vendor directory)",
                code_root=self.code_root,
            )

        components: Dict[str, Dict[str, str]] = {category: {} for category in CATEGORIES}
        for pattern in REGISTRATION_GLOBS:
            for registration in sorted(self.code_root.glob(pattern)):
                try:
                    text = registration.read_text(encoding="utf-8", errors="replace")
                except OSError as e:
                    logger.warning(f"Cannot read {registration}: {e}")
                    continue
                for match in _REGISTER_RE.finditer(text):
                    category = match.group("category").lower()
                    components[category][match.group("name")] = str(registration.parent)

        logger.debug(
            "Registered components: "
            + ", ".join(f"{cat}={len(paths)}" for cat, paths in components.items())
        )
        return components
