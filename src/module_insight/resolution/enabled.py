"""Enabled-module sources.

The list of modules enabled in the application under test normally comes
from a remote instance. The resolver only consumes the materialized result,
so any object with ``fetch()`` will do.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, List, Protocol

from ..exceptions import EnabledModulesUnavailableError


class EnabledModuleSource(Protocol):
    """Provides the names of modules enabled for this run."""

    def fetch(self) -> Iterable[str]:
        """Return enabled module names or raise EnabledModulesUnavailableError."""
        ...


class StaticEnabledModules:
    """A fixed list of enabled modules."""

    def __init__(self, names: Iterable[str]):
        self.names = [n for n in names if n]

    def fetch(self) -> List[str]:
        return list(self.names)


class EnabledModulesFile:
    """Enabled modules stored in a file.

    Accepts the JSON array the application's module endpoint returns, or a
    plain text file with one module name per line.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def fetch(self) -> List[str]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise EnabledModulesUnavailableError(str(e), context={"path": str(self.path)})

        stripped = text.strip()
        if stripped.startswith("["):
            try:
                data = json.loads(stripped)
            except ValueError as e:
                raise EnabledModulesUnavailableError(
                    f"invalid JSON: {e}", context={"path": str(self.path)}
                )
            return [str(name) for name in data if name]

        return [line.strip() for line in stripped.splitlines() if line.strip()]
