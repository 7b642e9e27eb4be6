"""Entity registries and the ordered resolver that probes them.

A registry answers ``get_object(name)`` with an Entity, ``None``, or by
raising EntityNotFoundError. The resolver treats the last two alike and moves
on to the next registry; the first hit wins.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol, Sequence

from ..exceptions import EntityNotFoundError
from ..logging_config import get_logger
from .models import Entity, EntityKind, EntityReference

logger = get_logger(__name__)

# Pseudo-entities for environment and credential values
RESERVED_NAMES = frozenset({"_ENV", "_CREDS"})

DEFAULT_LOOKUP_ORDER = (
    EntityKind.DATA,
    EntityKind.PAGE,
    EntityKind.SECTION,
    EntityKind.ACTION_GROUP,
    EntityKind.TEST,
)


class EntityRegistry(Protocol):
    def get_object(self, name: str) -> Optional[Entity]: ...


class InMemoryEntityRegistry:
    """Registry of one entity kind; same-named definitions are merged."""

    def __init__(self, kind: EntityKind, raise_on_miss: bool = False):
        self.kind = kind
        self.raise_on_miss = raise_on_miss
        self._entities: Dict[str, Entity] = {}

    def add(self, name: str, filename: Path) -> Entity:
        existing = self._entities.get(name)
        filenames = existing.filenames if existing else ()
        if filename not in filenames:
            filenames = filenames + (Path(filename),)
        entity = Entity(name=name, kind=self.kind, filenames=filenames)
        self._entities[name] = entity
        return entity

    def get_object(self, name: str) -> Optional[Entity]:
        entity = self._entities.get(name)
        if entity is None and self.raise_on_miss:
            raise EntityNotFoundError(name, self.kind.value)
        return entity

    def names(self) -> List[str]:
        return sorted(self._entities)

    def __len__(self) -> int:
        return len(self._entities)


class EntityResolver:
    """Resolves entity names by probing registries in a fixed order."""

    def __init__(self, registries: Sequence[EntityRegistry]):
        self.registries = list(registries)

    def find_entity(self, name: str) -> Optional[Entity]:
        """Return the first registry hit for ``name``, or None.

        Reserved names never resolve. A miss is not an error here: the
        reference may point outside the indexed test content.
        """
        if name in RESERVED_NAMES:
            return None

        for registry in self.registries:
            try:
                entity = registry.get_object(name)
            except EntityNotFoundError:
                continue
            if entity:
                return entity

        logger.debug(f"Unresolved reference {name}")
        return None

    def resolve_references(self, references: Iterable[EntityReference]) -> List[Entity]:
        """Resolve references to unique entities, keyed by entity name."""
        entities: Dict[str, Entity] = {}
        for reference in references:
            entity = self.find_entity(reference.raw_name)
            if entity is not None:
                entities[entity.name] = entity
        return list(entities.values())
