"""Reference extraction and entity resolution for test artifacts."""

from .extractor import extract_references, split_parameters
from .index import build_entity_registries, index_entities
from .models import Entity, EntityKind, EntityReference, ReferenceKind, ResolvedEntity
from .registry import (
    DEFAULT_LOOKUP_ORDER,
    RESERVED_NAMES,
    EntityRegistry,
    EntityResolver,
    InMemoryEntityRegistry,
)

__all__ = [
    "DEFAULT_LOOKUP_ORDER",
    "RESERVED_NAMES",
    "Entity",
    "EntityKind",
    "EntityReference",
    "EntityRegistry",
    "EntityResolver",
    "InMemoryEntityRegistry",
    "ReferenceKind",
    "ResolvedEntity",
    "build_entity_registries",
    "extract_references",
    "index_entities",
    "split_parameters",
]
