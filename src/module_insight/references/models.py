"""Reference and entity models."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ReferenceKind(Enum):
    """How a test artifact refers to an entity."""

    DATA = "data"  # {{entity.field}}
    PARAMETERIZED = "parameterized"  # argument of {{section.element(entity.field)}}
    ACTION_GROUP = "action-group"  # ref="..."
    EXTENDS = "extends"  # extends="..."


class EntityKind(Enum):
    """Registries an entity can live in, in lookup order."""

    DATA = "data"
    PAGE = "page"
    SECTION = "section"
    ACTION_GROUP = "action-group"
    TEST = "test"


@dataclass(frozen=True)
class EntityReference:
    kind: ReferenceKind
    raw_name: str
    source_file: Path


@dataclass(frozen=True)
class Entity:
    """A named definition. Merged entities list every file they came from."""

    name: str
    kind: EntityKind
    filenames: tuple[Path, ...]


@dataclass(frozen=True)
class ResolvedEntity:
    """An entity joined with the modules that own its files."""

    name: str
    owning_modules: tuple[str, ...]
    source_files: tuple[Path, ...]
