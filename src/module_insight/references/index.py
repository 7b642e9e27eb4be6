"""Entity index built from the XML files of resolved module paths.

Each module keeps its definitions in fixed subdirectories; the element tag
that carries the ``name`` attribute depends on the directory.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, Iterable, List

from ..logging_config import get_logger
from .models import EntityKind
from .registry import DEFAULT_LOOKUP_ORDER, InMemoryEntityRegistry

logger = get_logger(__name__)

# kind -> (subdirectory, element tag)
ENTITY_LOCATIONS = {
    EntityKind.DATA: ("Data", "entity"),
    EntityKind.PAGE: ("Page", "page"),
    EntityKind.SECTION: ("Section", "section"),
    EntityKind.ACTION_GROUP: ("ActionGroup", "actionGroup"),
    EntityKind.TEST: ("Test", "test"),
}


def index_entities(module_paths: Iterable[Path]) -> Dict[EntityKind, InMemoryEntityRegistry]:
    """Index every named definition under the given module paths."""
    registries = {kind: InMemoryEntityRegistry(kind) for kind in ENTITY_LOCATIONS}
    parsed = 0

    for module_path in module_paths:
        for kind, (subdirectory, tag) in ENTITY_LOCATIONS.items():
            directory = Path(module_path) / subdirectory
            if not directory.is_dir():
                continue
            for xml_file in sorted(directory.rglob("*.xml")):
                for name in _named_elements(xml_file, tag):
                    registries[kind].add(name, xml_file)
                parsed += 1

    logger.debug(
        f"Indexed {parsed} files: "
        + ", ".join(f"{kind.value}={len(reg)}" for kind, reg in registries.items())
    )
    return registries


def build_entity_registries(module_paths: Iterable[Path]) -> List[InMemoryEntityRegistry]:
    """Index module paths and return the registries in lookup order."""
    index = index_entities(module_paths)
    return [index[kind] for kind in DEFAULT_LOOKUP_ORDER]


def _named_elements(xml_file: Path, tag: str) -> List[str]:
    try:
        root = ET.parse(xml_file).getroot()
    except (ET.ParseError, OSError) as e:
        logger.warning(f"Skipping unparsable XML {xml_file}: {e}")
        return []

    names = []
    for element in root.iter():
        if _local_name(element.tag) == tag and element.get("name"):
            names.append(element.get("name"))
    return names


def _local_name(tag) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]
