"""Reference extraction from test artifact files.

Pulls four kinds of references out of a file's text:
- bracketed data references ``{{entity.field}}``
- entity names passed to parameterized references ``{{section.el(entity.field)}}``
- action group references ``ref="..."``
- inheritance references ``extends="..."``

Names declared as action group ``<argument>``s in the same file are local
variables, not entities, and are dropped.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from ..exceptions import ModuleInsightError
from ..logging_config import get_logger
from .models import EntityReference, ReferenceKind
from .patterns import (
    ACTION_GROUP_ARGUMENT,
    ACTION_GROUP_REFERENCE,
    BRACKET_REFERENCE,
    BRACKET_ROOT,
    ENTITY_ROOT,
    EXTENDS_REFERENCE,
    PARAMETER_LIST,
    PERSISTED_OBJECT,
    STRING_PARAMETER,
)

logger = get_logger(__name__)


def extract_references(path: Path, contents: Optional[str] = None) -> List[EntityReference]:
    """Extract the entity references of one file, deduplicated, in file order.

    Raises:
        ModuleInsightError: If ``contents`` is not given and the file can't be read
    """
    path = Path(path)
    if contents is None:
        try:
            contents = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise ModuleInsightError(f"Cannot read test file: {path}", details={"reason": str(e)})

    arguments = set(ACTION_GROUP_ARGUMENT.findall(contents))

    full_matches: List[str] = []
    parameterized: List[str] = []
    for match in BRACKET_REFERENCE.finditer(contents):
        full_matches.append(match.group(0))
        if match.group(2):
            parameterized.append(match.group(2))

    references: List[EntityReference] = []

    for name in _bracket_roots(_unique(full_matches)):
        if name in arguments:
            continue
        references.append(EntityReference(ReferenceKind.DATA, name, path))

    for name in _parameter_entities(_unique(parameterized)):
        if name in arguments:
            continue
        references.append(EntityReference(ReferenceKind.PARAMETERIZED, name, path))

    for name in _unique(ACTION_GROUP_REFERENCE.findall(contents)):
        references.append(EntityReference(ReferenceKind.ACTION_GROUP, name, path))

    for name in _unique(EXTENDS_REFERENCE.findall(contents)):
        references.append(EntityReference(ReferenceKind.EXTENDS, name, path))

    result = _unique(ref for ref in references if ref.raw_name)
    logger.debug(f"{path}: {len(result)} references")
    return result


def split_parameters(reference: str) -> List[str]:
    """Split the argument list of ``{{x.y(a, b)}}`` into raw arguments."""
    match = PARAMETER_LIST.search(reference)
    if not match:
        return []
    body = match.group(0).rstrip(")").lstrip("(")
    return [argument.strip() for argument in body.split(",")]


def _bracket_roots(references: Iterable[str]) -> List[str]:
    roots = []
    for reference in references:
        match = BRACKET_ROOT.match(reference)
        if match:
            roots.append(match.group(1))
    return roots


def _parameter_entities(references: Iterable[str]) -> List[str]:
    names = []
    for reference in references:
        for argument in split_parameters(reference):
            # 'literal' and $persisted.field$ never name an entity
            if STRING_PARAMETER.search(argument) or PERSISTED_OBJECT.search(argument):
                continue
            match = ENTITY_ROOT.match(argument)
            if match and match.group(1).strip():
                names.append(match.group(1).strip())
    return names


def _unique(items):
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result
