"""Project-wide relationship pass: extends, implements, calls and injects edges.

This pass must only run once every file has been assembled, because call
resolution looks method names up across the complete class list.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from springmap.extractors.java.annotations import annotation_name
from springmap.model import ClassRecord, ProjectStructure, RelationKind, RelationshipEdge

logger = logging.getLogger(__name__)

INJECTING_ANNOTATIONS = frozenset({"Autowired", "Inject"})


def _method_owner_index(classes: Sequence[ClassRecord]) -> dict[str, int]:
    """Map each method name to the first class (by position) that declares it.

    Identical to a linear search over *classes* for every lookup: when several
    classes declare the same method name, the earliest one wins.
    """
    index: dict[str, int] = {}
    for pos, cls in enumerate(classes):
        for method in cls.methods:
            index.setdefault(method.name, pos)
    return index


def build_relationships(classes: Sequence[ClassRecord]) -> list[RelationshipEdge]:
    """Derive every relationship edge from the complete list of *classes*."""
    owners = _method_owner_index(classes)
    edges: list[RelationshipEdge] = []

    for cls in classes:
        if cls.extends:
            edges.append(RelationshipEdge(cls.name, cls.extends, RelationKind.EXTENDS))

        for iface in cls.implements:
            edges.append(RelationshipEdge(cls.name, iface, RelationKind.IMPLEMENTS))

        for method in cls.methods:
            for call in method.calls:
                owner = owners.get(call)
                if owner is None or classes[owner].name == cls.name:
                    continue
                edges.append(
                    RelationshipEdge(cls.name, classes[owner].name, RelationKind.CALLS, via=method.name)
                )

        for fld in cls.fields:
            if any(annotation_name(ann) in INJECTING_ANNOTATIONS for ann in fld.annotations):
                edges.append(RelationshipEdge(cls.name, fld.type, RelationKind.INJECTS))

    logger.debug("Relationships: %d edges across %d classes", len(edges), len(classes))
    return edges


def build_project_structure(classes: Sequence[ClassRecord]) -> ProjectStructure:
    classes = tuple(classes)
    return ProjectStructure(classes=classes, relationships=tuple(build_relationships(classes)))
