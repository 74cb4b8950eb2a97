"""Post-scan analysis: dependency cycles, layer distribution, project summary."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from springmap.model import ClassRecord, PatternType, ProjectStructure, RelationKind

_DEFAULT_CYCLE_KINDS = frozenset({RelationKind.CALLS, RelationKind.INJECTS})


def find_cycles(
    structure: ProjectStructure,
    kinds: Iterable[RelationKind] = _DEFAULT_CYCLE_KINDS,
) -> list[list[str]]:
    """Return strongly-connected components of size ≥ 2 using Tarjan's algorithm.

    Only edges of the given *kinds* between classes present in *structure*
    are followed; edges to external or unresolved names are ignored.
    """
    kinds = frozenset(kinds)
    known = {cls.name for cls in structure.classes}
    adjacency: dict[str, list[str]] = {name: [] for name in known}
    for edge in structure.relationships:
        if edge.kind in kinds and edge.source in known and edge.target in known:
            if edge.target not in adjacency[edge.source]:
                adjacency[edge.source].append(edge.target)

    index: dict[str, int] = {}
    lowlink: dict[str, int] = {}
    on_stack: set[str] = set()
    stack: list[str] = []
    sccs: list[list[str]] = []
    counter = 0

    for root in sorted(adjacency):
        if root in index:
            continue
        # (node, next successor position)
        work: list[tuple[str, int]] = [(root, 0)]
        while work:
            v, pos = work.pop()
            if pos == 0:
                index[v] = lowlink[v] = counter
                counter += 1
                stack.append(v)
                on_stack.add(v)
            else:
                lowlink[v] = min(lowlink[v], lowlink[adjacency[v][pos - 1]])

            descended = False
            for i in range(pos, len(adjacency[v])):
                w = adjacency[v][i]
                if w not in index:
                    work.append((v, i + 1))
                    work.append((w, 0))
                    descended = True
                    break
                if w in on_stack:
                    lowlink[v] = min(lowlink[v], index[w])
            if descended:
                continue

            if lowlink[v] == index[v]:
                scc: list[str] = []
                while True:
                    w = stack.pop()
                    on_stack.discard(w)
                    scc.append(w)
                    if w == v:
                        break
                if len(scc) >= 2:
                    sccs.append(scc)

    return sccs


def layer_distribution(structure: ProjectStructure) -> dict[str, int]:
    """Count detected stereotypes per architectural layer."""
    counts: Counter[str] = Counter()
    for cls in structure.classes:
        for pattern in cls.architectural_patterns:
            counts[pattern.layer.value] += 1
    return dict(counts)


def _pattern_types(cls: ClassRecord) -> set[PatternType]:
    return {p.type for p in cls.architectural_patterns}


def group_by_layer(structure: ProjectStructure) -> dict[str, list[str]]:
    """Bucket class names into controllers, services, repositories, entities, components.

    A class with several stereotypes lands in the first matching bucket in
    that order.  Classes without a stereotype are entities when they declare
    more fields than methods, components otherwise.
    """
    layers: dict[str, list[str]] = {
        "controllers": [],
        "services": [],
        "repositories": [],
        "entities": [],
        "components": [],
    }
    for cls in structure.classes:
        types = _pattern_types(cls)
        if types & {PatternType.CONTROLLER, PatternType.REST_CONTROLLER}:
            layers["controllers"].append(cls.name)
        elif PatternType.SERVICE in types:
            layers["services"].append(cls.name)
        elif PatternType.REPOSITORY in types:
            layers["repositories"].append(cls.name)
        elif PatternType.COMPONENT in types:
            layers["components"].append(cls.name)
        elif len(cls.fields) > len(cls.methods):
            layers["entities"].append(cls.name)
        else:
            layers["components"].append(cls.name)
    return layers


@dataclass
class ProjectSummary:
    total_classes: int
    spring_components: int
    complexity: str  # "SIMPLE", "MODERATE", "COMPLEX"
    endpoints: int
    layer_distribution: dict[str, int] = field(default_factory=dict)
    relationship_counts: dict[str, int] = field(default_factory=dict)
    layers: dict[str, list[str]] = field(default_factory=dict)
    cycles: list[list[str]] = field(default_factory=list)


def _complexity(total_classes: int, spring_components: int) -> str:
    if total_classes <= 10 and spring_components <= 5:
        return "SIMPLE"
    if total_classes <= 30 and spring_components <= 15:
        return "MODERATE"
    return "COMPLEX"


def summarize(structure: ProjectStructure) -> ProjectSummary:
    total = len(structure.classes)
    spring = sum(1 for cls in structure.classes if cls.architectural_patterns)
    edge_counts = Counter(edge.kind.value for edge in structure.relationships)
    return ProjectSummary(
        total_classes=total,
        spring_components=spring,
        complexity=_complexity(total, spring),
        endpoints=sum(len(cls.endpoints) for cls in structure.classes),
        layer_distribution=layer_distribution(structure),
        relationship_counts={kind.value: edge_counts.get(kind.value, 0) for kind in RelationKind},
        layers=group_by_layer(structure),
        cycles=find_cycles(structure),
    )


def format_summary(summary: ProjectSummary) -> str:
    lines = [
        f"Classes: {summary.total_classes} ({summary.spring_components} Spring components)",
        f"Complexity: {summary.complexity}",
        f"Endpoints: {summary.endpoints}",
    ]
    if summary.layer_distribution:
        dist = ", ".join(f"{k}={v}" for k, v in sorted(summary.layer_distribution.items()))
        lines.append(f"Layers: {dist}")
    rels = ", ".join(f"{k}={v}" for k, v in summary.relationship_counts.items())
    lines.append(f"Relationships: {rels}")
    for bucket, names in summary.layers.items():
        if names:
            lines.append(f"  {bucket}: {', '.join(names)}")
    for cycle in summary.cycles:
        lines.append(f"Cycle: {' -> '.join(cycle)}")
    return "\n".join(lines)
