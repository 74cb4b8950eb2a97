"""Serialize a ProjectStructure to JSON or YAML, and read it back."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from springmap.model import (
    ArchitecturalPattern,
    ClassRecord,
    EndpointRecord,
    FieldRecord,
    InjectedDependency,
    LayerType,
    MethodRecord,
    Parameter,
    PatternType,
    ProjectStructure,
    RecognizedAnnotation,
    RelationKind,
    RelationshipEdge,
)


def _endpoint_to_dict(ep: EndpointRecord) -> dict:
    d: dict = {"httpMethod": ep.http_method, "path": ep.path}
    if ep.produces is not None:
        d["produces"] = ep.produces
    if ep.consumes is not None:
        d["consumes"] = ep.consumes
    if ep.description is not None:
        d["description"] = ep.description
    return d


def _method_to_dict(m: MethodRecord) -> dict:
    d: dict = {
        "name": m.name,
        "returnType": m.return_type,
        "parameters": [{"name": p.name, "type": p.type} for p in m.parameters],
        "annotations": list(m.annotations),
        "visibility": m.visibility,
        "isStatic": m.is_static,
        "calls": list(m.calls),
    }
    if m.endpoint is not None:
        d["endpoint"] = _endpoint_to_dict(m.endpoint)
    return d


def _field_to_dict(f: FieldRecord) -> dict:
    return {
        "name": f.name,
        "type": f.type,
        "visibility": f.visibility,
        "isStatic": f.is_static,
        "annotations": list(f.annotations),
    }


def _class_to_dict(cls: ClassRecord) -> dict:
    d: dict = {
        "name": cls.name,
        "filePath": cls.file_path,
        "package": cls.package,
        "imports": list(cls.imports),
        "methods": [_method_to_dict(m) for m in cls.methods],
        "fields": [_field_to_dict(f) for f in cls.fields],
        "annotations": list(cls.annotations),
        "implements": list(cls.implements),
        "dependencies": list(cls.dependencies),
        "isController": cls.is_controller,
        "endpoints": [_endpoint_to_dict(ep) for ep in cls.endpoints],
        "recognizedAnnotations": [
            {"name": a.name, "parameters": dict(a.parameters)} for a in cls.recognized_annotations
        ],
        "architecturalPatterns": [
            {"type": p.type.value, "description": p.description, "layer": p.layer.value}
            for p in cls.architectural_patterns
        ],
        "injectedDependencies": [
            {
                "fieldName": i.field_name,
                "type": i.type,
                "mechanism": i.mechanism,
                "annotation": i.annotation,
            }
            for i in cls.injected_dependencies
        ],
    }
    if cls.extends is not None:
        d["extends"] = cls.extends
    return d


def _edge_to_dict(edge: RelationshipEdge) -> dict:
    d: dict = {"from": edge.source, "to": edge.target, "kind": edge.kind.value}
    if edge.via is not None:
        d["via"] = edge.via
    return d


def structure_to_dict(structure: ProjectStructure) -> dict[str, Any]:
    """Plain-data form of *structure* using the camelCase field names."""
    return {
        "classes": [_class_to_dict(c) for c in structure.classes],
        "relationships": [_edge_to_dict(e) for e in structure.relationships],
    }


def _endpoint_from_dict(d: dict) -> EndpointRecord:
    return EndpointRecord(
        http_method=d["httpMethod"],
        path=d["path"],
        produces=d.get("produces"),
        consumes=d.get("consumes"),
        description=d.get("description"),
    )


def _method_from_dict(d: dict) -> MethodRecord:
    endpoint = d.get("endpoint")
    return MethodRecord(
        name=d["name"],
        return_type=d.get("returnType", ""),
        parameters=tuple(Parameter(name=p["name"], type=p["type"]) for p in d.get("parameters", [])),
        annotations=tuple(d.get("annotations", [])),
        visibility=d.get("visibility", "package"),
        is_static=bool(d.get("isStatic", False)),
        calls=tuple(d.get("calls", [])),
        endpoint=_endpoint_from_dict(endpoint) if endpoint else None,
    )


def _class_from_dict(d: dict) -> ClassRecord:
    return ClassRecord(
        name=d["name"],
        file_path=d.get("filePath", ""),
        package=d.get("package", ""),
        imports=tuple(d.get("imports", [])),
        methods=tuple(_method_from_dict(m) for m in d.get("methods", [])),
        fields=tuple(
            FieldRecord(
                name=f["name"],
                type=f["type"],
                visibility=f.get("visibility", "package"),
                is_static=bool(f.get("isStatic", False)),
                annotations=tuple(f.get("annotations", [])),
            )
            for f in d.get("fields", [])
        ),
        annotations=tuple(d.get("annotations", [])),
        extends=d.get("extends"),
        implements=tuple(d.get("implements", [])),
        dependencies=tuple(d.get("dependencies", [])),
        is_controller=bool(d.get("isController", False)),
        endpoints=tuple(_endpoint_from_dict(ep) for ep in d.get("endpoints", [])),
        recognized_annotations=tuple(
            RecognizedAnnotation(name=a["name"], parameters=tuple(a.get("parameters", {}).items()))
            for a in d.get("recognizedAnnotations", [])
        ),
        architectural_patterns=tuple(
            ArchitecturalPattern(
                type=PatternType(p["type"]),
                description=p.get("description", ""),
                layer=LayerType(p["layer"]),
            )
            for p in d.get("architecturalPatterns", [])
        ),
        injected_dependencies=tuple(
            InjectedDependency(
                field_name=i["fieldName"],
                type=i["type"],
                mechanism=i.get("mechanism", "field"),
                annotation=i.get("annotation", ""),
            )
            for i in d.get("injectedDependencies", [])
        ),
    )


def structure_from_dict(data: dict[str, Any]) -> ProjectStructure:
    """Rebuild a ProjectStructure from :func:`structure_to_dict` output."""
    return ProjectStructure(
        classes=tuple(_class_from_dict(c) for c in data.get("classes", [])),
        relationships=tuple(
            RelationshipEdge(
                source=e["from"],
                target=e["to"],
                kind=RelationKind(e["kind"]),
                via=e.get("via"),
            )
            for e in data.get("relationships", [])
        ),
    )


def render_json(structure: ProjectStructure, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(structure_to_dict(structure), indent=2), encoding="utf-8")


def render_yaml(structure: ProjectStructure, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(structure_to_dict(structure), f, sort_keys=False, allow_unicode=True)


def load_structure(path: Path) -> ProjectStructure:
    """Read a structure written by :func:`render_json` or :func:`render_yaml`."""
    with open(path, encoding="utf-8") as f:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)
    return structure_from_dict(data or {})
