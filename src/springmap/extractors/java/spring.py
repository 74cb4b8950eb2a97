"""Detect Spring stereotypes, architectural layers and HTTP endpoints."""

from __future__ import annotations

import re
from collections.abc import Iterable

from springmap.extractors.java.annotations import annotation_name, parse_annotation_parameters
from springmap.model import (
    ArchitecturalPattern,
    EndpointRecord,
    LayerType,
    PatternType,
    RecognizedAnnotation,
)

# Stereotype annotation -> (pattern, layer, description).
PATTERN_TABLE: dict[str, tuple[PatternType, LayerType, str]] = {
    "Controller": (
        PatternType.CONTROLLER,
        LayerType.PRESENTATION,
        "Spring MVC controller handling web requests",
    ),
    "RestController": (
        PatternType.REST_CONTROLLER,
        LayerType.PRESENTATION,
        "REST controller returning response bodies",
    ),
    "Service": (
        PatternType.SERVICE,
        LayerType.BUSINESS,
        "Service holding business logic",
    ),
    "Repository": (
        PatternType.REPOSITORY,
        LayerType.DATA,
        "Repository providing data access",
    ),
    "Configuration": (
        PatternType.CONFIGURATION,
        LayerType.CONFIGURATION,
        "Configuration class declaring beans",
    ),
    "Component": (
        PatternType.COMPONENT,
        LayerType.COMPONENT,
        "Generic Spring-managed component",
    ),
}

INJECTION_ANNOTATIONS = ("Autowired", "Inject", "Resource", "Qualifier", "Value")

# Mapping annotation -> HTTP verb (None: decided by the "method" argument).
MAPPING_ANNOTATIONS: dict[str, str | None] = {
    "RequestMapping": None,
    "GetMapping": "GET",
    "PostMapping": "POST",
    "PutMapping": "PUT",
    "DeleteMapping": "DELETE",
    "PatchMapping": "PATCH",
}

RECOGNIZED_ANNOTATIONS = frozenset(PATTERN_TABLE) | frozenset(INJECTION_ANNOTATIONS) | frozenset(MAPPING_ANNOTATIONS)

CONTROLLER_ANNOTATIONS = frozenset({"Controller", "RestController"})

_KEYED_PATH_RE = re.compile(r"""\b(?:value|path)\s*=\s*\{?\s*["']([^"']+)["']""")
_HTTP_METHOD_RE = re.compile(r"\bmethod\s*=\s*\{?\s*(?:RequestMethod\.)?(\w+)")
_PRODUCES_RE = re.compile(r"""\bproduces\s*=\s*\{?\s*(?:["']([^"']+)["']|([\w.]+))""")
_CONSUMES_RE = re.compile(r"""\bconsumes\s*=\s*\{?\s*(?:["']([^"']+)["']|([\w.]+))""")


def _bare_path_re(name: str) -> re.Pattern[str]:
    return re.compile(rf"""@(?:[\w.]+\.)?{name}\s*\(\s*\{{?\s*["']([^"']+)["']""")


_BARE_PATH_RES = {name: _bare_path_re(name) for name in MAPPING_ANNOTATIONS}


def recognize_annotations(annotations: Iterable[str]) -> list[RecognizedAnnotation]:
    """Keep the annotations from the known vocabulary, with parsed parameters."""
    recognized: list[RecognizedAnnotation] = []
    for ann in annotations:
        name = annotation_name(ann)
        if name in RECOGNIZED_ANNOTATIONS:
            recognized.append(
                RecognizedAnnotation(
                    name=f"@{name}",
                    parameters=tuple(parse_annotation_parameters(ann).items()),
                )
            )
    return recognized


def detect_patterns(recognized: Iterable[RecognizedAnnotation]) -> list[ArchitecturalPattern]:
    patterns: list[ArchitecturalPattern] = []
    for ann in recognized:
        entry = PATTERN_TABLE.get(ann.name.lstrip("@"))
        if entry is None:
            continue
        ptype, layer, description = entry
        patterns.append(ArchitecturalPattern(type=ptype, description=description, layer=layer))
    return patterns


def is_request_handler(annotations: Iterable[str]) -> bool:
    return any(annotation_name(ann) in CONTROLLER_ANNOTATIONS for ann in annotations)


def _extract_path(annotation: str, name: str) -> str | None:
    m = _KEYED_PATH_RE.search(annotation) or _BARE_PATH_RES[name].search(annotation)
    return m.group(1) if m else None


def extract_base_path(class_annotations: Iterable[str]) -> str | None:
    """Class-level ``@RequestMapping`` path, if one is declared."""
    for ann in class_annotations:
        if annotation_name(ann) == "RequestMapping":
            return _extract_path(ann, "RequestMapping")
    return None


def _content_type(pattern: re.Pattern[str], annotation: str) -> str | None:
    m = pattern.search(annotation)
    if m is None:
        return None
    return m.group(1) or m.group(2)


def extract_method_mapping(annotations: Iterable[str], method_name: str) -> EndpointRecord | None:
    """Endpoint declared by the first mapping annotation, path not yet combined.

    The path defaults to ``/<method_name>`` when the annotation names none.
    """
    for ann in annotations:
        name = annotation_name(ann)
        if name not in MAPPING_ANNOTATIONS:
            continue
        verb = MAPPING_ANNOTATIONS[name]
        if verb is None:
            m = _HTTP_METHOD_RE.search(ann)
            verb = m.group(1).upper() if m else "GET"
        path = _extract_path(ann, name)
        return EndpointRecord(
            http_method=verb,
            path=f"/{method_name}" if path is None else path,
            produces=_content_type(_PRODUCES_RE, ann),
            consumes=_content_type(_CONSUMES_RE, ann),
        )
    return None


def combine_path(base: str | None, method: str | None) -> str:
    """Join a class base path and a method path with exactly one ``/``.

    >>> combine_path("/api/", "/x")
    '/api/x'
    >>> combine_path(None, None)
    '/'
    """
    if not base and not method:
        return "/"
    if not base:
        return method  # type: ignore[return-value]
    if not method:
        return base
    clean_base = base[:-1] if base.endswith("/") else base
    clean_method = method[1:] if method.startswith("/") else method
    return f"{clean_base}/{clean_method}"
