"""Infer the set of names a class depends on.

Anything the class mentions counts: field, parameter and return types,
single-type imports and DI annotations.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from springmap.extractors.java.lexical import simplify_type
from springmap.extractors.java.members import MethodSignature
from springmap.model import FieldRecord

# Annotations whose mere presence is recorded as a dependency.
DI_ANNOTATIONS = (
    "Autowired",
    "Inject",
    "Resource",
    "Service",
    "Repository",
    "Component",
    "Controller",
    "RestController",
)

PRIMITIVE_TYPES = frozenset(
    {
        "boolean",
        "byte",
        "char",
        "short",
        "int",
        "long",
        "float",
        "double",
        "void",
        "var",
        "Boolean",
        "Byte",
        "Character",
        "Short",
        "Integer",
        "Long",
        "Float",
        "Double",
        "Void",
        "String",
        "Object",
    }
)

_PRESENCE_RES = {name: re.compile(rf"@{name}\b") for name in DI_ANNOTATIONS}
_FIELD_INJECTION_RE = re.compile(
    r"@(?:Autowired|Inject|Resource)\b(?:\s*\([^)]*\))?\s*"
    r"(?:(?:private|public|protected|static|final|transient)\s+)*"
    r"([\w$.]+)"
)
_IDENT_RE = re.compile(r"[A-Za-z_$][\w$]*")


def dependency_name(type_str: str) -> str | None:
    """Bare type name for *type_str*, or None for primitives and non-types."""
    name = simplify_type(type_str)
    if not _IDENT_RE.fullmatch(name) or name in PRIMITIVE_TYPES:
        return None
    return name


def infer_dependencies(
    code: str,
    imports: Iterable[str],
    fields: Iterable[FieldRecord],
    methods: Iterable[MethodSignature],
) -> list[str]:
    """Merge the six dependency sources into one first-seen-ordered list."""
    deps: dict[str, None] = {}

    def add(name: str | None) -> None:
        if name:
            deps.setdefault(name)

    for name, pattern in _PRESENCE_RES.items():
        if pattern.search(code):
            add(name)

    for m in _FIELD_INJECTION_RE.finditer(code):
        add(dependency_name(m.group(1)))

    for fld in fields:
        add(dependency_name(fld.type))

    methods = list(methods)
    for method in methods:
        for param in method.parameters:
            add(dependency_name(param.type))

    for method in methods:
        add(dependency_name(method.return_type))

    for imp in imports:
        if imp.startswith("static ") or imp.endswith(".*"):
            continue
        add(imp.rsplit(".", 1)[-1])
        add(imp)

    return list(deps)
