"""Recognize field declarations and method signatures with two regex passes."""

from __future__ import annotations

import re
from dataclasses import dataclass

from springmap.extractors.java.annotations import AnnotationIndex
from springmap.extractors.java.lexical import BraceDepth, compact_generics, split_top_level
from springmap.extractors.java.signatures import TYPE_ARGS
from springmap.model import FieldRecord, Parameter

_MODIFIER_WORDS = (
    "public",
    "protected",
    "private",
    "static",
    "final",
    "abstract",
    "synchronized",
    "native",
    "transient",
    "volatile",
    "default",
    "strictfp",
)
_MODIFIERS = rf"(?P<mods>(?:\b(?:{'|'.join(_MODIFIER_WORDS)})\s+)*)"
_TYPE = rf"[\w$.]+(?:\s*{TYPE_ARGS})?(?:\s*\[\s*\])*"
_IDENT = r"[A-Za-z_$][\w$]*"

_METHOD_RE = re.compile(
    r"(?<![\w$.@])"
    + _MODIFIERS
    + rf"(?:{TYPE_ARGS}\s*)?"  # generic method type parameters
    + rf"(?P<type>{_TYPE})\s+"
    + rf"(?P<name>{_IDENT})\s*"
    + r"\((?P<params>(?:[^()]|\([^()]*\))*)\)"
    + r"\s*(?:throws\s+[\w$.,\s]+?)?\s*\{"
)
_FIELD_RE = re.compile(
    r"(?<![\w$.@])"
    + _MODIFIERS
    + rf"(?P<type>{_TYPE})\s+"
    + rf"(?P<name>{_IDENT})"
    + r"\s*(?:=\s*[^;]+)?;"
)

# Words that can never be a declared type or member name.
_KEYWORDS = frozenset(
    {
        "new",
        "return",
        "throw",
        "else",
        "case",
        "class",
        "interface",
        "enum",
        "extends",
        "implements",
        "package",
        "import",
        "assert",
        "yield",
        "goto",
        "instanceof",
        "if",
        "for",
        "while",
        "switch",
        "catch",
        "try",
        "do",
        "finally",
        "break",
        "continue",
        "this",
        "super",
        *_MODIFIER_WORDS,
    }
)


@dataclass(frozen=True)
class MethodSignature:
    name: str
    return_type: str
    parameters: tuple[Parameter, ...]
    visibility: str
    is_static: bool
    start: int
    body_open: int  # offset of the opening "{"


def _modifiers(mods: str) -> tuple[str, bool]:
    words = mods.split()
    visibility = "package"
    for vis in ("public", "protected", "private"):
        if vis in words:
            visibility = vis
            break
    return visibility, "static" in words


def parse_parameters(params: str) -> tuple[Parameter, ...]:
    """Tokenize a parameter list; the last two tokens are ``(type, name)``.

    A lone token is taken as the name and the type falls back to ``Object``.
    Annotated parameters and varargs get no special treatment.
    """
    if not params.strip():
        return ()
    result: list[Parameter] = []
    for param in split_top_level(compact_generics(params)):
        parts = param.split()
        if not parts:
            continue
        ptype = parts[-2] if len(parts) >= 2 else "Object"
        result.append(Parameter(name=parts[-1], type=ptype))
    return tuple(result)


def extract_method_signatures(masked: str, code: str) -> list[MethodSignature]:
    """Find every method declaration that has a body.

    *masked* is the literal-masked text used for matching; *code* is the
    comment-masked text parameters are read from.  Both share offsets.
    """
    methods: list[MethodSignature] = []
    for m in _METHOD_RE.finditer(masked):
        rtype = m.group("type")
        name = m.group("name")
        if rtype in _KEYWORDS or name in _KEYWORDS:
            continue
        visibility, is_static = _modifiers(m.group("mods"))
        methods.append(
            MethodSignature(
                name=name,
                return_type=compact_generics(rtype),
                parameters=parse_parameters(code[m.start("params") : m.end("params")]),
                visibility=visibility,
                is_static=is_static,
                start=m.start(),
                body_open=m.end() - 1,
            )
        )
    return methods


def extract_fields(
    masked: str,
    code: str,
    body_depth: int = 1,
    *,
    index: AnnotationIndex | None = None,
) -> list[FieldRecord]:
    """Find field declarations sitting directly in the class body."""
    depth = BraceDepth(masked)
    if index is None:
        index = AnnotationIndex(code)
    fields: list[FieldRecord] = []
    for m in _FIELD_RE.finditer(masked):
        ftype = m.group("type")
        name = m.group("name")
        if ftype in _KEYWORDS or name in _KEYWORDS:
            continue
        if depth.at(m.start()) != body_depth:
            continue
        visibility, is_static = _modifiers(m.group("mods"))
        fields.append(
            FieldRecord(
                name=name,
                type=compact_generics(ftype),
                visibility=visibility,
                is_static=is_static,
                annotations=tuple(index.at(m.start())),
            )
        )
    return fields
