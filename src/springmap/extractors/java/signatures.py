"""Recognize package, import and class header declarations."""

from __future__ import annotations

import re
from dataclasses import dataclass

from springmap.extractors.java.lexical import BraceDepth, simplify_type, split_top_level

# Up to three levels of nested type arguments: Map<String, List<Map<K, V>>>.
# The character class excludes ";", "(", "{" and "=".
_TYPE_ARG_CHARS = r"[\w$.,\s?\[\]&]"
TYPE_ARGS = rf"<(?:{_TYPE_ARG_CHARS}|<(?:{_TYPE_ARG_CHARS}|<{_TYPE_ARG_CHARS}*>)*>)*>"

_PACKAGE_RE = re.compile(r"\bpackage\s+([\w.]+)\s*;")
_IMPORT_RE = re.compile(r"\bimport\s+(static\s+)?([\w.]+(?:\.\*)?)\s*;")
_CLASS_RE = re.compile(
    r"(?:\b(?:public|protected|private)\s+)?"
    r"(?:\b(?:abstract|final|static|strictfp|sealed|non-sealed)\s+)*"
    r"\bclass\s+(?P<name>\w+)"
    rf"(?:\s*{TYPE_ARGS})?"  # optional type parameters
    rf"(?:\s+extends\s+(?P<extends>[\w.]+)(?:\s*{TYPE_ARGS})?)?"
    r"(?:\s+implements\s+(?P<implements>[\w\s,.<>?]+))?"
)


@dataclass(frozen=True)
class ClassHeader:
    name: str
    extends: str | None
    implements: tuple[str, ...]
    start: int  # offset of the first modifier (or "class")
    end: int


def find_package(code: str) -> str:
    m = _PACKAGE_RE.search(code)
    return m.group(1) if m else ""


def find_imports(code: str) -> list[str]:
    """Return import targets verbatim, e.g. ``static org.junit.Assert.assertTrue``."""
    imports: list[str] = []
    for m in _IMPORT_RE.finditer(code):
        prefix = "static " if m.group(1) else ""
        imports.append(prefix + m.group(2))
    return imports


def find_class_header(masked: str) -> ClassHeader | None:
    """Return the first top-level class header in literal-masked source.

    Headers nested inside braces (an inner class of an interface or enum)
    are ignored; later top-level classes in the same file are never reached.
    """
    depth = BraceDepth(masked)
    for m in _CLASS_RE.finditer(masked):
        if depth.at(m.start()) != 0:
            continue
        extends = m.group("extends")
        implements: tuple[str, ...] = ()
        if m.group("implements"):
            names = (simplify_type(part).split() for part in split_top_level(m.group("implements")))
            implements = tuple(words[0] for words in names if words)
        return ClassHeader(
            name=m.group("name"),
            extends=simplify_type(extends) if extends else None,
            implements=implements,
            start=m.start(),
            end=m.end(),
        )
    return None
