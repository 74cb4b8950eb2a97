"""Lexical helpers shared by the Java heuristics.

The regex passes never see comments: :func:`mask_source` blanks them out
character for character, so every offset and line number in the masked text
matches the input text.  With ``literals=True`` the contents of string and
character literals are blanked as well, which keeps brace counting and call
scanning from tripping over ``"{"`` or ``"foo("`` inside strings.
"""

from __future__ import annotations

import re
from bisect import bisect_left

_BRACE_RE = re.compile(r"[{}]")
_GENERIC_ARGS_RE = re.compile(r"<[^<>]*>")

_OPENERS = {"<": ">", "(": ")", "[": "]", "{": "}"}
_CLOSERS = {v: k for k, v in _OPENERS.items()}


def _blank(chunk: str) -> str:
    return "".join("\n" if c == "\n" else " " for c in chunk)


def mask_source(text: str, *, literals: bool = False) -> str:
    """Return *text* with comments (and optionally literal contents) blanked."""
    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        c = text[i]
        nxt = text[i + 1] if i + 1 < n else ""

        if c == "/" and nxt == "/":
            end = text.find("\n", i)
            end = n if end == -1 else end
            out.append(_blank(text[i:end]))
            i = end
            continue

        if c == "/" and nxt == "*":
            end = text.find("*/", i + 2)
            end = n if end == -1 else end + 2
            out.append(_blank(text[i:end]))
            i = end
            continue

        if c == '"' and text.startswith('"""', i):
            end = text.find('"""', i + 3)
            end = n if end == -1 else end + 3
            chunk = text[i:end]
            if literals:
                if len(chunk) >= 6 and chunk.endswith('"""'):
                    chunk = chunk[:3] + _blank(chunk[3:-3]) + chunk[-3:]
                else:
                    chunk = chunk[:3] + _blank(chunk[3:])
            out.append(chunk)
            i = end
            continue

        if c in ('"', "'"):
            end = _literal_end(text, i, c)
            chunk = text[i:end]
            if literals and len(chunk) >= 2:
                closed = chunk.endswith(c)
                inner = chunk[1:-1] if closed else chunk[1:]
                chunk = c + _blank(inner) + (c if closed else "")
            out.append(chunk)
            i = end
            continue

        out.append(c)
        i += 1
    return "".join(out)


def _literal_end(text: str, start: int, quote: str) -> int:
    """Index just past the literal opened at *start* (stops at end of line)."""
    i = start + 1
    n = len(text)
    while i < n:
        c = text[i]
        if c == "\\":
            i += 2
            continue
        if c == quote:
            return i + 1
        if c == "\n":
            return i
        i += 1
    return n


class BraceDepth:
    """Answer "how many braces are open at this offset" for a masked text."""

    def __init__(self, masked: str) -> None:
        self._offsets: list[int] = []
        self._depths: list[int] = []
        depth = 0
        for m in _BRACE_RE.finditer(masked):
            depth += 1 if m.group() == "{" else -1
            self._offsets.append(m.start())
            self._depths.append(depth)

    def at(self, offset: int) -> int:
        i = bisect_left(self._offsets, offset)
        return self._depths[i - 1] if i else 0


def split_top_level(text: str, sep: str = ",") -> list[str]:
    """Split *text* on *sep* where it is not nested inside <>, (), [] or {}."""
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for c in text:
        if c in _OPENERS:
            depth += 1
        elif c in _CLOSERS and depth > 0:
            depth -= 1
        if c == sep and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(c)
    parts.append("".join(current))
    return [p.strip() for p in parts if p.strip()]


def compact_generics(text: str) -> str:
    """Remove whitespace inside type arguments (``Map <K, V> m`` -> ``Map<K,V> m``)."""
    out: list[str] = []
    depth = 0
    for c in text:
        if c == "<":
            while out and out[-1].isspace():
                out.pop()
            depth += 1
        elif c == ">" and depth > 0:
            depth -= 1
        elif depth > 0 and c.isspace():
            continue
        out.append(c)
    return "".join(out)


def simplify_type(type_str: str) -> str:
    """Simplify a Java type like 'java.util.List<String>[]' to 'List'."""
    result = type_str.strip()
    # Innermost type arguments first, so nested generics collapse fully.
    while True:
        stripped = _GENERIC_ARGS_RE.sub("", result)
        if stripped == result:
            break
        result = stripped
    result = result.replace("[]", "").replace("...", "").strip()
    if "." in result:
        result = result.rsplit(".", 1)[1]
    return result

