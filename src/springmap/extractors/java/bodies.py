"""Locate method bodies by brace depth and collect the calls they make."""

from __future__ import annotations

import re

_CALL_RE = re.compile(r"(?<![\w$])([A-Za-z_$][\w$]*)\s*\(")

# Control-flow keywords that look like calls: "if (", "while (".
_NOT_CALLS = frozenset({"if", "for", "while", "switch"})


def find_block_end(masked: str, open_idx: int) -> int:
    """Return the offset of the ``}`` balancing the ``{`` at *open_idx*.

    Without a balancing brace the block runs to the end of the text.
    """
    depth = 0
    for i in range(open_idx, len(masked)):
        c = masked[i]
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                return i
    return len(masked)


def extract_calls(body: str) -> list[str]:
    """Return call-like identifiers in *body*, first-seen order, no repeats."""
    calls: dict[str, None] = {}
    for m in _CALL_RE.finditer(body):
        name = m.group(1)
        if name not in _NOT_CALLS:
            calls.setdefault(name)
    return list(calls)


def method_calls(masked: str, open_idx: int) -> list[str]:
    end = find_block_end(masked, open_idx)
    return extract_calls(masked[open_idx + 1 : end])
