"""Associate ``@Annotation`` lines with the declaration that follows them.

Association walks *backward* from a declaration, one line at a time, and
stops at the first line of real code.  Only comment-masked text should be
passed in, so comment lines arrive here already blank.
"""

from __future__ import annotations

import re
from bisect import bisect_right

from springmap.extractors.java.lexical import split_top_level

_ANN_START_RE = re.compile(r"@\s*([A-Za-z_$][\w$.]*)")
_KEY_VALUE_RE = re.compile(r"^([A-Za-z_$][\w$]*)\s*=\s*(.*)$", re.DOTALL)


def _matching_paren(text: str, open_idx: int) -> int:
    """Index just past the ``)`` closing *open_idx*, or len(text) if unbalanced."""
    depth = 0
    quote = ""
    i = open_idx
    while i < len(text):
        c = text[i]
        if quote:
            if c == "\\":
                i += 2
                continue
            if c == quote:
                quote = ""
        elif c in ('"', "'"):
            quote = c
        elif c == "(":
            depth += 1
        elif c == ")":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return len(text)


def _annotation_spans(text: str) -> list[tuple[int, int]]:
    spans: list[tuple[int, int]] = []
    pos = 0
    while True:
        m = _ANN_START_RE.search(text, pos)
        if m is None:
            break
        end = m.end()
        if m.group(1) == "interface":
            pos = end
            continue
        k = end
        while k < len(text) and text[k] in " \t\r\n":
            k += 1
        if k < len(text) and text[k] == "(":
            end = _matching_paren(text, k)
        spans.append((m.start(), end))
        pos = end
    return spans


def _normalize(annotation: str) -> str:
    return " ".join(annotation.split())


def iter_annotations(text: str) -> list[str]:
    """Return every annotation in *text*, arguments included, in source order."""
    return [_normalize(text[s:e]) for s, e in _annotation_spans(text)]


def _trailing_run(text: str) -> tuple[list[str], bool]:
    """Split *text* into its trailing run of annotations.

    Returns ``(annotations, blocked)`` where *blocked* is True when real code
    precedes the run.
    """
    remaining = text.rstrip()
    run: list[str] = []
    for start, end in reversed(_annotation_spans(remaining)):
        if end != len(remaining):
            break
        run.insert(0, _normalize(remaining[start:end]))
        remaining = remaining[:start].rstrip()
    return run, bool(remaining.strip())


def _paren_balance(line: str) -> int:
    """Count of ``(`` minus ``)`` outside string and character literals."""
    balance = 0
    quote = ""
    i = 0
    while i < len(line):
        c = line[i]
        if quote:
            if c == "\\":
                i += 2
                continue
            if c == quote:
                quote = ""
        elif c in ('"', "'"):
            quote = c
        elif c == "(":
            balance += 1
        elif c == ")":
            balance -= 1
        i += 1
    return balance


class AnnotationIndex:
    """Line table over one comment-masked file for repeated annotation lookups.

    The text is split into lines once; each lookup finds its line with a
    binary search over line start offsets and walks backward by index.
    """

    def __init__(self, code: str) -> None:
        self._code = code
        self._lines = code.split("\n")
        self._starts: list[int] = []
        pos = 0
        for line in self._lines:
            self._starts.append(pos)
            pos += len(line) + 1

    def at(self, offset: int) -> list[str]:
        """Collect the annotations attached to the declaration starting at *offset*.

        Annotations on the declaration's own line are taken from the run
        directly before *offset*.  Earlier lines are walked backward: blank
        lines are skipped, annotation-only lines are prepended, and any other
        line ends the walk.  A line with more ``)`` than ``(`` outside quotes
        is joined with the lines above it, so wrapped annotation arguments
        stay in one piece.
        """
        row = bisect_right(self._starts, offset) - 1
        same_line, blocked = _trailing_run(self._code[self._starts[row] : offset])
        if blocked:
            return same_line

        collected: list[str] = []
        i = row - 1
        while i >= 0:
            stripped = self._lines[i].strip()
            if not stripped:
                i -= 1
                continue

            parts = [stripped]
            balance = _paren_balance(stripped)
            j = i
            while balance < 0 and j > 0:
                above = self._lines[j - 1].strip()
                # Annotation arguments never end a statement.
                if above.endswith(";"):
                    break
                j -= 1
                parts.append(above)
                balance += _paren_balance(above)

            chunk = " ".join(reversed(parts))
            if not chunk.startswith("@"):
                break
            run, blocked = _trailing_run(chunk)
            if blocked or not run:
                break
            collected[:0] = run
            i = j - 1

        return collected + same_line


def associate_annotations(code: str, offset: int) -> list[str]:
    """One-off lookup; build an :class:`AnnotationIndex` for repeated use."""
    return AnnotationIndex(code).at(offset)


def annotation_name(annotation: str) -> str:
    """``@org.x.GetMapping("/a")`` -> ``GetMapping``."""
    m = _ANN_START_RE.match(annotation.strip())
    if m is None:
        return ""
    return m.group(1).rsplit(".", 1)[-1]


def annotation_arguments(annotation: str) -> str | None:
    """Return the raw text between the annotation's parentheses, if any."""
    start = annotation.find("(")
    if start == -1:
        return None
    end = _matching_paren(annotation, start)
    return annotation[start + 1 : end - 1] if annotation[end - 1 : end] == ")" else annotation[start + 1 :]


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def parse_annotation_parameters(annotation: str) -> dict[str, str]:
    """Parse ``key = value`` pairs; a bare argument is stored under ``value``."""
    args = annotation_arguments(annotation)
    if not args or not args.strip():
        return {}
    params: dict[str, str] = {}
    for part in split_top_level(args):
        m = _KEY_VALUE_RE.match(part)
        if m:
            params[m.group(1)] = _unquote(m.group(2))
        else:
            params.setdefault("value", _unquote(part))
    return params
