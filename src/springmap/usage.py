"""Find real call sites and usage patterns of a class across a scanned project.

Usages are found line by line with regexes over each class's source file, so
results are examples rather than a complete reference list.  Comments are
masked before matching; snippets and context come from the original lines.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from springmap.extractors.java.lexical import mask_source, split_top_level
from springmap.model import ClassRecord, ProjectStructure
from springmap.sources import read_source

logger = logging.getLogger(__name__)

CLASS_USAGE = "class_usage"
_CONTEXT_LINES = 2


@dataclass(frozen=True)
class UsageExample:
    source_file: str
    source_class: str
    method_name: str  # CLASS_USAGE for class usage patterns
    line_number: int  # 1-based
    code_snippet: str
    context: str
    parameters: tuple[str, ...] = ()


@dataclass(frozen=True)
class MethodUsageStats:
    usage_count: int
    common_parameters: tuple[str, ...]


def _other_classes(
    structure: ProjectStructure,
    class_name: str,
    sources: Mapping[str, str] | None,
) -> Iterator[tuple[ClassRecord, list[str], list[str]]]:
    """Yield (class, raw lines, comment-masked lines) for every class but *class_name*."""
    for cls in structure.classes:
        if cls.name == class_name:
            continue
        text = sources.get(cls.file_path) if sources is not None else read_source(cls.file_path)
        if text is None:
            logger.debug("No source text for %s", cls.file_path)
            continue
        yield cls, text.split("\n"), mask_source(text).split("\n")


def _context(lines: list[str], i: int) -> str:
    start = max(0, i - _CONTEXT_LINES)
    end = min(len(lines), i + _CONTEXT_LINES + 1)
    return "\n".join(("→ " if j == i else "  ") + lines[j].strip() for j in range(start, end))


def _looks_like_target_call(line: str, class_name: str, method_name: str) -> bool:
    lower = line.lower()
    if method_name.lower() not in lower:
        return False
    return class_name.lower() in lower or "this." in lower or "." in lower


def find_method_usages(
    structure: ProjectStructure,
    class_name: str,
    method_name: str,
    sources: Mapping[str, str] | None = None,
) -> list[UsageExample]:
    """Call sites of *method_name* outside *class_name*, most arguments first.

    Source text is taken from *sources* (keyed by ``file_path``) when given,
    otherwise read from disk.
    """
    call_re = re.compile(rf"\b(\w+\.)?{re.escape(method_name)}\s*\(([^)]*)\)")
    examples: list[UsageExample] = []
    for cls, lines, masked in _other_classes(structure, class_name, sources):
        for i, line in enumerate(masked):
            if not _looks_like_target_call(line, class_name, method_name):
                continue
            for m in call_re.finditer(line):
                examples.append(
                    UsageExample(
                        source_file=cls.file_path,
                        source_class=cls.name,
                        method_name=method_name,
                        line_number=i + 1,
                        code_snippet=lines[i].strip(),
                        context=_context(lines, i),
                        parameters=tuple(split_top_level(m.group(2))),
                    )
                )
    examples.sort(key=lambda e: len(e.parameters), reverse=True)
    logger.debug("Found %d usages of %s.%s", len(examples), class_name, method_name)
    return examples


def find_class_usage_patterns(
    structure: ProjectStructure,
    class_name: str,
    sources: Mapping[str, str] | None = None,
    limit: int = 5,
) -> list[UsageExample]:
    """How *class_name* is injected, declared or constructed elsewhere.

    Each matching line counts once.
    """
    name = re.escape(class_name)
    patterns = [
        re.compile(rf"@Autowired\s+private\s+{name}", re.IGNORECASE),
        re.compile(rf"private\s+{name}\s+\w+", re.IGNORECASE),
        re.compile(rf"new\s+{name}\s*\(", re.IGNORECASE),
        re.compile(rf"{name}\s+\w+\s*=", re.IGNORECASE),
    ]
    examples: list[UsageExample] = []
    for cls, lines, masked in _other_classes(structure, class_name, sources):
        for i, line in enumerate(masked):
            if any(p.search(line) for p in patterns):
                examples.append(
                    UsageExample(
                        source_file=cls.file_path,
                        source_class=cls.name,
                        method_name=CLASS_USAGE,
                        line_number=i + 1,
                        code_snippet=lines[i].strip(),
                        context=_context(lines, i),
                    )
                )
    return examples[:limit]


def method_usage_stats(
    structure: ProjectStructure,
    class_name: str,
    method_name: str,
    sources: Mapping[str, str] | None = None,
) -> MethodUsageStats:
    """Usage count and the three most frequent argument expressions."""
    examples = find_method_usages(structure, class_name, method_name, sources)
    counts: Counter[str] = Counter(p for e in examples for p in e.parameters)
    return MethodUsageStats(
        usage_count=len(examples),
        common_parameters=tuple(p for p, _ in counts.most_common(3)),
    )
