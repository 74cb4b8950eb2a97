"""Heuristic (regex and brace-depth) extraction of Java class structure."""

from __future__ import annotations

from springmap.extractors.java.assembler import SKIP_FILES, JavaClassExtractor
from springmap.extractors.java.spring import combine_path

__all__ = [
    "SKIP_FILES",
    "JavaClassExtractor",
    "combine_path",
]
