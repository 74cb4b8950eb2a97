"""Extractor protocol shared by all per-file extractors."""

from __future__ import annotations

from typing import Protocol

from springmap.model import ClassRecord


class Extractor(Protocol):
    """Protocol for per-file class structure extractors."""

    def can_handle(self, path: str) -> bool:
        """Return True if this extractor applies to the given source path."""
        ...

    def extract(self, path: str, text: str) -> ClassRecord | None:
        """Return the class record for *text*, or None if it declares no class."""
        ...
