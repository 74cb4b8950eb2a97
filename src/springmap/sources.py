"""Locate and read Java sources for a scan."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from springmap.config import DEFAULT_MAX_FILE_BYTES

logger = logging.getLogger(__name__)

_SKIP_DIRS = {
    ".git",
    ".github",
    ".gradle",
    ".idea",
    ".mvn",
    ".vscode",
    "__pycache__",
    "build",
    "node_modules",
    "out",
    "target",
}


def sanitize_path(path: str) -> str:
    """Undo the ``.git`` suffix some file watchers append to ``.java`` paths."""
    if path.endswith(".java.git"):
        return path[: -len(".git")]
    return path


def iter_java_files(root: Path, exclude: Iterable[str] = ()) -> Iterator[Path]:
    """Yield ``*.java`` files under *root* in a stable order."""
    skip = _SKIP_DIRS | set(exclude)
    for dirpath, dirnames, filenames in os.walk(root):
        # Prune ignored dirs in-place
        dirnames[:] = sorted(d for d in dirnames if d not in skip)
        for name in sorted(filenames):
            if name.endswith(".java"):
                yield Path(dirpath) / name


def read_source(path: str | Path, max_bytes: int = DEFAULT_MAX_FILE_BYTES) -> str | None:
    """Return the UTF-8 text of *path*, or None if it cannot be used."""
    path = Path(sanitize_path(str(path)))
    try:
        size = path.stat().st_size
        if size > max_bytes:
            logger.warning("Skipping %s: %d bytes exceeds limit of %d", path, size, max_bytes)
            return None
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning("Could not read %s: %s", path, e)
        return None
