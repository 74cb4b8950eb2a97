"""Scan configuration read from .springmap.toml or pyproject.toml."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_MAX_FILE_BYTES = 2 * 1024 * 1024


def _default_workers() -> int:
    return min(32, (os.cpu_count() or 1) + 4)


@dataclass(frozen=True)
class ScanConfig:
    exclude: tuple[str, ...] = ()  # extra directory names to skip
    workers: int = field(default_factory=_default_workers)
    max_file_bytes: int = DEFAULT_MAX_FILE_BYTES

    def with_overrides(
        self,
        *,
        exclude: list[str] | None = None,
        workers: int | None = None,
    ) -> ScanConfig:
        """Return a copy with CLI-provided values taking precedence."""
        result = self
        if exclude:
            result = replace(result, exclude=tuple(dict.fromkeys((*result.exclude, *exclude))))
        if workers is not None:
            result = replace(result, workers=max(1, workers))
        return result


def _from_table(table: dict) -> ScanConfig:
    config = ScanConfig()
    exclude = table.get("exclude")
    if isinstance(exclude, list):
        config = replace(config, exclude=tuple(str(e) for e in exclude))
    workers = table.get("workers")
    if isinstance(workers, int) and workers > 0:
        config = replace(config, workers=workers)
    max_bytes = table.get("max_file_bytes")
    if isinstance(max_bytes, int) and max_bytes > 0:
        config = replace(config, max_file_bytes=max_bytes)
    return config


def load_config(project_dir: Path) -> ScanConfig:
    """Read scan settings for *project_dir*, falling back to defaults."""
    # Try .springmap.toml first
    springmap_toml = project_dir / ".springmap.toml"
    if springmap_toml.exists():
        try:
            with open(springmap_toml, "rb") as f:
                data = tomllib.load(f)
            return _from_table(data.get("springmap", {}))
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning("Could not parse %s: %s", springmap_toml, e)

    # Fall back to [tool.springmap] in pyproject.toml
    pyproject = project_dir / "pyproject.toml"
    if pyproject.exists():
        try:
            with open(pyproject, "rb") as f:
                data = tomllib.load(f)
            return _from_table(data.get("tool", {}).get("springmap", {}))
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning("Could not parse %s: %s", pyproject, e)

    return ScanConfig()
