"""Orchestrator: discover → extract (in parallel) → relate → write."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from springmap.analysis import format_summary, summarize
from springmap.config import ScanConfig, load_config
from springmap.extractors.base import Extractor
from springmap.extractors.java import JavaClassExtractor
from springmap.model import ClassRecord, ProjectStructure
from springmap.relationships import build_project_structure
from springmap.renderer.structure import render_json, render_yaml
from springmap.sources import iter_java_files, read_source

logger = logging.getLogger(__name__)


class WorkspaceNotFoundError(FileNotFoundError):
    """The directory to scan does not exist."""


class ScanCancelled(RuntimeError):
    """A scan was stopped through its cancellation event."""


def _extract_one(
    extractor: Extractor,
    path: str,
    text: str,
    cancel: threading.Event | None,
) -> ClassRecord | None:
    if cancel is not None and cancel.is_set():
        return None
    try:
        return extractor.extract(path, text)
    except Exception:
        logger.warning("Could not extract %s", path, exc_info=True)
        return None


def scan_sources(
    sources: Iterable[tuple[str, str]],
    *,
    extractor: Extractor | None = None,
    workers: int = 1,
    cancel: threading.Event | None = None,
) -> ProjectStructure:
    """Build a ProjectStructure from ``(path, text)`` pairs.

    Files are extracted concurrently; the relationship pass starts only after
    every file has finished, and classes keep the order of *sources*.
    Setting *cancel* stops the remaining files and raises ScanCancelled.
    """
    extractor = extractor or JavaClassExtractor()
    sources = list(sources)
    records: list[ClassRecord | None] = [None] * len(sources)

    with ThreadPoolExecutor(max_workers=max(1, workers)) as executor:
        futures = {
            executor.submit(_extract_one, extractor, path, text, cancel): i
            for i, (path, text) in enumerate(sources)
        }
        for future in as_completed(futures):
            records[futures[future]] = future.result()

    if cancel is not None and cancel.is_set():
        raise ScanCancelled("scan cancelled")

    classes = [r for r in records if r is not None]
    logger.debug(
        "Extracted %d classes from %d files (%d without a class)",
        len(classes),
        len(sources),
        len(sources) - len(classes),
    )
    return build_project_structure(classes)


def scan_project(
    project_dir: Path,
    config: ScanConfig | None = None,
    *,
    cancel: threading.Event | None = None,
) -> ProjectStructure:
    """Scan every Java source under *project_dir*."""
    project_dir = project_dir.resolve()
    if not project_dir.is_dir():
        raise WorkspaceNotFoundError(f"Project directory not found: {project_dir}")

    config = config or load_config(project_dir)
    extractor = JavaClassExtractor()

    sources: list[tuple[str, str]] = []
    skipped = 0
    for java_file in iter_java_files(project_dir, config.exclude):
        path = str(java_file)
        if not extractor.can_handle(path):
            continue
        text = read_source(path, config.max_file_bytes)
        if text is None:
            skipped += 1
            continue
        sources.append((path, text))

    logger.debug("Found %d Java files under %s", len(sources) + skipped, project_dir)
    if skipped:
        logger.warning("Skipped %d unreadable file(s)", skipped)

    structure = scan_sources(sources, extractor=extractor, workers=config.workers, cancel=cancel)
    if not structure.classes:
        logger.warning("No classes found under %s", project_dir)
    return structure


def run(
    project_dir: Path,
    *,
    output: Path | None = None,
    fmt: str = "json",
    config: ScanConfig | None = None,
    summary: bool = False,
) -> Path:
    """Run the full springmap pipeline and return the output path."""
    structure = scan_project(project_dir, config)

    out_path = output or (project_dir / f"springmap.{fmt}")
    if fmt == "yaml":
        render_yaml(structure, out_path)
    else:
        render_json(structure, out_path)

    logger.info(
        "Generated %s (%d classes, %d relationships)",
        out_path,
        len(structure.classes),
        len(structure.relationships),
    )

    if summary:
        print(format_summary(summarize(structure)))

    return out_path
