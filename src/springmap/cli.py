"""Command-line interface for springmap."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from springmap.config import load_config
from springmap.pipeline import WorkspaceNotFoundError, run

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="springmap",
        description="Structural map of a Java/Spring project: classes, endpoints and relationships.",
    )
    parser.add_argument(
        "project_dir",
        type=Path,
        help="Path to the Java project to scan",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output file path (default: PROJECT_DIR/springmap.json or .yaml)",
    )
    parser.add_argument(
        "--format",
        choices=("json", "yaml"),
        default="json",
        dest="fmt",
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of files extracted in parallel",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="DIR",
        help="Directory name to skip (repeatable)",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print a project summary after scanning",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) output",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    if args.verbose:
        logging.getLogger("springmap").setLevel(logging.DEBUG)

    config = None
    if args.project_dir.is_dir():
        config = load_config(args.project_dir).with_overrides(
            exclude=args.exclude,
            workers=args.workers,
        )

    try:
        run(
            args.project_dir,
            output=args.output,
            fmt=args.fmt,
            config=config,
            summary=args.summary,
        )
    except WorkspaceNotFoundError as e:
        logger.error("%s", e)
        sys.exit(1)
