#!/usr/bin/env python3
"""Update and build every version-controlled project under a projects root.

Typical usage (in the builder's crontab):

  nightly-build ~/Projects clean native-dist
  nightly-build ~/Projects
  nightly-build --no-update
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from nightly.core import (
    BuildOrchestrator,
    CommandRunner,
    NightlyBuildError,
    ProjectRegistry,
    build_configuration,
    load_settings,
    report,
)
from nightly.observability import initialize_tracing, shutdown_tracing

# The checkout holding this file sits inside the projects root.
DEFAULT_PROJECTS_ROOT = Path(__file__).resolve().parents[3]

LOG_LEVEL = os.environ.get("NIGHTLY_BUILD_LOG", "INFO").upper()
logger = logging.getLogger("nightly.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nightly-build",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--no-update",
        action="store_true",
        help="Skip the version-control update; only build.",
    )
    parser.add_argument(
        "projects_root",
        nargs="?",
        help=f"Absolute path to scan for projects (default: {DEFAULT_PROJECTS_ROOT}).",
    )
    parser.add_argument(
        "targets",
        nargs="*",
        help="Build targets to run in order (default: clean, then the default target).",
    )
    return parser


def parse_arguments(
    parser: argparse.ArgumentParser, argv: list[str]
) -> argparse.Namespace:
    """Parse options and the root; everything after the root is a build target.

    Targets such as ``-k`` belong to the build tool and are never parsed as
    options.
    """
    head = 1 if argv[:1] == ["--no-update"] else 0
    if len(argv) <= head + 1 or argv[head].startswith("-"):
        return parser.parse_args(argv)
    args = parser.parse_args(argv[: head + 1])
    args.targets = argv[head + 1 :]
    return args


def run_nightly(args: argparse.Namespace) -> int:
    settings = load_settings()
    config = build_configuration(
        projects_root=args.projects_root,
        no_update=args.no_update,
        targets=args.targets,
        settings=settings,
        fallback_root=DEFAULT_PROJECTS_ROOT,
    )
    logger.info(
        "projects root %s, update=%s, targets=%s",
        config.projects_root,
        config.should_update,
        list(config.targets),
    )

    projects = ProjectRegistry(settings.primary_project).discover(config.projects_root)
    if not projects and args.projects_root is None and settings.projects_root is None:
        logger.warning(
            "No projects under the default root %s; pass the projects root explicitly",
            config.projects_root,
        )
    orchestrator = BuildOrchestrator(
        CommandRunner(),
        build_tool=settings.build_tool,
        build_descriptor=settings.build_descriptor,
    )
    result = orchestrator.run(projects, config.should_update, config.targets)
    return report(result)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
    # Best-effort OTLP tracing so nightly runs show up in a shared collector.
    initialize_tracing("nightly-build")
    parser = build_parser()
    raw = list(sys.argv[1:] if argv is None else argv)
    args = parse_arguments(parser, raw)
    try:
        return run_nightly(args)
    except NightlyBuildError as exc:
        raise SystemExit(f"[nightly-build] {exc}") from exc
    finally:
        shutdown_tracing()


if __name__ == "__main__":
    sys.exit(main())
