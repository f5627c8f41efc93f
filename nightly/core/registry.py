"""Discover version-controlled projects under a projects root."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import DiscoveryError
from .project import Project, VcsKind

logger = logging.getLogger("nightly.registry")

DEFAULT_PRIMARY_PROJECT = "salma-hayek"

# Precedence when one directory carries more than one marker.
MARKER_ORDER: tuple[VcsKind, ...] = (
    VcsKind.SUBVERSION,
    VcsKind.MERCURIAL,
    VcsKind.BAZAAR,
    VcsKind.GIT,
)


class ProjectRegistry:
    """Find checkouts in the projects root and in its immediate subdirectories."""

    def __init__(self, primary_project: str = DEFAULT_PRIMARY_PROJECT) -> None:
        self.primary_project = primary_project

    def discover(self, root: Path) -> list[Project]:
        found: list[Project] = []
        for candidate in self._candidate_directories(root):
            for kind in self._markers_in(candidate):
                found.append(Project(directory=candidate, vcs=kind))
        projects = self._deduplicate(found)
        logger.info("Discovered %d project(s) under %s", len(projects), root)
        return self._pin_primary(projects)

    def _candidate_directories(self, root: Path) -> list[Path]:
        root = Path(root).expanduser().absolute()
        if not root.is_dir():
            raise DiscoveryError(f"Projects root is not a directory: {root}")
        try:
            children = sorted(
                child
                for child in root.iterdir()
                if child.is_dir() and not child.name.startswith(".")
            )
        except OSError as exc:
            raise DiscoveryError(f"Unable to list projects root {root}: {exc}") from exc
        return [root, *children]

    def _markers_in(self, candidate: Path) -> list[VcsKind]:
        try:
            return [kind for kind in MARKER_ORDER if (candidate / kind.marker).exists()]
        except OSError as exc:
            logger.warning("Skipping %s: unable to look for markers: %s", candidate, exc)
            return []

    def _deduplicate(self, projects: list[Project]) -> list[Project]:
        unique: dict[Path, Project] = {}
        for project in projects:
            kept = unique.get(project.directory)
            if kept is None:
                unique[project.directory] = project
                continue
            logger.warning(
                "%s carries both %s and %s markers; treating it as %s",
                project.directory,
                kept.vcs.marker,
                project.vcs.marker,
                kept.vcs.name.lower(),
            )
        return list(unique.values())

    def _pin_primary(self, projects: list[Project]) -> list[Project]:
        primary = next(
            (p for p in projects if self.primary_project in p.directory.parts),
            None,
        )
        if primary is None:
            return projects
        ordered = [p for p in projects if p is not primary]
        ordered.insert(0, primary)
        return ordered


def discover(root: Path, primary_project: str = DEFAULT_PRIMARY_PROJECT) -> list[Project]:
    return ProjectRegistry(primary_project).discover(root)
