"""Project and run-result data structures for the nightly build."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class VcsKind(Enum):
    """Supported version-control systems, keyed by their marker directory."""

    SUBVERSION = ".svn"
    MERCURIAL = ".hg"
    BAZAAR = ".bzr"
    GIT = ".git"

    @property
    def marker(self) -> str:
        return self.value


@dataclass(frozen=True)
class Project:
    """A checkout discovered under the projects root.

    Two projects are the same project when they live in the same directory,
    whichever marker led to them.
    """

    directory: Path
    vcs: VcsKind = field(compare=False)

    @property
    def name(self) -> str:
        return self.directory.name


def _default_names() -> list[str]:
    return []


@dataclass
class RunResult:
    """Names of projects whose update or build failed, in processing order."""

    failed_updates: list[str] = field(default_factory=_default_names)
    failed_builds: list[str] = field(default_factory=_default_names)

    @property
    def ok(self) -> bool:
        return not self.failed_updates and not self.failed_builds
