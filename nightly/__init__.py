"""nightly package root exposing the nightly build core."""

from .core import (  # isort: skip
    BuildOrchestrator,
    CommandRunner,
    Project,
    ProjectRegistry,
    RunResult,
    VcsKind,
    report,
)

__all__ = [
    "BuildOrchestrator",
    "CommandRunner",
    "Project",
    "ProjectRegistry",
    "RunResult",
    "VcsKind",
    "report",
]
