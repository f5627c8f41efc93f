"""nightly core package - discovery, update and build of project checkouts."""

from .config import Configuration, Settings, build_configuration, load_settings
from .errors import (
    DiscoveryError,
    NightlyBuildError,
    SettingsError,
    WorkingDirectoryError,
)
from .orchestrator import BuildOrchestrator, build_commands
from .project import Project, RunResult, VcsKind
from .registry import ProjectRegistry, discover
from .shell import CommandRunner
from .summary import report
from .vcs import VersionControlAdapter, adapter_for

__all__ = [
    "BuildOrchestrator",
    "CommandRunner",
    "Configuration",
    "DiscoveryError",
    "NightlyBuildError",
    "Project",
    "ProjectRegistry",
    "RunResult",
    "Settings",
    "SettingsError",
    "VcsKind",
    "VersionControlAdapter",
    "WorkingDirectoryError",
    "adapter_for",
    "build_commands",
    "build_configuration",
    "discover",
    "load_settings",
    "report",
]
