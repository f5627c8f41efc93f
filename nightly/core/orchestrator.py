"""Update and build each discovered project in turn."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence

from ..observability import record_exit_status, trace_phase
from .errors import WorkingDirectoryError
from .project import Project, RunResult
from .shell import CommandRunner
from .vcs import adapter_for

logger = logging.getLogger("nightly.orchestrator")

DEFAULT_BUILD_TOOL = "make"
DEFAULT_BUILD_DESCRIPTOR = "Makefile"
DEFAULT_TARGETS: tuple[str, ...] = ("clean", "")


def build_commands(build_tool: str, targets: Iterable[str]) -> list[list[str]]:
    """One build tool invocation per target; an empty target means the default."""
    return [[build_tool, target] if target else [build_tool] for target in targets]


class BuildOrchestrator:
    """Sequentially update and build projects, recording failures.

    A failed update or build never stops the run. A failed update does skip
    that project's build. Projects without a build descriptor are updated but
    not built.
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        *,
        build_tool: str = DEFAULT_BUILD_TOOL,
        build_descriptor: str = DEFAULT_BUILD_DESCRIPTOR,
    ) -> None:
        self.runner = runner or CommandRunner()
        self.build_tool = build_tool
        self.build_descriptor = build_descriptor

    def run(
        self,
        projects: Iterable[Project],
        should_update: bool,
        targets: Sequence[str],
    ) -> RunResult:
        result = RunResult()
        for project in projects:
            self._process(project, should_update, targets, result)
        return result

    def _process(
        self,
        project: Project,
        should_update: bool,
        targets: Sequence[str],
        result: RunResult,
    ) -> None:
        directory = self._working_directory(project)
        if should_update:
            print(f'-- Updating "{project.name}"', flush=True)
            adapter = adapter_for(project.vcs)
            logger.debug("%s: %s", project.name, adapter.describe())
            with trace_phase(project, "update") as span:
                status = adapter.update(directory, self.runner)
                record_exit_status(span, status)
            if status != 0:
                logger.info("%s: update exited with status %d", project.name, status)
                result.failed_updates.append(project.name)
                return
        if not (directory / self.build_descriptor).exists():
            logger.debug("%s: no %s, not building", project.name, self.build_descriptor)
            return
        print(f'-- Building "{project.name}"', flush=True)
        with trace_phase(project, "build") as span:
            status = self.runner.run_conjunction(
                build_commands(self.build_tool, targets), directory
            )
            record_exit_status(span, status)
        if status != 0:
            logger.info("%s: build exited with status %d", project.name, status)
            result.failed_builds.append(project.name)

    def _working_directory(self, project: Project) -> Path:
        directory = project.directory
        if not directory.is_dir():
            raise WorkingDirectoryError(
                f"Project directory for {project.name!r} is missing: {directory}"
            )
        return directory
