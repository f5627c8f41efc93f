"""Shared fixtures for the nightly build tests."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pytest

from nightly.core import CommandRunner


class RecordingRunner(CommandRunner):
    """Command runner that records invocations instead of spawning processes.

    ``statuses`` maps ``(directory name, "cmd args")`` or just ``"cmd args"``
    to the exit status to report; anything unlisted succeeds.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, Path]] = []
        self.statuses: dict[object, int] = {}

    def fail(self, command: str, status: int = 1, *, project: str | None = None) -> None:
        key: object = (project, command) if project else command
        self.statuses[key] = status

    def run(self, cmd: Sequence[str], cwd: Path) -> int:
        command = " ".join(cmd)
        self.calls.append((command, cwd))
        if (cwd.name, command) in self.statuses:
            return self.statuses[(cwd.name, command)]
        return self.statuses.get(command, 0)

    def commands_in(self, directory: Path) -> list[str]:
        return [command for command, cwd in self.calls if cwd == directory]


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "NIGHTLY_BUILD_CONFIG",
        "OTEL_EXPORTER_OTLP_ENDPOINT",
        "OTEL_SERVICE_NAME",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("NIGHTLY_DISABLE_TRACING", "1")


@pytest.fixture
def make_project(tmp_path: Path):
    """Create ``tmp_path/<name>`` with a marker directory and optional Makefile."""

    def _make(name: str, marker: str = ".git", *, makefile: bool = False) -> Path:
        directory = tmp_path / name
        (directory / marker).mkdir(parents=True, exist_ok=True)
        if makefile:
            (directory / "Makefile").write_text("all:\n\ttrue\n", encoding="utf-8")
        return directory

    return _make
