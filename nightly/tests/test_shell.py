"""Tests for the command runner against real child processes."""

from __future__ import annotations

import os
import sys
from pathlib import Path

from nightly.core import CommandRunner
from nightly.core.shell import COMMAND_NOT_EXECUTABLE, COMMAND_NOT_FOUND


def _python(code: str) -> list[str]:
    return [sys.executable, "-c", code]


def _touch(name: str) -> list[str]:
    return _python(f"open({name!r}, 'w').close()")


def test_run_returns_exit_status(tmp_path: Path) -> None:
    runner = CommandRunner()

    assert runner.run(_python("raise SystemExit(0)"), tmp_path) == 0
    assert runner.run(_python("raise SystemExit(3)"), tmp_path) == 3


def test_run_uses_the_given_directory(tmp_path: Path) -> None:
    CommandRunner().run(_touch("here"), tmp_path)

    assert (tmp_path / "here").exists()


def test_missing_command_reports_not_found(tmp_path: Path) -> None:
    status = CommandRunner().run(["nightly-build-no-such-command"], tmp_path)

    assert status == COMMAND_NOT_FOUND


def test_sequence_keeps_going_and_returns_last_status(tmp_path: Path) -> None:
    status = CommandRunner().run_sequence(
        [_python("raise SystemExit(1)"), _touch("second")], tmp_path
    )

    assert status == 0
    assert (tmp_path / "second").exists()


def test_conjunction_stops_at_first_failure(tmp_path: Path) -> None:
    status = CommandRunner().run_conjunction(
        [_touch("first"), _python("raise SystemExit(4)"), _touch("third")], tmp_path
    )

    assert status == 4
    assert (tmp_path / "first").exists()
    assert not (tmp_path / "third").exists()


def test_empty_conjunction_succeeds(tmp_path: Path) -> None:
    assert CommandRunner().run_conjunction([], tmp_path) == 0


def test_unrunnable_executable_reports_not_executable(
    tmp_path: Path, monkeypatch
) -> None:
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    tool = bin_dir / "nightly-build-garbage-tool"
    tool.write_bytes(b"\x00\x01\x02 not a program\n")
    tool.chmod(0o755)
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")

    status = CommandRunner().run(["nightly-build-garbage-tool", "all"], tmp_path)

    assert status == COMMAND_NOT_EXECUTABLE
