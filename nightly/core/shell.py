"""Command execution shared by the version-control adapters and the builder."""

from __future__ import annotations

import logging
import shutil
import subprocess  # nosec B404 - commands come from the fixed adapter/build tables
from pathlib import Path
from typing import Iterable, Sequence

logger = logging.getLogger("nightly.shell")

# Exit statuses a POSIX shell reports for missing or unrunnable commands.
COMMAND_NOT_EXECUTABLE = 126
COMMAND_NOT_FOUND = 127


def _resolve_command(cmd: Sequence[str]) -> list[str]:
    if not cmd:
        raise ValueError("Command must include at least one argument")
    executable = shutil.which(cmd[0])
    if executable:
        return [executable, *cmd[1:]]
    return list(cmd)


class CommandRunner:
    """Run commands synchronously in an explicit working directory.

    Output is inherited from the parent process so that status/diff/build
    chatter ends up in the nightly log alongside the progress lines.
    """

    def run(self, cmd: Sequence[str], cwd: Path) -> int:
        """Run one command and return its exit status."""
        resolved = _resolve_command(cmd)
        logger.debug("run: %s (cwd=%s)", " ".join(cmd), cwd)
        try:
            result = subprocess.run(  # nosec B603 - argv lists, no shell
                resolved,
                cwd=cwd,
                check=False,
            )
        except FileNotFoundError:
            logger.warning("%s: command not found (cwd=%s)", cmd[0], cwd)
            return COMMAND_NOT_FOUND
        except PermissionError:
            logger.warning("%s: permission denied (cwd=%s)", cmd[0], cwd)
            return COMMAND_NOT_EXECUTABLE
        except OSError as exc:
            logger.warning("%s: cannot execute: %s (cwd=%s)", cmd[0], exc, cwd)
            return COMMAND_NOT_EXECUTABLE
        return result.returncode

    def run_sequence(self, commands: Iterable[Sequence[str]], cwd: Path) -> int:
        """Run every command (``a ; b ; c``) and return the last status."""
        status = 0
        for cmd in commands:
            status = self.run(cmd, cwd)
        return status

    def run_conjunction(self, commands: Iterable[Sequence[str]], cwd: Path) -> int:
        """Run commands until one fails (``a && b && c``)."""
        for cmd in commands:
            status = self.run(cmd, cwd)
            if status != 0:
                return status
        return 0
