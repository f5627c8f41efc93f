"""Version-control adapters: show local changes, then bring a checkout up to date."""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar, Sequence

from .project import VcsKind
from .shell import CommandRunner

Command = Sequence[str]


class VersionControlAdapter:
    """Base adapter.

    ``update`` first runs the inspection commands (their statuses are ignored,
    as with ``status ; diff ; ...`` in a shell) and then the update chain as a
    conjunction. Only the update chain's status is returned.
    """

    kind: ClassVar[VcsKind]
    inspect_commands: ClassVar[tuple[Command, ...]] = ()
    update_commands: ClassVar[tuple[Command, ...]] = ()

    def update(self, directory: Path, runner: CommandRunner) -> int:
        runner.run_sequence(self.inspect_commands, directory)
        return runner.run_conjunction(self.update_commands, directory)

    def describe(self) -> str:
        """Render the command chain the way it would be typed into a shell."""
        inspect = [" ".join(cmd) for cmd in self.inspect_commands]
        chain = " && ".join(" ".join(cmd) for cmd in self.update_commands)
        return " ; ".join([*inspect, chain])


class SubversionAdapter(VersionControlAdapter):
    kind = VcsKind.SUBVERSION
    inspect_commands = (("svn", "status"), ("svn", "diff"))
    update_commands = (("svn", "update"),)


class MercurialAdapter(VersionControlAdapter):
    kind = VcsKind.MERCURIAL
    inspect_commands = (("hg", "status"), ("hg", "diff"))
    # The working copy is only updated once the pull has succeeded.
    update_commands = (("hg", "pull"), ("hg", "update"))


class BazaarAdapter(VersionControlAdapter):
    kind = VcsKind.BAZAAR
    inspect_commands = (("bzr", "status"), ("bzr", "diff"))
    update_commands = (("bzr", "update"),)


class GitAdapter(VersionControlAdapter):
    kind = VcsKind.GIT
    inspect_commands = (("git", "status"), ("git", "diff"))
    update_commands = (("git", "pull"),)


ADAPTERS: dict[VcsKind, VersionControlAdapter] = {
    adapter.kind: adapter
    for adapter in (
        SubversionAdapter(),
        MercurialAdapter(),
        BazaarAdapter(),
        GitAdapter(),
    )
}


def adapter_for(kind: VcsKind) -> VersionControlAdapter:
    return ADAPTERS[kind]
