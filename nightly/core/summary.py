"""End-of-run summary."""

from __future__ import annotations

from .project import RunResult


def report(result: RunResult) -> int:
    """Print the failure lists (or a success line) and return the exit status.

    The status is always 0; failures are only reported in the printed summary.
    """
    print()
    if result.failed_updates:
        print(f"Failed updates: {' '.join(result.failed_updates)}")
    if result.failed_builds:
        print(f"Failed builds: {' '.join(result.failed_builds)}")
    if result.ok:
        print("Everything built OK")
    return 0
