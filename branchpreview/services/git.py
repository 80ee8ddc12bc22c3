"""Git operations for branch preview checkouts."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import shlex

from branchpreview.infrastructure.runner import CommandRunner


@dataclass
class GitWorkspace:
    """Git commands bound to one working directory."""

    path: Path
    runner: CommandRunner

    def run(self, *args: str) -> None:
        self.runner.run(shlex.join(["git", *args]), self.path)

    def is_repository(self) -> bool:
        return (self.path / ".git").exists()

    def init_tracking(self, branch: str, repo: str, commit: str) -> None:
        """Initialize an empty repository that tracks ``branch`` of ``repo``.

        An existing repository is left as is; ``refresh`` brings it up to date.
        """
        if self.is_repository():
            return
        self.run("init")
        self.run("remote", "add", "-t", branch, "-f", "origin", repo)
        self.run("checkout", commit)

    def refresh(self, commit: str) -> None:
        self.run("fetch", "--prune", "origin")
        self.run("checkout", commit)

    def clone(self, repo: str, target: str) -> None:
        self.run("clone", repo, target)
