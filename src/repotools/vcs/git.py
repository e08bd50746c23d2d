from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..utils.shell import CommandResult, Runner, run_command


class GitClient:
    """Runs `git -C <path> ...` against individual working copies."""

    def __init__(self, runner: Optional[Runner] = None, executable: str = "git"):
        self._run: Runner = runner or run_command
        self.executable = executable

    def _git(self, path: Path, *args: str) -> CommandResult:
        return self._run([self.executable, "-C", str(path), *args])

    @staticmethod
    def is_working_copy(path: Path) -> bool:
        # .git is a directory for clones and a file for worktrees/submodules.
        return (path / ".git").exists()

    def current_branch(self, path: Path) -> CommandResult:
        return self._git(path, "rev-parse", "--abbrev-ref", "HEAD")

    def checkout(self, path: Path, branch: str) -> CommandResult:
        return self._git(path, "checkout", branch)

    def pull(self, path: Path, remote: str, branch: str) -> CommandResult:
        return self._git(path, "pull", remote, branch)

    def head_commit(self, path: Path) -> CommandResult:
        return self._git(path, "rev-parse", "HEAD")
