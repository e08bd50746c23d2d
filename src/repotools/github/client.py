from __future__ import annotations

"""
GitHub access through the `gh` command-line client.

Only argument strings are built here; authentication, paging and the wire
protocol are left to `gh` itself.
"""

from pathlib import Path
from typing import List, Optional

from ..utils.shell import CommandResult, Runner, run_command

DEFAULT_REPO_LIMIT = 1000


class GitHubError(RuntimeError):
    """Raised when `gh` fails to return required data."""


class GitHubClient:
    def __init__(self, runner: Optional[Runner] = None, executable: str = "gh"):
        self._run: Runner = runner or run_command
        self.executable = executable

    def _gh(self, *args: str) -> CommandResult:
        return self._run([self.executable, *args])

    def list_org_repos(
        self,
        org: str,
        team: Optional[str] = None,
        limit: int = DEFAULT_REPO_LIMIT,
    ) -> List[str]:
        """Return repository names visible to `org`, or to `team` within it when given."""
        if team:
            result = self._gh("api", f"orgs/{org}/teams/{team}/repos", "--paginate", "--jq", ".[].name")
            scope = f"team {org}/{team}"
        else:
            result = self._gh("repo", "list", org, "--limit", str(limit), "--json", "name", "--jq", ".[].name")
            scope = f"organization {org}"
        if not result.ok:
            raise GitHubError(f"Unable to list repositories for {scope}: {result.error_text()}")
        return result.lines()

    def list_repo_teams(self, org: str, repo: str) -> List[str]:
        result = self._gh("api", f"repos/{org}/{repo}/teams", "--paginate", "--jq", ".[].name")
        if not result.ok:
            raise GitHubError(f"Unable to list teams for {org}/{repo}: {result.error_text()}")
        return result.lines()

    def clone_repo(self, org: str, repo: str, destination: Path) -> CommandResult:
        return self._gh("repo", "clone", f"{org}/{repo}", str(destination))
