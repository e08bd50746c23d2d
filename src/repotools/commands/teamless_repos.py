"""List organization repositories that no team has access to.

Each repository's team list is queried separately; a repository whose query
fails is reported as a warning and left out of the result.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ..github import GitHubClient, GitHubError
from ..logging_config import get_logger
from ..report import export_report
from ..repos.compare import teamless_repos
from ..utils.shell import require_tool
from ._common import FATAL_ERRORS, add_common_arguments, fail, positive_int, prepare

logger = get_logger(__name__)

REPORT_COLUMNS = ["Repository", "Organization", "Status"]


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List organization repositories without any team.")
    parser.add_argument("--org", "-o", help="GitHub organization name.")
    parser.add_argument("--limit", type=positive_int, help="Maximum number of repositories to list.")
    parser.add_argument("--csv", help="Write the result to this CSV file.")
    add_common_arguments(parser)
    return parser.parse_args(argv)


def collect_team_map(client: GitHubClient, org: str, repos: Sequence[str]) -> Dict[str, List[str]]:
    team_map: Dict[str, List[str]] = {}
    for repo in repos:
        try:
            team_map[repo] = client.list_repo_teams(org, repo)
        except GitHubError as exc:
            logger.warning("%s", exc)
    return team_map


def find_teamless(client: GitHubClient, org: str, limit: Optional[int] = None) -> List[str]:
    kwargs = {"limit": limit} if limit else {}
    repos = client.list_org_repos(org, **kwargs)
    if not repos:
        raise GitHubError(f"No repositories returned for {org}")
    return teamless_repos(collect_team_map(client, org, repos))


def main(argv: Optional[Sequence[str]] = None, client: Optional[GitHubClient] = None) -> int:
    args = _parse_args(argv)
    try:
        config = prepare(args)
        org = args.org or config.github.org
        if not org:
            raise ValueError("An organization is required (--org or github.org in the config).")
        if client is None:
            require_tool("gh")
            client = GitHubClient()
        limit = args.limit if args.limit is not None else config.github.limit
        teamless = find_teamless(client, org, limit=limit)
    except FATAL_ERRORS as exc:
        return fail(logger, exc)

    for name in teamless:
        print(name)

    if args.csv:
        rows = [{"Repository": name, "Organization": org, "Status": "teamless"} for name in teamless]
        path = export_report(Path(args.csv), rows, REPORT_COLUMNS)
        logger.info("Report written to %s", path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
