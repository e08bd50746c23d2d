"""List organization repositories that have no local clone, optionally cloning them.

Compares the repositories visible to a GitHub organization (or one of its
teams) with the subdirectories of a local root and prints the remote-only
names in sorted order. With --clone each missing repository is cloned into
the root; a failed clone is reported and the remaining ones still run.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ..github import GitHubClient, GitHubError
from ..logging_config import get_logger
from ..report import export_report
from ..repos.compare import local_repo_names, missing_repos
from ..utils.shell import require_tool
from ._common import FATAL_ERRORS, add_common_arguments, fail, positive_int, prepare

logger = get_logger(__name__)

REPORT_COLUMNS = ["Repository", "Organization", "Team", "Status"]


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List organization repositories missing from a local root.")
    parser.add_argument("--org", "-o", help="GitHub organization name.")
    parser.add_argument("--root", "-r", help="Local directory holding the clones.")
    parser.add_argument("--team", "-t", help="Only consider repositories this team can access.")
    parser.add_argument("--clone", action="store_true", help="Clone every missing repository into the root.")
    parser.add_argument("--limit", type=positive_int, help="Maximum number of repositories to list.")
    parser.add_argument("--csv", help="Write the result to this CSV file.")
    add_common_arguments(parser)
    return parser.parse_args(argv)


def clone_missing(client: GitHubClient, org: str, root: Path, names: Sequence[str]) -> Dict[str, str]:
    """Clone each name independently; returns name -> status."""
    statuses: Dict[str, str] = {}
    for name in names:
        print(f"[Clone] {org}/{name} -> {root / name}")
        result = client.clone_repo(org, name, root / name)
        if result.ok:
            statuses[name] = "cloned"
        else:
            logger.warning("Failed to clone %s/%s: %s", org, name, result.error_text())
            statuses[name] = "clone failed"
    return statuses


def find_missing(
    client: GitHubClient,
    org: str,
    root: Path,
    team: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[str]:
    if not root.is_dir():
        raise NotADirectoryError(f"Local root not found: {root}")
    kwargs = {"limit": limit} if limit else {}
    remote = client.list_org_repos(org, team=team, **kwargs)
    if not remote:
        scope = f"{org}/{team}" if team else org
        raise GitHubError(f"No repositories returned for {scope}")
    return missing_repos(remote, local_repo_names(root))


def main(argv: Optional[Sequence[str]] = None, client: Optional[GitHubClient] = None) -> int:
    args = _parse_args(argv)
    try:
        config = prepare(args)
        org = args.org or config.github.org
        root_value = args.root or config.github.root
        if not org:
            raise ValueError("An organization is required (--org or github.org in the config).")
        if root_value is None:
            raise ValueError("A local root is required (--root or github.root in the config).")
        root = Path(root_value).expanduser()
        team = args.team or config.github.team
        if client is None:
            require_tool("gh")
            client = GitHubClient()
        limit = args.limit if args.limit is not None else config.github.limit
        missing = find_missing(client, org, root, team=team, limit=limit)
    except FATAL_ERRORS as exc:
        return fail(logger, exc)

    if not missing:
        logger.info("Every repository in %s is present under %s", org, root)
    for name in missing:
        print(name)

    statuses = {name: "missing" for name in missing}
    if args.clone and missing:
        statuses.update(clone_missing(client, org, root, missing))

    if args.csv:
        rows = [
            {"Repository": name, "Organization": org, "Team": team or "", "Status": statuses[name]}
            for name in missing
        ]
        path = export_report(Path(args.csv), rows, REPORT_COLUMNS)
        logger.info("Report written to %s", path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
