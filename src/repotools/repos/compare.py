from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Mapping, Sequence


def local_repo_names(root: Path) -> List[str]:
    """Names of the immediate subdirectories of `root`."""
    return [entry.name for entry in root.iterdir() if entry.is_dir()]


def missing_repos(remote: Sequence[str], local: Iterable[str]) -> List[str]:
    """
    Remote names with no local counterpart, sorted ordinally.

    Duplicates in `remote` are kept: a name listed twice remotely and absent
    locally is reported twice.
    """
    local_set = set(local)
    return sorted(name for name in remote if name not in local_set)


def teamless_repos(team_map: Mapping[str, Sequence[str]]) -> List[str]:
    return sorted(repo for repo, teams in team_map.items() if not teams)
