from .compare import local_repo_names, missing_repos, teamless_repos
from .updater import UpdateOutcome, update_all, update_repository

__all__ = [
    "UpdateOutcome",
    "local_repo_names",
    "missing_repos",
    "teamless_repos",
    "update_all",
    "update_repository",
]
