from .client import DEFAULT_REPO_LIMIT, GitHubClient, GitHubError

__all__ = ["DEFAULT_REPO_LIMIT", "GitHubClient", "GitHubError"]
