from __future__ import annotations

import pytest

from repotools.github import GitHubClient, GitHubError
from repotools.repos.compare import local_repo_names, missing_repos, teamless_repos


def test_missing_is_remote_minus_local_sorted():
    assert missing_repos(["C", "B", "A"], ["B"]) == ["A", "C"]


def test_missing_sort_is_ordinal_and_case_sensitive():
    assert missing_repos(["beta", "Alpha", "alpha", "Beta"], []) == ["Alpha", "Beta", "alpha", "beta"]


def test_missing_keeps_remote_duplicates():
    assert missing_repos(["dup", "dup", "here"], ["here"]) == ["dup", "dup"]


def test_local_repo_names_lists_directories_only(tmp_path):
    (tmp_path / "one").mkdir()
    (tmp_path / "two").mkdir()
    (tmp_path / "notes.txt").write_text("x")
    assert sorted(local_repo_names(tmp_path)) == ["one", "two"]


def test_teamless_includes_only_empty_team_lists():
    team_map = {"svc-b": [], "svc-a": [], "owned": ["platform"]}
    assert teamless_repos(team_map) == ["svc-a", "svc-b"]


def test_list_org_repos_without_team(fake_runner):
    fake_runner.add(
        ["gh", "repo", "list", "acme", "--limit", "50", "--json", "name", "--jq", ".[].name"],
        stdout="api\nweb\n\n",
    )
    client = GitHubClient(runner=fake_runner)
    assert client.list_org_repos("acme", limit=50) == ["api", "web"]


def test_list_org_repos_scoped_to_team(fake_runner):
    fake_runner.add(
        ["gh", "api", "orgs/acme/teams/core/repos", "--paginate", "--jq", ".[].name"],
        stdout="api\n",
    )
    client = GitHubClient(runner=fake_runner)
    assert client.list_org_repos("acme", team="core") == ["api"]


def test_list_org_repos_failure_raises(fake_runner):
    fake_runner.add(
        ["gh", "repo", "list", "acme", "--limit", "1000", "--json", "name", "--jq", ".[].name"],
        returncode=1,
        stderr="HTTP 404: Not Found\n",
    )
    client = GitHubClient(runner=fake_runner)
    with pytest.raises(GitHubError, match="HTTP 404"):
        client.list_org_repos("acme")


def test_list_repo_teams(fake_runner):
    fake_runner.add(["gh", "api", "repos/acme/api/teams", "--paginate", "--jq", ".[].name"], stdout="core\nops\n")
    client = GitHubClient(runner=fake_runner)
    assert client.list_repo_teams("acme", "api") == ["core", "ops"]
    assert client.list_repo_teams("acme", "web") == []


def test_clone_repo_builds_destination(fake_runner, tmp_path):
    client = GitHubClient(runner=fake_runner)
    result = client.clone_repo("acme", "api", tmp_path / "api")
    assert result.ok
    assert fake_runner.calls == [("gh", "repo", "clone", "acme/api", str(tmp_path / "api"))]
