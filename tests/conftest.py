from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

import pytest

from repotools.utils.shell import CommandResult


class FakeRunner:
    """Stands in for run_command: canned results keyed by argument tuple."""

    def __init__(self, responses: Dict[Tuple[str, ...], CommandResult] | None = None):
        self.responses = dict(responses or {})
        self.calls: List[Tuple[str, ...]] = []

    def add(self, args: Sequence[str], returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        key = tuple(args)
        self.responses[key] = CommandResult(args=key, returncode=returncode, stdout=stdout, stderr=stderr)

    def __call__(self, args: Sequence[str]) -> CommandResult:
        key = tuple(args)
        self.calls.append(key)
        return self.responses.get(key, CommandResult(args=key, returncode=0))


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep a developer's own config and log settings out of the tests."""
    monkeypatch.delenv("REPOTOOLS_CONFIG", raising=False)
    monkeypatch.delenv("REPOTOOLS_LOG_LEVEL", raising=False)
    monkeypatch.delenv("REPOTOOLS_LOG_FILE", raising=False)
    monkeypatch.chdir(tmp_path)
