from __future__ import annotations

"""
Configuration defaults shared by the repotools commands.

A YAML file may provide defaults for every command; values given on the
command line always win. Sections map onto frozen dataclasses, and unknown
keys are rejected so typos surface early.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml

from .github.client import DEFAULT_REPO_LIMIT

CONFIG_ENV = "REPOTOOLS_CONFIG"
DEFAULT_CONFIG_NAME = "repotools.yaml"


def _optional_path(value: Any) -> Optional[Path]:
    if value in ("", None):
        return None
    return Path(str(value)).expanduser()


def _require_keys(source: Dict[str, Any], allowed: Iterable[str], section: str) -> None:
    unknown = set(source) - set(allowed)
    if unknown:
        raise ValueError(f"Unknown keys in {section}: {sorted(unknown)}")


def _section(payload: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = payload.get(name) or {}
    if not isinstance(value, dict):
        raise ValueError(f"Configuration section '{name}' must be a mapping")
    return value


@dataclass(frozen=True)
class GitHubConfig:
    org: Optional[str] = None
    team: Optional[str] = None
    root: Optional[Path] = None
    limit: int = DEFAULT_REPO_LIMIT

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "GitHubConfig":
        _require_keys(payload, ("org", "team", "root", "limit"), "github")
        limit = int(payload.get("limit", DEFAULT_REPO_LIMIT))
        if limit <= 0:
            raise ValueError("github.limit must be a positive integer")
        org = payload.get("org")
        team = payload.get("team")
        return cls(
            org=str(org) if org else None,
            team=str(team) if team else None,
            root=_optional_path(payload.get("root")),
            limit=limit,
        )


@dataclass(frozen=True)
class UpdateConfig:
    root: Optional[Path] = None
    main_branch: str = "main"
    remote: str = "origin"
    stay_on_main: bool = False

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "UpdateConfig":
        _require_keys(payload, ("root", "main_branch", "remote", "stay_on_main"), "update")
        main_branch = str(payload.get("main_branch") or "main")
        remote = str(payload.get("remote") or "origin")
        return cls(
            root=_optional_path(payload.get("root")),
            main_branch=main_branch,
            remote=remote,
            stay_on_main=bool(payload.get("stay_on_main", False)),
        )


@dataclass(frozen=True)
class EnvConfig:
    file: Path = Path(".env")
    patterns: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "EnvConfig":
        _require_keys(payload, ("file", "patterns"), "env")
        patterns = payload.get("patterns") or []
        if isinstance(patterns, str):
            patterns = [patterns]
        return cls(
            file=_optional_path(payload.get("file")) or Path(".env"),
            patterns=[str(p) for p in patterns],
        )


@dataclass(frozen=True)
class ScriptsConfig:
    path: Optional[Path] = None

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ScriptsConfig":
        _require_keys(payload, ("path",), "scripts")
        return cls(path=_optional_path(payload.get("path")))


@dataclass(frozen=True)
class ToolsConfig:
    github: GitHubConfig = field(default_factory=GitHubConfig)
    update: UpdateConfig = field(default_factory=UpdateConfig)
    env: EnvConfig = field(default_factory=EnvConfig)
    scripts: ScriptsConfig = field(default_factory=ScriptsConfig)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ToolsConfig":
        _require_keys(payload, ("github", "update", "env", "scripts"), "configuration root")
        return cls(
            github=GitHubConfig.from_dict(_section(payload, "github")),
            update=UpdateConfig.from_dict(_section(payload, "update")),
            env=EnvConfig.from_dict(_section(payload, "env")),
            scripts=ScriptsConfig.from_dict(_section(payload, "scripts")),
        )


def load_config(path: Path) -> ToolsConfig:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as fh:
        payload = yaml.safe_load(fh) or {}
    if not isinstance(payload, dict):
        raise ValueError("Configuration root must be a mapping/object")
    return ToolsConfig.from_dict(payload)


def resolve_config(explicit: Optional[str | Path] = None) -> ToolsConfig:
    """
    Locate and load the configuration.

    Order: explicit path, $REPOTOOLS_CONFIG, ./repotools.yaml, built-in
    defaults. An explicit or environment-provided path must exist.
    """
    candidate = explicit or os.getenv(CONFIG_ENV)
    if candidate:
        return load_config(Path(candidate).expanduser())
    default_path = Path(DEFAULT_CONFIG_NAME)
    if default_path.is_file():
        return load_config(default_path)
    return ToolsConfig()
