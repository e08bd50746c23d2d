from __future__ import annotations

"""
.env file loading.

Reads KEY=VALUE pairs, ignoring blank lines and comments, optionally filtered by
glob-style selection patterns. Loaded variables go into a caller-supplied
mapping; `apply_to_environ` is the only place that touches os.environ.
"""

import fnmatch
import os
import re
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, MutableMapping, Optional, Sequence, Tuple

from ..logging_config import get_logger

ENV_SUFFIX = ".env"
SHELL_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*\Z")

logger = get_logger(__name__)


class ConfigNotFound(FileNotFoundError):
    """Raised when the requested .env file does not exist."""


class InvalidFileExtension(ValueError):
    """Raised when the requested file does not carry the .env extension."""


@dataclass(frozen=True)
class EnvEntry:
    key: str
    value: str
    line_number: int


@dataclass(frozen=True)
class InvalidLine:
    line_number: int
    text: str


@dataclass
class EnvLoadResult:
    variables: Dict[str, str] = field(default_factory=dict)
    listed: List[str] = field(default_factory=list)
    invalid: List[InvalidLine] = field(default_factory=list)
    patterns: List[str] = field(default_factory=list)
    unmatched: bool = False


def validate_env_path(path: Path | str) -> Path:
    env_path = Path(path)
    if not env_path.is_file():
        raise ConfigNotFound(f"Environment file not found: {env_path}")
    # Path(".env").suffix is empty, so compare on the name.
    if not env_path.name.endswith(ENV_SUFFIX):
        raise InvalidFileExtension(f"Expected a {ENV_SUFFIX} file, got: {env_path.name}")
    return env_path


def parse_env_lines(lines: Iterable[str]) -> Tuple[List[EnvEntry], List[InvalidLine]]:
    """Split raw lines into entries and malformed lines, keeping file order."""
    entries: List[EnvEntry] = []
    invalid: List[InvalidLine] = []
    for number, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.split("=", 1)
        if len(parts) != 2 or not parts[0].strip():
            invalid.append(InvalidLine(line_number=number, text=raw.rstrip("\r\n")))
            continue
        key, value = parts
        entries.append(EnvEntry(key=key.strip(), value=value.strip(), line_number=number))
    return entries, invalid


def strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def matches_any(key: str, patterns: Sequence[str]) -> bool:
    # fnmatch normalises case on Windows only, matching the host's path rules.
    return any(fnmatch.fnmatch(key, pattern) for pattern in patterns)


def load_env_file(
    path: Path | str,
    patterns: Optional[Sequence[str]] = None,
    list_only: bool = False,
    environ: Optional[MutableMapping[str, str]] = None,
) -> EnvLoadResult:
    """
    Load selected variables from a .env file.

    The file must exist and end in `.env`; otherwise ConfigNotFound or
    InvalidFileExtension is raised before anything is loaded. Malformed lines
    are logged and skipped. With `list_only` the matching keys are collected
    and `environ` is left untouched; otherwise values are unquoted and set in
    `environ` (a fresh dict when not given).
    """
    env_path = validate_env_path(path)
    target: MutableMapping[str, str] = {} if environ is None else environ
    selection = [p for p in (patterns or []) if p]

    result = EnvLoadResult(patterns=list(selection))
    text = env_path.read_text(encoding="utf-8-sig")
    entries, invalid = parse_env_lines(text.splitlines())
    result.invalid = invalid
    for bad in invalid:
        logger.warning("Invalid line %d in %s: %s", bad.line_number, env_path, bad.text)

    for entry in entries:
        if selection and not matches_any(entry.key, selection):
            continue
        result.listed.append(entry.key)
        if list_only:
            continue
        value = strip_quotes(entry.value)
        target[entry.key] = value
        result.variables[entry.key] = value

    if selection and not list_only and not result.variables:
        result.unmatched = True
        logger.warning("No variables matched the patterns: %s", ", ".join(selection))
    return result


def apply_to_environ(
    variables: Dict[str, str],
    environ: Optional[MutableMapping[str, str]] = None,
) -> Dict[str, str]:
    """Copy variables into the process environment; returns the ones that were set."""
    target = os.environ if environ is None else environ
    applied: Dict[str, str] = {}
    for key, value in variables.items():
        try:
            target[key] = value
        except ValueError as exc:
            # os.environ rejects embedded NUL bytes.
            logger.warning("Cannot set %r: %s", key, exc)
            continue
        applied[key] = value
    return applied


def format_exports(variables: Dict[str, str]) -> List[str]:
    """Render POSIX `export` statements suitable for `eval` in a parent shell.

    Keys that are not shell identifiers are skipped with a warning.
    """
    lines: List[str] = []
    for key, value in variables.items():
        if not SHELL_NAME_RE.match(key):
            logger.warning("Not exporting %r: not a valid shell variable name", key)
            continue
        lines.append(f"export {key}={shlex.quote(value)}")
    return lines
