"""List the available local commands, optionally with their descriptions.

By default lists the commands shipped with repotools; --path lists the Python
scripts in another directory instead. Descriptions come from each module's
docstring, read without importing or running the script.
"""

from __future__ import annotations

import argparse
import ast
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from ..logging_config import get_logger
from ._common import FATAL_ERRORS, add_common_arguments, fail, prepare

logger = get_logger(__name__)

COMMANDS_DIR = Path(__file__).resolve().parent

# Module name -> installed console script.
ENTRY_POINTS = {
    "list_commands": "repotools-list",
    "load_env": "repotools-load-env",
    "missing_repos": "repotools-missing",
    "teamless_repos": "repotools-teamless",
    "update_repos": "repotools-update",
}


@dataclass(frozen=True)
class CommandInfo:
    name: str
    path: Path
    synopsis: str


def read_synopsis(path: Path) -> str:
    """First paragraph of the module docstring, on one line; empty if there is none."""
    try:
        tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    except (SyntaxError, UnicodeDecodeError) as exc:
        logger.warning("Cannot read help from %s: %s", path, exc)
        return ""
    doc = ast.get_docstring(tree) or ""
    paragraph = doc.strip().split("\n\n", 1)[0]
    return " ".join(paragraph.split())


def discover_commands(directory: Optional[Path] = None) -> List[CommandInfo]:
    builtin = directory is None
    directory = COMMANDS_DIR if builtin else directory
    if not directory.is_dir():
        raise NotADirectoryError(f"Script directory not found: {directory}")
    commands: List[CommandInfo] = []
    for path in sorted(directory.glob("*.py"), key=lambda p: p.name):
        if path.name.startswith("_"):
            continue
        name = ENTRY_POINTS.get(path.stem, path.stem) if builtin else path.name
        commands.append(CommandInfo(name=name, path=path, synopsis=read_synopsis(path)))
    return sorted(commands, key=lambda c: c.name)


def format_listing(commands: Sequence[CommandInfo], description: bool = False) -> List[str]:
    if not description:
        return [command.name for command in commands]
    width = max((len(command.name) for command in commands), default=0)
    return [f"{command.name.ljust(width)}  {command.synopsis}".rstrip() for command in commands]


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List available local commands.")
    parser.add_argument("--path", help="Directory of Python scripts to list instead of the built-in commands.")
    parser.add_argument(
        "--description",
        "-d",
        action="store_true",
        help="Show each command's one-line description.",
    )
    add_common_arguments(parser)
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    try:
        config = prepare(args)
        directory = Path(args.path).expanduser() if args.path else config.scripts.path
        commands = discover_commands(directory)
    except FATAL_ERRORS as exc:
        return fail(logger, exc)

    for line in format_listing(commands, description=args.description):
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
