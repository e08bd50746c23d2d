"""Load variables from a .env file, optionally filtered by glob patterns.

Blank lines and # comments are ignored; malformed lines are reported and
skipped. --list-only prints the matching keys without loading anything.
Because a child process cannot change its parent shell, --export prints
`export` statements for `eval "$(repotools-load-env --export)"`, and a
command given after `--` is run with the loaded environment.
"""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from ..logging_config import get_logger
from ..utils.env import apply_to_environ, format_exports, load_env_file
from ._common import FATAL_ERRORS, add_common_arguments, fail, prepare

logger = get_logger(__name__)


def _split_command(argv: Sequence[str]) -> Tuple[List[str], List[str]]:
    args = list(argv)
    if "--" in args:
        index = args.index("--")
        return args[:index], args[index + 1 :]
    return args, []


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Load variables from a .env file.",
        epilog="Anything after `--` is run as a command with the loaded variables.",
    )
    parser.add_argument("path", nargs="?", help="Path to the .env file (default: env.file from the config, else .env).")
    parser.add_argument("--list-only", "-l", action="store_true", help="Only list matching keys; load nothing.")
    parser.add_argument(
        "--pattern",
        "-p",
        action="append",
        dest="patterns",
        help="Glob pattern (*, ?, [...]) a key must match; may be repeated.",
    )
    parser.add_argument("--export", "-e", action="store_true", help="Print shell export statements to stdout.")
    add_common_arguments(parser)
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    own_args, command = _split_command(sys.argv[1:] if argv is None else argv)
    args = _parse_args(own_args)
    try:
        config = prepare(args)
        path = Path(args.path).expanduser() if args.path else config.env.file
        patterns = args.patterns or config.env.patterns
        result = load_env_file(path, patterns=patterns, list_only=args.list_only)
    except FATAL_ERRORS as exc:
        return fail(logger, exc)

    if args.list_only:
        for key in result.listed:
            print(key)
        return 0

    applied = apply_to_environ(result.variables)
    confirm_stream = sys.stderr if args.export else sys.stdout
    for key in applied:
        print(f"Set {key}", file=confirm_stream)
    if args.export:
        for line in format_exports(applied):
            print(line)

    if command:
        try:
            completed = subprocess.run(command, env=dict(os.environ), check=False)
        except OSError as exc:
            return fail(logger, exc)
        return completed.returncode
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
