"""Pull the main branch of every working copy under a root directory.

For each subdirectory: record the current branch, switch to the main branch,
pull it from the remote, then switch back (unless --stay-on-main). A failure
in any step is reported and the next directory is processed.
"""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path
from typing import Optional, Sequence

from ..logging_config import get_logger
from ..report import export_report
from ..repos.updater import UpdateOutcome, update_all
from ..utils.shell import require_tool
from ..vcs import GitClient
from ._common import FATAL_ERRORS, add_common_arguments, fail, prepare

logger = get_logger(__name__)

REPORT_COLUMNS = ["name", "path", "status", "original_branch", "step", "message"]


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Bulk-update local clones from their main branch.")
    parser.add_argument("--root", "-r", help="Directory whose subdirectories are working copies.")
    parser.add_argument("--main-branch", "-b", help="Name of the main branch (default: main).")
    parser.add_argument("--remote", help="Remote to pull from (default: origin).")
    parser.add_argument(
        "--stay-on-main",
        action="store_true",
        default=None,
        help="Leave each working copy on the main branch instead of switching back.",
    )
    parser.add_argument("--report", help="Write per-directory outcomes to this CSV file.")
    add_common_arguments(parser)
    return parser.parse_args(argv)


def _summary(outcomes: Sequence[UpdateOutcome]) -> str:
    counts = Counter(outcome.status for outcome in outcomes)
    return (
        f"[Update] {len(outcomes)} directories: {counts.get('updated', 0)} updated, "
        f"{counts.get('skipped', 0)} skipped, {counts.get('failed', 0)} failed"
    )


def main(argv: Optional[Sequence[str]] = None, git: Optional[GitClient] = None) -> int:
    args = _parse_args(argv)
    try:
        config = prepare(args)
        root_value = args.root or config.update.root
        if root_value is None:
            raise ValueError("A root directory is required (--root or update.root in the config).")
        root = Path(root_value).expanduser()
        if not root.is_dir():
            raise NotADirectoryError(f"Root directory not found: {root}")
        if git is None:
            require_tool("git")
            git = GitClient()
    except FATAL_ERRORS as exc:
        return fail(logger, exc)

    stay_on_main = config.update.stay_on_main if args.stay_on_main is None else args.stay_on_main
    outcomes = update_all(
        root,
        git=git,
        main_branch=args.main_branch or config.update.main_branch,
        remote=args.remote or config.update.remote,
        stay_on_main=stay_on_main,
    )
    print(_summary(outcomes))

    if args.report:
        path = export_report(Path(args.report), [o.as_row() for o in outcomes], REPORT_COLUMNS)
        logger.info("Report written to %s", path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
