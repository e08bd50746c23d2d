from __future__ import annotations

"""
Bulk update of local working copies.

Each subdirectory of the root is brought up to date with its main branch and
returned to the branch it was on. Every step can fail independently; a failure
ends work on that directory only.
"""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, List, Optional

from ..logging_config import get_logger
from ..vcs.git import GitClient

logger = get_logger(__name__)

STATUS_UPDATED = "updated"
STATUS_SKIPPED = "skipped"
STATUS_FAILED = "failed"

STEP_BRANCH = "current-branch"
STEP_SWITCH_MAIN = "switch-to-main"
STEP_PULL = "pull"
STEP_SWITCH_BACK = "switch-back"

DETACHED_HEAD = "HEAD"


@dataclass(frozen=True)
class UpdateOutcome:
    name: str
    path: Path
    status: str
    original_branch: Optional[str] = None
    step: Optional[str] = None
    message: str = ""

    def as_row(self) -> Dict[str, object]:
        row = asdict(self)
        row["path"] = str(self.path)
        return row


def update_repository(
    git: GitClient,
    path: Path,
    main_branch: str = "main",
    remote: str = "origin",
    stay_on_main: bool = False,
) -> UpdateOutcome:
    name = path.name
    if not git.is_working_copy(path):
        return UpdateOutcome(name, path, STATUS_SKIPPED, message="not a git working copy")

    branch_result = git.current_branch(path)
    if not branch_result.ok:
        return UpdateOutcome(name, path, STATUS_FAILED, step=STEP_BRANCH, message=branch_result.error_text())
    original = branch_result.stdout.strip()
    if original == DETACHED_HEAD:
        # Detached: remember the commit itself so it can be checked out again.
        commit = git.head_commit(path)
        if not commit.ok:
            return UpdateOutcome(name, path, STATUS_FAILED, step=STEP_BRANCH, message=commit.error_text())
        original = commit.stdout.strip()

    switched = git.checkout(path, main_branch)
    if not switched.ok:
        return UpdateOutcome(
            name, path, STATUS_FAILED, original, STEP_SWITCH_MAIN, switched.error_text()
        )

    pulled = git.pull(path, remote, main_branch)
    if not pulled.ok:
        return UpdateOutcome(name, path, STATUS_FAILED, original, STEP_PULL, pulled.error_text())

    if not stay_on_main and original != main_branch:
        restored = git.checkout(path, original)
        if not restored.ok:
            return UpdateOutcome(
                name, path, STATUS_FAILED, original, STEP_SWITCH_BACK, restored.error_text()
            )
    return UpdateOutcome(name, path, STATUS_UPDATED, original)


def update_all(
    root: Path,
    git: Optional[GitClient] = None,
    main_branch: str = "main",
    remote: str = "origin",
    stay_on_main: bool = False,
) -> List[UpdateOutcome]:
    git = git or GitClient()
    outcomes: List[UpdateOutcome] = []
    directories = sorted((entry for entry in root.iterdir() if entry.is_dir()), key=lambda p: p.name)
    for directory in directories:
        print(f"[Update] {directory.name}")
        outcome = update_repository(git, directory, main_branch, remote, stay_on_main)
        if outcome.status == STATUS_SKIPPED:
            logger.warning("Skipping %s: %s", directory, outcome.message)
        elif outcome.status == STATUS_FAILED:
            logger.warning("%s failed at %s: %s", directory.name, outcome.step, outcome.message)
        else:
            logger.info("%s updated from %s/%s", directory.name, remote, main_branch)
        outcomes.append(outcome)
    return outcomes
