from __future__ import annotations

import shlex
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence, Tuple

from ..logging_config import get_logger

logger = get_logger(__name__)


class ToolNotFoundError(RuntimeError):
    """Raised when a required executable is not on PATH."""


@dataclass(frozen=True)
class CommandResult:
    args: Tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def lines(self) -> list[str]:
        return [line.strip() for line in self.stdout.splitlines() if line.strip()]

    def error_text(self) -> str:
        """First line of the command's diagnostics, for warnings."""
        text = (self.stderr or self.stdout or f"exit status {self.returncode}").strip()
        return text.splitlines()[0] if text else f"exit status {self.returncode}"


Runner = Callable[[Sequence[str]], CommandResult]


def require_tool(name: str) -> str:
    path = shutil.which(name)
    if path is None:
        raise ToolNotFoundError(f"Required tool '{name}' was not found on PATH.")
    return path


def run_command(args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
    """Run a command without a shell and capture its output; never raises on exit status."""
    logger.debug("Running: %s", shlex.join(args))
    completed = subprocess.run(
        list(args),
        cwd=cwd,
        capture_output=True,
        text=True,
        check=False,
    )
    return CommandResult(
        args=tuple(args),
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )
