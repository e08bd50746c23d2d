from .env import (
    ConfigNotFound,
    EnvLoadResult,
    InvalidFileExtension,
    apply_to_environ,
    format_exports,
    load_env_file,
)
from .shell import CommandResult, ToolNotFoundError, require_tool, run_command

__all__ = [
    "CommandResult",
    "ConfigNotFound",
    "EnvLoadResult",
    "InvalidFileExtension",
    "ToolNotFoundError",
    "apply_to_environ",
    "format_exports",
    "load_env_file",
    "require_tool",
    "run_command",
]
