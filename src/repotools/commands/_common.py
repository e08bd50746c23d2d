from __future__ import annotations

import argparse
import logging

import yaml

from ..config import ToolsConfig, resolve_config
from ..logging_config import setup_logging

# Raised by precondition checks; each command's main() turns these into exit code 1.
FATAL_ERRORS = (FileNotFoundError, NotADirectoryError, ValueError, RuntimeError, yaml.YAMLError)


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        help="Path to a YAML file with command defaults (default: $REPOTOOLS_CONFIG or ./repotools.yaml).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log output (-v info, -vv debug).",
    )


def prepare(args: argparse.Namespace) -> ToolsConfig:
    setup_logging(args.verbose)
    return resolve_config(args.config)


def fail(logger: logging.Logger, exc: BaseException) -> int:
    logger.error("%s", exc)
    return 1


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return number
