#!/usr/bin/env python3
"""
Go interface analyzer command line.

Runs one navigation query against the Go sources on disk and prints the
result as a single JSON line on stdout. Diagnostics go to stderr.

Usage:
    python run_analyzer.py find-implementations /path/to/repo Read
    python run_analyzer.py find-interfaces /path/to/repo Read
    python run_analyzer.py find-file-interfaces pkg/io.go
    python run_analyzer.py find-file-implementations pkg/file.go
    python run_analyzer.py analyze-package-interfaces pkg/
    python run_analyzer.py --log-level DEBUG find-all-interfaces /path/to/repo
"""

import argparse
import logging
import sys
from typing import List, Optional

from core.analyzer_config import ConfigValidationError, load_analyzer_config
from core.structured_logging import (
    configure_structured_logging,
    phase_scope,
    resolve_log_level,
    set_query_id,
)
from navigator.commands import COMMANDS, run_command
from navigator.protocol import encode_result
from navigator.queries import UsageError

logger = logging.getLogger(__name__)


def _log_level(value: str) -> str:
    try:
        resolve_log_level(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e
    return value.upper()


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one sub-command per verb."""
    parser = argparse.ArgumentParser(
        prog="go-interface-analyzer",
        description="Navigate between Go interfaces and their implementations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  go-interface-analyzer find-implementations ./ Read\n"
            "  go-interface-analyzer find-file-interfaces pkg/io.go\n"
        ),
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Optional YAML file with analyzer settings.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=_log_level,
        help="Log level for stderr diagnostics. Default: from config (INFO).",
    )
    parser.add_argument(
        "--strict-config",
        action="store_true",
        default=None,
        help="Fail on invalid configuration instead of falling back to defaults.",
    )

    subparsers = parser.add_subparsers(dest="verb", metavar="command")
    subparsers.required = True
    for command in COMMANDS.values():
        sub = subparsers.add_parser(command.verb, help=command.help, description=command.help)
        for argument in command.arguments:
            sub.add_argument(argument)

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments. Exits with status 2 on a usage error."""
    return build_arg_parser().parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the analyzer."""
    args = parse_args(argv)

    try:
        config = load_analyzer_config(args.config, strict=args.strict_config)
    except ConfigValidationError as e:
        configure_structured_logging(logging.ERROR)
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)

    configure_structured_logging(args.log_level or config.log_level)
    set_query_id()

    command = COMMANDS[args.verb]
    arguments = [getattr(args, name) for name in command.arguments]
    logger.info("Running %s %s", args.verb, " ".join(arguments))

    try:
        with phase_scope(args.verb):
            payload = run_command(args.verb, config, *arguments)
    except UsageError as e:
        logger.error("Invalid arguments for %s: %s", args.verb, e)
        sys.exit(1)
    except Exception as e:
        logger.error("Analysis failed: %s", e, exc_info=True)
        sys.exit(1)

    print(encode_result(payload))


if __name__ == "__main__":
    main()
