"""
Auto-discovery CLI dispatcher for dsc.

Every module under ``dsc/cli/commands`` becomes a subcommand. A command
module provides ``SUMMARY``, ``register_args(parser)`` and
``main(args) -> int``; adding a command means adding a file.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from functools import lru_cache
from pathlib import Path
from typing import Any

from dsc.cli._args import add_global_args
from dsc.core.exceptions import DscError

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def discover_commands() -> dict[str, dict[str, Any]]:
    """Discover top-level commands under cli/commands."""
    commands_dir = Path(__file__).parent / "commands"
    commands: dict[str, dict[str, Any]] = {}
    if not commands_dir.exists():
        return commands

    for item in sorted(commands_dir.glob("*.py")):
        if item.name.startswith("_"):
            continue

        cmd_name = item.stem
        try:
            module = importlib.import_module(f"dsc.cli.commands.{cmd_name}")
        except ImportError as e:
            print(f"Warning: Could not import command {cmd_name}: {e}", file=sys.stderr)
            continue
        commands[cmd_name] = {
            "module": module,
            "summary": getattr(module, "SUMMARY", cmd_name),
            "register_args": getattr(module, "register_args", None),
            "main": getattr(module, "main", None),
        }

    return commands


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with auto-discovered commands."""
    parser = argparse.ArgumentParser(
        prog="dsc",
        description="Command-line client for the Docspell document server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    add_global_args(parser)

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    for cmd_name, cmd_info in sorted(discover_commands().items()):
        primary_name = cmd_name.replace("_", "-")
        aliases = [cmd_name] if primary_name != cmd_name else []
        cmd_parser = subparsers.add_parser(
            primary_name,
            aliases=aliases,
            help=cmd_info["summary"],
        )
        if cmd_info["register_args"]:
            cmd_info["register_args"](cmd_parser)
        if cmd_info["main"]:
            cmd_parser.set_defaults(_func=cmd_info["main"])

    return parser


def _get_version() -> str:
    from dsc import __version__

    return __version__


def _setup_logging(args: argparse.Namespace) -> None:
    """Configure logging from the ``logging`` config section and ``-v`` flags.

    A broken config file must not hide the command's own error report, so
    logging falls back to the defaults and the command reports the problem.
    """
    from dsc.cli._utils import load_config
    from dsc.core.config import LoggingConfig
    from dsc.core.stdlib_logging import configure_logging, level_for_verbosity

    level = "WARNING"
    log_path = None
    try:
        cfg = LoggingConfig(config=load_config(args))
        level, log_path = cfg.level, cfg.file
    except DscError as exc:
        configure_logging(level=level_for_verbosity(level, args.verbose))
        logger.debug("Using default logging, configuration unavailable: %s", exc)
        return
    configure_logging(level=level_for_verbosity(level, args.verbose), log_path=log_path)


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the dsc CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "_func", None):
        parser.print_help()
        return 0

    _setup_logging(args)
    logger.debug("Running command %s", args.command)
    return int(args._func(args))


if __name__ == "__main__":
    sys.exit(main())
