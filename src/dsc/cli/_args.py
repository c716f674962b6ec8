"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_global_args(parser: argparse.ArgumentParser) -> None:
    """Register options shared by every command (placed before the command name).

    Args:
        parser: The top-level parser
    """
    parser.add_argument(
        "-c",
        "--config",
        dest="config_file",
        metavar="FILE",
        help="Read configuration from FILE instead of the user config file",
    )
    parser.add_argument(
        "--session",
        metavar="TOKEN",
        help="Use this session token instead of DSC_SESSION or the stored session",
    )
    parser.add_argument(
        "-d",
        "--docspell-url",
        dest="docspell_url",
        metavar="URL",
        help="Base URL of the Docspell server",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log output (-v info, -vv debug)",
    )


__all__ = ["add_json_flag", "add_global_args"]
