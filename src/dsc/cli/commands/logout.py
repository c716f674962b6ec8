"""
dsc logout command.

SUMMARY: Remove the stored session
"""

from __future__ import annotations

import argparse

from dsc.cli import OutputFormatter, add_json_flag
from dsc.cli._utils import session_manager
from dsc.core.exceptions import DscError

SUMMARY = "Remove the stored session"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        manager = session_manager(args)
        removed = manager.logout()
    except DscError as e:
        formatter.error(e)
        return 1

    message = "Session removed" if removed else "No session stored"
    formatter.success({"removed": removed, "path": str(manager.store.path)}, message)
    return 0
