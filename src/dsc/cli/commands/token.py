"""
dsc token command.

SUMMARY: Print a valid session token, renewing it when close to expiry
"""

from __future__ import annotations

import argparse

from dsc.cli import OutputFormatter, add_json_flag
from dsc.cli._utils import session_manager
from dsc.core.exceptions import DscError

SUMMARY = "Print a valid session token, renewing it when close to expiry"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    """Print the token; usable as ``export DSC_SESSION=$(dsc token)``."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        token = session_manager(args).get_valid_token(getattr(args, "session", None))
    except DscError as e:
        formatter.error(e)
        return 1

    formatter.success({"token": token}, token)
    return 0
