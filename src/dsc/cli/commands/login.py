"""
dsc login command.

SUMMARY: Log in and store the session for subsequent commands
"""

from __future__ import annotations

import argparse

from dsc.cli import OutputFormatter, add_json_flag
from dsc.cli._utils import session_manager
from dsc.core.exceptions import DscError

SUMMARY = "Log in and store the session for subsequent commands"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "-u",
        "--user",
        help="Account name (collective/user); defaults to auth.default_account",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--password",
        help="Password in plain text; DSC_PASSWORD is used when omitted",
    )
    source.add_argument(
        "--pass-entry",
        dest="pass_entry",
        help="Look the password up in the password manager under this entry",
    )
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        record = session_manager(args).login(
            account=args.user,
            password=args.password,
            pass_entry=args.pass_entry,
        )
    except DscError as e:
        formatter.error(e)
        return 1

    formatter.success(
        record.to_public_dict(),
        f"Logged in as {record.collective}/{record.account}",
    )
    return 0
