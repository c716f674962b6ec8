"""Password lookup through an external password manager (``pass`` by default).

The command is run without a shell; the entry name is appended as the last
argument. ``pass`` prints the password on the first line, optionally
followed by further lines that are ignored here.
"""
from __future__ import annotations

import logging
import subprocess
from typing import Optional, Sequence

from dsc.core.exceptions import PasswordLookupError

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = ("pass", "show")


def _run_lookup(entry: str, command: Sequence[str], timeout: float) -> str:
    argv = [*command, entry]
    logger.debug("Running external command `%s`", " ".join(argv))
    try:
        result = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as exc:
        raise PasswordLookupError(
            f"Password manager command not found: {argv[0]}", entry=entry
        ) from exc
    except subprocess.TimeoutExpired as exc:
        raise PasswordLookupError(
            f"Password manager timed out after {timeout}s", entry=entry
        ) from exc

    if result.returncode != 0:
        stderr = (result.stderr or "").strip() or "no output"
        logger.warning("%s exited with status %s: %s", argv[0], result.returncode, stderr)
        raise PasswordLookupError(
            f"Password manager failed ({result.returncode}): {stderr}", entry=entry
        )
    return result.stdout or ""


def lookup_password(
    entry: str,
    *,
    command: Optional[Sequence[str]] = None,
    timeout: float = 10.0,
) -> str:
    """Return the password stored under ``entry`` (first output line).

    Raises:
        PasswordLookupError: The command failed, timed out, or printed nothing.
    """
    content = _run_lookup(entry, command or DEFAULT_COMMAND, timeout)
    lines = content.splitlines()
    if not lines or not lines[0]:
        raise PasswordLookupError(f"No password found for entry: {entry}", entry=entry)
    return lines[0]


__all__ = ["DEFAULT_COMMAND", "lookup_password"]
