"""On-disk persistence of the session record (``dsc-token.json``).

Several ``dsc`` processes may touch the file at once. Readers take a shared
lock and wait for it; writers try an exclusive lock once and give up when
another process holds it, since the concurrent writer is storing an equally
fresh session anyway.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import jsonschema

from dsc.core.exceptions import NotLoggedInError, SessionParseError, SessionStoreError
from dsc.core.utils.io import LockUnavailableError, read_json, write_json_atomic
from dsc.data import read_yaml

from .models import SessionRecord

logger = logging.getLogger(__name__)

SCHEMA_FILE = "session-record.schema.yaml"


def _validate(payload: Any, path: Path) -> None:
    schema = read_yaml("schemas", SCHEMA_FILE)
    validator = jsonschema.Draft7Validator(schema)
    errors = sorted(validator.iter_errors(payload), key=lambda e: list(e.path))
    if errors:
        first = errors[0]
        where = "/".join(str(p) for p in first.path) or "<root>"
        raise SessionParseError(
            f"Session file {path} is not a valid session record",
            path=str(path),
            details=f"{where}: {first.message}",
        )


class TokenStore:
    """Load, save and delete the persisted session record."""

    def __init__(self, path: Optional[Path] = None) -> None:
        if path is None:
            from dsc.core.utils.paths import get_token_file

            path = get_token_file()
        self.path = Path(path)

    def load(self) -> SessionRecord:
        """Read the stored record under a shared lock.

        Raises:
            NotLoggedInError: No session file exists.
            SessionStoreError: The file could not be read.
            SessionParseError: The file is not valid JSON or not a session record.
        """
        if not self.path.exists():
            raise NotLoggedInError()
        try:
            data = read_json(self.path)
        except FileNotFoundError as exc:
            # Removed by a concurrent logout between the check and the read.
            raise NotLoggedInError() from exc
        except ValueError as exc:
            # JSONDecodeError and UnicodeDecodeError
            raise SessionParseError(
                f"Session file {self.path} contains invalid JSON",
                path=str(self.path),
                details=str(exc),
            ) from exc
        except OSError as exc:
            raise SessionStoreError(
                f"Cannot read session file {self.path}: {exc}",
                path=str(self.path),
                operation="read",
            ) from exc

        _validate(data, self.path)
        logger.debug("Loaded session for %s/%s from %s", data.get("collective"), data.get("user"), self.path)
        return SessionRecord.from_dict(data)

    def save(self, record: SessionRecord) -> bool:
        """Persist ``record`` atomically.

        Returns:
            True when written, False when skipped because another process
            holds the write lock.

        Raises:
            SessionStoreError: Directory creation or the write failed.
        """
        try:
            write_json_atomic(self.path, record.to_dict(), blocking=False)
        except LockUnavailableError:
            logger.debug("Session file %s is locked by another process; skipping write", self.path)
            return False
        except OSError as exc:
            raise SessionStoreError(
                f"Cannot write session file {self.path}: {exc}",
                path=str(self.path),
                operation="write",
            ) from exc
        logger.debug("Stored session in %s", self.path)
        return True

    def delete(self) -> bool:
        """Remove the session file; returns False when there was none.

        The sidecar lock file stays so that processes waiting on it keep
        contending on the same inode.
        """
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise SessionStoreError(
                f"Cannot remove session file {self.path}: {exc}",
                path=str(self.path),
                operation="delete",
            ) from exc
        logger.debug("Removed session file %s", self.path)
        return True


__all__ = ["TokenStore", "SCHEMA_FILE"]
