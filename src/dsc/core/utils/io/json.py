"""JSON files shared between processes: locked reads, atomic locked writes."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from . import locking as locklib
from .core import PathLike, atomic_write

ENCODING = "utf-8"


def read_json(file_path: PathLike) -> Any:
    """Parse ``file_path`` while holding a shared lock (waits for writers).

    Raises:
        FileNotFoundError: The file does not exist.
        json.JSONDecodeError: The content is not JSON.
    """
    path = Path(file_path)
    with locklib.acquire_file_lock(path, shared=True):
        return json.loads(path.read_text(encoding=ENCODING))


def write_json_atomic(
    file_path: PathLike,
    data: Any,
    *,
    blocking: bool = True,
    indent: int = 2,
    sort_keys: bool = True,
) -> None:
    """Serialize ``data`` and atomically replace ``file_path`` with it.

    The exclusive lock is held across the temp-file write and the rename.
    With ``blocking=False`` a lock held elsewhere raises
    ``LockUnavailableError`` before anything is written.
    """
    path = Path(file_path)
    text = json.dumps(data, indent=indent, sort_keys=sort_keys, ensure_ascii=False)
    lock_cm = locklib.acquire_file_lock(path, blocking=blocking)
    atomic_write(path, lambda fh: fh.write(text + "\n"), lock_cm=lock_cm, encoding=ENCODING)


__all__ = ["read_json", "write_json_atomic"]
