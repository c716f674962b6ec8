"""Directory helpers and whole-file atomic replacement."""
from __future__ import annotations

import os
import tempfile
from contextlib import nullcontext
from pathlib import Path
from typing import Any, Callable, ContextManager, Optional, TextIO, Union

PathLike = Union[str, Path]


def ensure_parent_dir(path: PathLike) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def ensure_directory(path: PathLike) -> Path:
    """Create ``path`` (and parents) unless it already is a directory.

    Raises:
        NotADirectoryError: Something other than a directory sits at ``path``.
    """
    directory = Path(path)
    if directory.exists() and not directory.is_dir():
        raise NotADirectoryError(f"Not a directory: {directory}")
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def atomic_write(
    path: PathLike,
    write_fn: Callable[[TextIO], None],
    *,
    lock_cm: Optional[ContextManager[Any]] = None,
    encoding: str = "utf-8",
) -> None:
    """Replace ``path`` with whatever ``write_fn`` writes, all or nothing.

    Content goes to a hidden sibling temp file (created with mode 0600, so
    session tokens never become world-readable), is fsync'd and then moved
    over ``path`` with ``os.replace``. Concurrent readers see either the old
    or the new file. ``lock_cm`` is entered before the temp file is created
    and held until the rename is done.
    """
    target = Path(path)
    ensure_parent_dir(target)

    tmp_name: Optional[str] = None
    try:
        with lock_cm or nullcontext():
            fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding=encoding) as fh:
                write_fn(fh)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, target)
            tmp_name = None
    finally:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)


__all__ = ["PathLike", "atomic_write", "ensure_directory", "ensure_parent_dir"]
