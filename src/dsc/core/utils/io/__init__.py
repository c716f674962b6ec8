"""I/O utilities for dsc.

This package provides safe, atomic file operations:
- Core: atomic writes, directory management
- JSON: read/write with locking
- Locking: advisory file locking primitives
"""
from __future__ import annotations

from .core import (
    PathLike,
    atomic_write,
    ensure_directory,
    ensure_parent_dir,
)
from .json import (
    read_json,
    write_json_atomic,
)
from .locking import (
    HAS_FCNTL,
    LockUnavailableError,
    acquire_file_lock,
    lock_path_for,
)

__all__ = [
    # core
    "PathLike",
    "ensure_parent_dir",
    "ensure_directory",
    "atomic_write",
    # json
    "read_json",
    "write_json_atomic",
    # locking
    "HAS_FCNTL",
    "acquire_file_lock",
    "lock_path_for",
    "LockUnavailableError",
]
