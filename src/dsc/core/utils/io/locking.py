"""Advisory file locking for files shared between concurrent dsc processes."""
from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator, Optional

from .core import ensure_directory

try:
    import fcntl

    HAS_FCNTL = True
except ImportError:  # pragma: no cover - Windows has no flock
    HAS_FCNTL = False


class LockUnavailableError(OSError):
    """Raised when a lock is held elsewhere and cannot be acquired."""


def lock_path_for(target: Path | str) -> Path:
    """Return the sidecar ``<file>.lock`` path guarding ``target``."""
    target = Path(target)
    return target.with_suffix(target.suffix + ".lock")


@contextmanager
def acquire_file_lock(
    file_path: Path | str,
    *,
    shared: bool = False,
    blocking: bool = True,
) -> Iterator[Optional[IO[str]]]:
    """Acquire an advisory lock guarding ``file_path``.

    The lock is taken on a sidecar ``<file>.lock`` rather than on the target
    itself, because writers replace the target with ``os.replace`` and a lock
    held on the old inode would no longer exclude anybody. The sidecar is
    never removed, so every process always contends on the same inode.

    - ``shared=True`` takes ``LOCK_SH`` (readers), otherwise ``LOCK_EX``.
    - ``blocking=False`` makes a single ``LOCK_NB`` attempt and raises
      ``LockUnavailableError`` when the lock is held elsewhere.

    On platforms without ``fcntl`` the context yields ``None`` and no locking
    takes place.

    Yields:
        The opened sidecar file object kept locked for the duration of the context.
    """
    if not HAS_FCNTL:
        yield None
        return

    target = Path(file_path)
    lock_target = lock_path_for(target)
    ensure_directory(lock_target.parent)

    mode = fcntl.LOCK_SH if shared else fcntl.LOCK_EX
    fh = open(lock_target, "a+")
    try:
        if blocking:
            fcntl.flock(fh.fileno(), mode)
        else:
            try:
                fcntl.flock(fh.fileno(), mode | fcntl.LOCK_NB)
            except BlockingIOError as exc:
                raise LockUnavailableError(f"Lock on {target} is held by another process") from exc

        try:
            yield fh
        finally:
            fcntl.flock(fh.fileno(), fcntl.LOCK_UN)
    finally:
        fh.close()


__all__ = [
    "HAS_FCNTL",
    "LockUnavailableError",
    "acquire_file_lock",
    "lock_path_for",
]
