from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from dsc.core.utils.io import ensure_directory

_DSC_HANDLER: logging.Handler | None = None
_CONFIGURED_TARGET: str | None = None

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    value = logging.getLevelName(str(name).upper())
    return value if isinstance(value, int) else logging.WARNING


def level_for_verbosity(base_level: str, verbosity: int) -> str:
    """Lower ``base_level`` for each ``-v``: one gives INFO, two give DEBUG."""
    if verbosity >= 2:
        return "DEBUG"
    if verbosity == 1 and _level_from_name(base_level) > logging.INFO:
        return "INFO"
    return base_level


def configure_logging(*, level: str = "WARNING", log_path: Optional[Path] = None) -> None:
    """Install dsc's single root handler (stderr, or ``log_path`` when given).

    Idempotent per-process: calling again for the same target only updates the
    level. stdout is never used so command output stays machine-readable.
    """
    global _DSC_HANDLER, _CONFIGURED_TARGET

    target = str(Path(log_path).resolve()) if log_path else "<stderr>"
    root = logging.getLogger()
    root.setLevel(_level_from_name(level))

    if _CONFIGURED_TARGET == target and _DSC_HANDLER is not None:
        _DSC_HANDLER.setLevel(_level_from_name(level))
        return

    if _DSC_HANDLER is not None:
        root.removeHandler(_DSC_HANDLER)
        _DSC_HANDLER.close()
        _DSC_HANDLER = None

    handler: logging.Handler
    if log_path:
        ensure_directory(Path(target).parent)
        handler = logging.FileHandler(target, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    # urllib3 logs every connection at DEBUG; keep it one notch quieter.
    logging.getLogger("urllib3").setLevel(max(_level_from_name(level), logging.INFO))

    _DSC_HANDLER = handler
    _CONFIGURED_TARGET = target


def reset_logging_for_tests() -> None:
    """Test-only: remove the handler installed by configure_logging."""
    global _DSC_HANDLER, _CONFIGURED_TARGET
    if _DSC_HANDLER is not None:
        logging.getLogger().removeHandler(_DSC_HANDLER)
        _DSC_HANDLER.close()
    _DSC_HANDLER = None
    _CONFIGURED_TARGET = None


__all__ = ["LOG_FORMAT", "configure_logging", "level_for_verbosity", "reset_logging_for_tests"]
