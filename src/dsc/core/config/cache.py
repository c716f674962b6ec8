"""Centralized configuration caching.

Provides a single source of truth for loaded configuration across all
domain configs within one process.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Dict, Optional

_config_cache: Dict[str, Dict[str, Any]] = {}


def _cache_key(config_file: Optional[Path]) -> str:
    """Generate a cache key for ``config_file``.

    The key includes the DSC_* environment and the config file's mtime/size
    so a changed override or an edited file is never served stale.
    """
    from dsc.core.utils.paths import get_user_config_file

    path = Path(config_file).expanduser() if config_file else get_user_config_file()
    explicit = ":explicit" if config_file else ""

    env_items = sorted(
        (k, os.environ.get(k, ""))
        for k in os.environ.keys()
        if k.startswith("DSC_") and "__" in k
    )
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]

    try:
        st = path.stat()
        file_fp = f"{st.st_mtime_ns}:{st.st_size}"
    except OSError:
        file_fp = "missing"

    return f"{path}{explicit}:env={env_fp}:file={file_fp}"


def get_cached_config(config_file: Optional[Path] = None) -> Dict[str, Any]:
    """Get configuration with caching.

    Args:
        config_file: Explicit config file, or None for the user default.

    Returns:
        Configuration dictionary (cached; treat as immutable).
    """
    key = _cache_key(config_file)
    if key not in _config_cache:
        from .manager import ConfigManager

        manager = ConfigManager(config_file=config_file)
        _config_cache[key] = manager.load()
    return _config_cache[key]


def clear_all_caches() -> None:
    """Clear all configuration caches."""
    _config_cache.clear()


__all__ = [
    "get_cached_config",
    "clear_all_caches",
]
