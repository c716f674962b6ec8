"""Layer merging for configuration dictionaries."""
from __future__ import annotations

from typing import Any, Dict, Mapping


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Return ``base`` overlaid with ``override``; neither input is modified.

    Nested mappings merge key by key. Any other value in ``override``,
    lists included, replaces the one in ``base`` outright.

    Example:
        >>> deep_merge({"client": {"timeout_seconds": 30}}, {"client": {"docspell_url": "x"}})
        {'client': {'timeout_seconds': 30, 'docspell_url': 'x'}}
    """
    merged: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


__all__ = ["deep_merge"]
