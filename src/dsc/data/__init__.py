"""Files shipped inside the package: default configuration and JSON schemas."""
from __future__ import annotations

from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULTS_FILE = ("config", "defaults.yaml")


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """Filesystem path of ``dsc/data/<subpackage>/<filename>``."""
    base = Path(str(resources.files("dsc.data") / subpackage))
    return base / filename if filename else base


@lru_cache(maxsize=8)
def read_yaml(subpackage: str, filename: str) -> Dict[str, Any]:
    """Parse a bundled YAML file once per process.

    Callers get a shared object and must not mutate it.
    """
    text = get_data_path(subpackage, filename).read_text(encoding="utf-8")
    return yaml.safe_load(text) or {}


def clear_caches() -> None:
    read_yaml.cache_clear()


__all__ = ["DEFAULTS_FILE", "get_data_path", "read_yaml", "clear_caches"]
