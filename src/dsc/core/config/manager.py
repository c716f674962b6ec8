"""
dsc configuration management (YAML layers plus environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import yaml

from dsc.core.exceptions import ConfigError
from dsc.core.utils.merge import deep_merge as _deep_merge
from dsc.data import DEFAULTS_FILE, get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "DSC_"


class ConfigManager:
    """Load and merge dsc configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: DSC_<SECTION>__<KEY>[__<KEY>...]
    2. User config file: <user-config-dir>/config.yaml, or the file given
       explicitly (``--config``)
    3. Bundled defaults: dsc.data/config/defaults.yaml

    Only environment keys containing a double underscore are treated as
    overrides, so plain variables such as ``DSC_SESSION`` and
    ``DSC_PASSWORD`` never leak into the configuration tree.
    """

    def __init__(self, config_file: Optional[Path] = None) -> None:
        from dsc.core.utils.paths import get_user_config_file

        self.explicit_file = config_file is not None
        self.config_file = Path(config_file).expanduser() if config_file else get_user_config_file()
        self.core_config_file = get_data_path(*DEFAULTS_FILE)

    def deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge dictionaries. Delegates to shared implementation."""
        return _deep_merge(base, override)

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, "r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            # Fail closed: configuration must never silently ignore invalid YAML.
            raise ConfigError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
        except OSError as exc:
            raise ConfigError(f"Cannot read config file {path}: {exc}", context={"path": str(path)}) from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping", context={"path": str(path)})
        return data

    # ---- environment overrides ------------------------------------------

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        if value.strip().lower() in {"null", "none"}:
            return None
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            if "__" not in raw:
                continue
            segs = [seg.lower() for seg in raw.split("__")]
            if any(not seg for seg in segs):
                logger.warning("Ignoring malformed config override %s", key)
                continue
            if segs[0] == "paths":
                logger.debug("Skipping %s: path overrides are read by dsc.core.utils.paths", key)
                continue
            yield segs, self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur = root
        for part in path[:-1]:
            nxt = cur.get(part)
            if not isinstance(nxt, dict):
                nxt = {}
                cur[part] = nxt
            cur = nxt
        cur[path[-1]] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            logger.debug("Config override from environment: %s", ".".join(path))
            self._set_nested(cfg, path, typed_value)

    # ---- loading ----------------------------------------------------------

    def load(self) -> Dict[str, Any]:
        """Read and merge every layer; callers cache via ``get_cached_config``."""
        cfg = self.load_yaml(self.core_config_file)

        if self.config_file.exists():
            logger.debug("Loading user config from %s", self.config_file)
            cfg = self.deep_merge(cfg, self.load_yaml(self.config_file))
        elif self.explicit_file:
            raise ConfigError(
                f"Config file not found: {self.config_file}",
                context={"path": str(self.config_file)},
            )

        self.apply_env_overrides(cfg)
        return cfg


__all__ = ["ConfigManager", "ENV_PREFIX"]
