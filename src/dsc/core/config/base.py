"""Typed views onto one top-level section of the merged configuration."""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from dsc.core.exceptions import ConfigError

from .cache import get_cached_config


class BaseDomainConfig(ABC):
    """One config section exposed as cached, validated properties.

    Subclasses name their section and add a ``cached_property`` per key:

        class ClientConfig(BaseDomainConfig):
            def _config_section(self) -> str:
                return "client"

            @cached_property
            def timeout_seconds(self) -> float:
                return self._positive_float("timeout_seconds", 30)

    Pass ``config=`` to read from an already loaded mapping (tests, or the
    CLI after ``--config``); otherwise the cached user configuration is used.
    """

    def __init__(
        self,
        config_file: Optional[Path] = None,
        *,
        config: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Initialize domain config.

        Args:
            config_file: Explicit config file. Uses the user default if None.
            config: Already-loaded configuration; skips loading entirely.
        """
        self._config_file = config_file
        if config is not None:
            self._config = dict(config)
        else:
            self._config = get_cached_config(config_file)

    @abstractmethod
    def _config_section(self) -> str:
        """Return the top-level config key for this domain."""
        ...

    @cached_property
    def section(self) -> Dict[str, Any]:
        """Get this domain's configuration section.

        Returns:
            The section mapping; empty when absent or not a mapping.
        """
        value = self._config.get(self._config_section(), {})
        return value if isinstance(value, dict) else {}

    def _optional_str(self, key: str) -> Optional[str]:
        value = self.section.get(key)
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    def _positive_float(self, key: str, default: float) -> float:
        """Read a number of seconds; anything else is a ``ConfigError`` naming the key."""
        name = f"{self._config_section()}.{key}"
        value = self.section.get(key, default)
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            raise ConfigError(f"{name} must be a number (got {value!r})", context={"key": name})
        try:
            number = float(value)
        except ValueError as exc:
            raise ConfigError(f"{name} must be a number (got {value!r})", context={"key": name}) from exc
        if not number > 0:
            raise ConfigError(f"{name} must be positive (got {value!r})", context={"key": name})
        return number

    def _flag(self, key: str, default: bool = False) -> bool:
        name = f"{self._config_section()}.{key}"
        value = self.section.get(key, default)
        if value is None:
            return default
        if not isinstance(value, bool):
            raise ConfigError(f"{name} must be true or false (got {value!r})", context={"key": name})
        return value


__all__ = ["BaseDomainConfig"]
