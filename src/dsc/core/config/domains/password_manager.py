"""Domain-specific configuration for the external password manager."""
from __future__ import annotations

from functools import cached_property
from typing import List

from dsc.core.exceptions import ConfigError

from ..base import BaseDomainConfig

DEFAULT_COMMAND = ["pass", "show"]


class PasswordManagerConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "password_manager"

    @cached_property
    def command(self) -> List[str]:
        """Command prefix; the entry name is appended as last argument."""
        raw = self.section.get("command", DEFAULT_COMMAND)
        if isinstance(raw, str):
            raw = raw.split()
        if not isinstance(raw, list) or not raw:
            raise ConfigError("password_manager.command must be a non-empty list")
        return [str(part) for part in raw]

    @cached_property
    def timeout_seconds(self) -> float:
        return self._positive_float("timeout_seconds", 10)


__all__ = ["PasswordManagerConfig", "DEFAULT_COMMAND"]
