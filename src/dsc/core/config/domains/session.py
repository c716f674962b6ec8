"""Domain-specific configuration for the on-disk session file."""
from __future__ import annotations

from functools import cached_property
from pathlib import Path

from ..base import BaseDomainConfig


class SessionConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "session"

    @cached_property
    def token_file(self) -> Path:
        """Location of ``dsc-token.json``; defaults to the user config dir."""
        from dsc.core.utils.paths import get_token_file

        raw = self._optional_str("token_file")
        if raw is None:
            return get_token_file()
        return Path(raw).expanduser()


__all__ = ["SessionConfig"]
