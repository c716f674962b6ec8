"""Domain-specific configuration for dsc's own log output."""

from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import Optional

from ..base import BaseDomainConfig


class LoggingConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "logging"

    @cached_property
    def level(self) -> str:
        return str(self.section.get("level") or "WARNING").upper()

    @cached_property
    def file(self) -> Optional[Path]:
        """Log file path; None logs to stderr."""
        raw = self._optional_str("file")
        return Path(raw).expanduser() if raw else None


__all__ = ["LoggingConfig"]
