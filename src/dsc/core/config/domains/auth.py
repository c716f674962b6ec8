"""Domain-specific configuration for login defaults.

Controls which account and password source ``dsc login`` falls back to
when the command line does not name them.
"""
from __future__ import annotations

from functools import cached_property
from typing import Optional

from ..base import BaseDomainConfig


class AuthConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "auth"

    @cached_property
    def default_account(self) -> Optional[str]:
        return self._optional_str("default_account")

    @cached_property
    def pass_entry(self) -> Optional[str]:
        """Default entry for the password manager lookup."""
        return self._optional_str("pass_entry")

    @cached_property
    def default_password(self) -> Optional[str]:
        # Not stripped: leading/trailing whitespace may be part of a password.
        value = self.section.get("default_password")
        return str(value) if value else None

    @cached_property
    def remember_me(self) -> bool:
        return self._flag("remember_me")


__all__ = ["AuthConfig"]
