"""Domain-specific configuration accessors."""
from __future__ import annotations

from .auth import AuthConfig
from .client import ClientConfig
from .logging import LoggingConfig
from .password_manager import PasswordManagerConfig
from .session import SessionConfig

__all__ = [
    "AuthConfig",
    "ClientConfig",
    "LoggingConfig",
    "PasswordManagerConfig",
    "SessionConfig",
]
