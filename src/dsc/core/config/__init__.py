"""
dsc configuration package.

Layered YAML configuration (bundled defaults, user config file, DSC_*
environment overrides) with typed domain accessors.
"""
from __future__ import annotations

from .cache import clear_all_caches, get_cached_config
from .domains import (
    AuthConfig,
    ClientConfig,
    LoggingConfig,
    PasswordManagerConfig,
    SessionConfig,
)
from .manager import ConfigManager

__all__ = [
    "ConfigManager",
    "get_cached_config",
    "clear_all_caches",
    "AuthConfig",
    "ClientConfig",
    "LoggingConfig",
    "PasswordManagerConfig",
    "SessionConfig",
]
