"""User configuration path resolution.

This module centralizes detection of the per-user dsc configuration
directory, which holds ``config.yaml`` and the session file.

Precedence (highest to lowest):
1. Environment variable: DSC_paths__config_dir
2. Platform config directory + ``dsc``:
   - Linux/BSD: ``$XDG_CONFIG_HOME`` or ``~/.config``
   - macOS: ``~/Library/Application Support``
   - Windows: ``%APPDATA%``

Relative override values are resolved against the user's home directory.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

APP_DIR_NAME = "dsc"
CONFIG_DIR_ENV = "DSC_paths__config_dir"
CONFIG_FILENAME = "config.yaml"
TOKEN_FILENAME = "dsc-token.json"


def _platform_config_home() -> Path:
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata)
        return Path.home() / "AppData" / "Roaming"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    xdg = os.environ.get("XDG_CONFIG_HOME", "").strip()
    if xdg and Path(xdg).is_absolute():
        return Path(xdg)
    return Path.home() / ".config"


def get_user_config_dir() -> Path:
    """Return the absolute dsc user config directory (not created here)."""
    override = os.environ.get(CONFIG_DIR_ENV, "").strip()
    if override:
        p = Path(override).expanduser()
        if not p.is_absolute():
            p = Path.home() / p
    else:
        p = _platform_config_home() / APP_DIR_NAME

    return p.resolve()


def get_user_config_file() -> Path:
    """Return the default location of the user's ``config.yaml``."""
    return get_user_config_dir() / CONFIG_FILENAME


def get_token_file() -> Path:
    """Return the default location of the session file."""
    return get_user_config_dir() / TOKEN_FILENAME


__all__ = [
    "APP_DIR_NAME",
    "CONFIG_DIR_ENV",
    "CONFIG_FILENAME",
    "TOKEN_FILENAME",
    "get_user_config_dir",
    "get_user_config_file",
    "get_token_file",
]
