"""Helpers shared by command modules."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict, Optional

from dsc.core.config import get_cached_config
from dsc.core.session import SessionManager


def load_config(args: argparse.Namespace) -> Dict[str, Any]:
    """Load the configuration selected by the global ``--config`` option."""
    config_file = getattr(args, "config_file", None)
    return get_cached_config(Path(config_file).expanduser() if config_file else None)


def session_manager(args: argparse.Namespace) -> SessionManager:
    """Build a ``SessionManager`` honouring the global options."""
    base_url: Optional[str] = getattr(args, "docspell_url", None)
    return SessionManager.from_config(load_config(args), base_url=base_url)


__all__ = ["load_config", "session_manager"]
