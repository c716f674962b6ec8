"""HTTP access to the Docspell server."""
from __future__ import annotations

from .client import AUTH_HEADER, DocspellClient

__all__ = ["AUTH_HEADER", "DocspellClient"]
