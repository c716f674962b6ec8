"""dsc command-line interface."""
from __future__ import annotations

from ._args import add_json_flag
from ._output import OutputFormatter

__all__ = ["OutputFormatter", "add_json_flag"]
