"""Output formatting shared by all dsc commands (text or JSON)."""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional

from dsc.core.exceptions import DscError


class OutputFormatter:
    """Render command results and errors.

    Results go to stdout, errors to stderr, so that ``$(dsc token)`` only
    ever captures the token.
    """

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def success(self, data: Dict[str, Any], message: str, *, status: str = "success") -> None:
        """Print ``message`` in text mode, or ``data`` with a status in JSON mode."""
        if self.json_mode:
            output = {"status": status, **data}
            print(json.dumps(output, indent=self.indent, default=str))
        else:
            print(message)

    def error(self, error: Exception, message: Optional[str] = None) -> None:
        """Print an error to stderr.

        ``DscError`` instances carry their own code and context into the JSON
        payload.
        """
        msg = message or str(error)
        if self.json_mode:
            if isinstance(error, DscError):
                output = error.to_json_error()
                output["message"] = msg
            else:
                output = {"message": msg, "code": error.__class__.__name__, "context": {}}
            print(json.dumps({"error": output}, indent=self.indent, default=str), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)


__all__ = ["OutputFormatter"]
