"""Unified CLI output formatting utilities.

Consistent output formatting for all mdtangle CLI commands, supporting
both JSON and text output modes.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional

from mdtangle.core.exceptions import TangleError


class OutputFormatter:
    """Unified output formatter for CLI commands."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def error(
        self,
        error: Exception,
        message: Optional[str] = None,
        *,
        error_code: str = "error",
    ) -> None:
        """Output error result to stderr.

        In JSON mode a ``TangleError`` adds its class name as ``code`` and
        its ``context``.
        """
        msg = message or str(error)
        if self.json_mode:
            output: Dict[str, Any] = {
                "error": error_code,
                "message": msg,
            }
            if isinstance(error, TangleError):
                payload = error.to_json_error()
                output["code"] = payload["code"]
                output["context"] = payload["context"]
            print(json.dumps(output, indent=self.indent, default=str), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)

    def json_output(self, data: Any) -> None:
        print(json.dumps(data, indent=self.indent, default=str))

    def text(self, message: str) -> None:
        print(message)


__all__ = ["OutputFormatter"]
