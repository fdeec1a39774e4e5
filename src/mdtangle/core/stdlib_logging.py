"""Process-wide stdlib logging setup for the mdtangle CLI."""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from mdtangle.core.utils.io import ensure_directory

_CONFIGURED_TARGET: str | None = None
_MDTANGLE_HANDLER: logging.Handler | None = None
_JSON_MODE_NULL_HANDLER_INSTALLED: bool = False

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
STDERR_FORMAT = "%(levelname)s: %(message)s"


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_stdlib_logging(*, level: str = "WARNING", log_path: Optional[Path] = None) -> None:
    """Install one handler on the ``mdtangle`` logger.

    Writes to ``log_path`` when given, otherwise to stderr. Idempotent
    per-process for the same target; switching targets replaces the handler.
    """
    global _CONFIGURED_TARGET, _MDTANGLE_HANDLER

    target = str(Path(log_path).resolve()) if log_path else "<stderr>"
    logger = logging.getLogger("mdtangle")
    logger.setLevel(_level_from_name(level))

    if _CONFIGURED_TARGET == target and _MDTANGLE_HANDLER is not None:
        _MDTANGLE_HANDLER.setLevel(_level_from_name(level))
        return

    if _MDTANGLE_HANDLER is not None:
        logger.removeHandler(_MDTANGLE_HANDLER)
        _MDTANGLE_HANDLER.close()
        _MDTANGLE_HANDLER = None

    handler: logging.Handler
    if log_path:
        ensure_directory(Path(target).parent)
        handler = logging.FileHandler(target, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(STDERR_FORMAT))
    handler.setLevel(_level_from_name(level))
    logger.addHandler(handler)

    _MDTANGLE_HANDLER = handler
    _CONFIGURED_TARGET = target


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the handler installed by ``configure_stdlib_logging``."""
    global _CONFIGURED_TARGET, _MDTANGLE_HANDLER
    if _MDTANGLE_HANDLER is not None:
        logging.getLogger("mdtangle").removeHandler(_MDTANGLE_HANDLER)
        _MDTANGLE_HANDLER.close()
    _CONFIGURED_TARGET = None
    _MDTANGLE_HANDLER = None


def suppress_lastresort_in_json_mode() -> None:
    """Prevent stdlib logging's lastResort handler from polluting JSON output.

    Python's logging module emits WARNING+ records to stderr via the implicit
    ``lastResort`` handler when no handlers are configured. Ensure the root
    logger has at least a NullHandler in that case.
    """
    global _JSON_MODE_NULL_HANDLER_INSTALLED

    root = logging.getLogger()
    if root.handlers or _JSON_MODE_NULL_HANDLER_INSTALLED:
        return
    root.addHandler(logging.NullHandler())
    _JSON_MODE_NULL_HANDLER_INSTALLED = True


__all__ = ["configure_stdlib_logging", "reset_stdlib_logging_for_tests", "suppress_lastresort_in_json_mode"]
