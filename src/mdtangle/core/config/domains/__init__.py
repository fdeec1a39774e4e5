"""Domain-specific configuration accessors."""
from __future__ import annotations

from .logging import LoggingConfig
from .tangle import TangleConfig

__all__ = ["LoggingConfig", "TangleConfig"]
