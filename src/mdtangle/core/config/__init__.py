"""mdtangle configuration system.

Usage:
    from mdtangle.core.config import ConfigManager, TangleConfig

    manager = ConfigManager(repo_root=Path("/path/to/project"))
    config = manager.load_config()

    tangle = TangleConfig(repo_root=Path("/path/to/project"))
    tangle.default_filename
"""
from __future__ import annotations

from .base import BaseDomainConfig
from .cache import clear_all_caches, get_cached_config, is_cached
from .domains import LoggingConfig, TangleConfig
from .manager import ConfigManager

__all__ = [
    "ConfigManager",
    "BaseDomainConfig",
    "get_cached_config",
    "clear_all_caches",
    "is_cached",
    "LoggingConfig",
    "TangleConfig",
]
