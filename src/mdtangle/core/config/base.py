"""Base class for domain-specific configuration accessors.

Provides a standardized pattern for domain configs with:
- Centralized caching via cache.py
- Consistent repo_root handling
- Section access by top-level key
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Optional

from .cache import get_cached_config


class BaseDomainConfig(ABC):
    """Abstract base class for domain-specific configuration accessors.

    Usage:
        class MyConfig(BaseDomainConfig):
            def _config_section(self) -> str:
                return "mySection"

            @cached_property
            def my_setting(self) -> str:
                return self.section.get("mySetting", "default")
    """

    def __init__(self, repo_root: Optional[Path] = None, *, validate: bool = True) -> None:
        self._repo_root = repo_root
        self._config = get_cached_config(repo_root=repo_root, validate=validate)

    @property
    def repo_root(self) -> Path:
        """The explicitly provided repo_root, or the current directory."""
        if self._repo_root:
            return self._repo_root
        return Path.cwd()

    @abstractmethod
    def _config_section(self) -> str:
        """Return the top-level config key for this domain."""
        ...

    @cached_property
    def section(self) -> Dict[str, Any]:
        """This domain's configuration section, or an empty dict."""
        return self._config.get(self._config_section(), {}) or {}


__all__ = ["BaseDomainConfig"]
