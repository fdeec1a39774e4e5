"""Centralized configuration caching.

Provides a single source of truth for loaded configuration across all domain
configs. Cache keys fingerprint ``MDTANGLE_*`` environment variables and the
project config files, so edits made after a first load are picked up.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Dict, Optional

from mdtangle.core.utils.io import iter_yaml_files

_config_cache: Dict[str, Dict[str, Any]] = {}


def _normalize_repo_root(repo_root: Optional[Path]) -> Path:
    if repo_root is None:
        return Path.cwd().resolve()
    return Path(repo_root).expanduser().resolve()


def _cache_key(repo_root: Path) -> str:
    from .manager import ENV_PREFIX, PROJECT_CONFIG_DIRNAME

    env_items = sorted(
        (k, os.environ.get(k, ""))
        for k in os.environ.keys()
        if k.startswith(ENV_PREFIX)
    )
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]

    files = []
    for p in iter_yaml_files(repo_root / PROJECT_CONFIG_DIRNAME / "config"):
        st = p.stat()
        files.append((p.name, int(st.st_mtime_ns), int(st.st_size)))
    cfg_fp = hashlib.sha256(repr(files).encode("utf-8")).hexdigest()[:12]

    return f"{repo_root}:env={env_fp}:cfg={cfg_fp}"


def get_cached_config(repo_root: Optional[Path] = None, validate: bool = False) -> Dict[str, Any]:
    """Get configuration with caching.

    Returns the same config dict instance while the project config and
    environment are unchanged. Treat the result as immutable.
    """
    from .manager import ConfigManager

    normalized_root = _normalize_repo_root(repo_root)
    key = _cache_key(normalized_root)
    manager = ConfigManager(repo_root=normalized_root)
    if key not in _config_cache:
        _config_cache[key] = manager.load_config(validate=validate)
    elif validate:
        manager.validate_schema(_config_cache[key])
    return _config_cache[key]


def clear_all_caches() -> None:
    """Clear the configuration cache."""
    _config_cache.clear()


def is_cached(repo_root: Optional[Path] = None) -> bool:
    return _cache_key(_normalize_repo_root(repo_root)) in _config_cache


__all__ = ["get_cached_config", "clear_all_caches", "is_cached"]
