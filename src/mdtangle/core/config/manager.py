"""
mdtangle configuration management (YAML only).

Configuration sources (highest to lowest priority):
1. Environment variables: ``MDTANGLE_*``
2. Project config: ``<repo_root>/.mdtangle/config/*.yaml`` (alphabetical order)
3. Bundled defaults: ``mdtangle.data/config/*.yaml`` (alphabetical order)

Environment overrides:
- Path separator: double underscore ``__`` when present, else single ``_``
  (e.g. ``MDTANGLE_TANGLE__DEFAULT_FILENAME=main.py``).
- Case handling: case-insensitive lookup against existing keys.
- Type coercion: bool/int/float/JSON-like strings are coerced.
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import yaml

from mdtangle.core.exceptions import ConfigError
from mdtangle.core.schemas import SchemaValidationError, validate_payload
from mdtangle.core.utils.layered_yaml import merge_yaml_directory
from mdtangle.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "MDTANGLE_"
PROJECT_CONFIG_DIRNAME = ".mdtangle"
CONFIG_SCHEMA = "config.schema.yaml"


class ConfigManager:
    """Load, merge, and validate mdtangle configuration.

    Typical usage::

        mgr = ConfigManager(repo_root)
        cfg = mgr.load_config(validate=True)
        mgr.get("tangle.default_filename")
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root) if repo_root else Path.cwd()
        self.core_config_dir = get_data_path("config")
        self.project_config_dir = self.repo_root / PROJECT_CONFIG_DIRNAME / "config"

    # ========== Environment overrides ==========

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str, *, strict: bool) -> List[str]:
        if not raw:
            return []
        segs = raw.split("__") if "__" in raw else raw.split("_")
        processed: List[str] = []
        for seg in segs:
            if seg == "":
                if strict:
                    raise ConfigError(
                        f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.",
                        context={"key": f"{ENV_PREFIX}{raw}"},
                    )
                return []
            processed.append(seg.lower())
        return processed

    def _iter_env_overrides(self, *, strict: bool) -> Iterator[Tuple[List[str], Any, str]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            path = self._parse_env_key(raw, strict=strict)
            if not path:
                continue
            yield path, self._coerce_type(os.environ[key]), raw

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur: Dict[str, Any] = root
        for i, part in enumerate(path):
            key_candidates = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            use_key = key_candidates.get(part, part)
            if i == len(path) - 1:
                cur[use_key] = value
                return
            nxt = cur.get(use_key)
            if nxt is None:
                nxt = cur[use_key] = {}
            if not isinstance(nxt, dict):
                raise ConfigError(
                    f"Cannot override '{'.'.join(path)}': '{use_key}' is not a mapping",
                    context={"path": ".".join(path)},
                )
            cur = nxt

    def apply_env_overrides(self, cfg: Dict[str, Any], *, strict: bool) -> None:
        for path, typed_value, raw in self._iter_env_overrides(strict=strict):
            logger.debug("Applying env override %s%s", ENV_PREFIX, raw)
            self._set_nested(cfg, path, typed_value)

    # ========== Loading ==========

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        try:
            return merge_yaml_directory(cfg, directory)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            raise ConfigError(
                f"Failed to load configuration from {directory}: {exc}",
                context={"directory": str(directory)},
            ) from exc

    def _load_config_uncached(self, *, strict_env: bool) -> Dict[str, Any]:
        cfg: Dict[str, Any] = {}
        cfg = self._load_directory(self.core_config_dir, cfg)
        cfg = self._load_directory(self.project_config_dir, cfg)
        self.apply_env_overrides(cfg, strict=strict_env)
        return cfg

    def validate_schema(self, config: Dict[str, Any]) -> None:
        try:
            validate_payload(config, CONFIG_SCHEMA)
        except SchemaValidationError as exc:
            raise ConfigError(str(exc), context={"repo_root": str(self.repo_root)}) from exc

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load the merged configuration.

        ``validate=True`` parses env override keys strictly and validates the
        result against the bundled config schema.

        Raises:
            ConfigError: If a config file is invalid or validation fails.
        """
        cfg = self._load_config_uncached(strict_env=validate)
        if validate:
            self.validate_schema(cfg)
        return cfg

    # ========== Accessor Methods ==========

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value by dot-notation key.

        Example:
            >>> manager.get('tangle.default_filename')
            'index.js'
            >>> manager.get('nonexistent.key', 'fallback')
            'fallback'
        """
        current: Any = self.load_config(validate=False)
        for part in key.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current


__all__ = ["ConfigManager", "ENV_PREFIX", "PROJECT_CONFIG_DIRNAME"]
