"""YAML I/O utilities."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def read_yaml(path: Path, default: Any = None, raise_on_error: bool = False) -> Any:
    """Read YAML with error handling.

    Returns default if file is missing or invalid, unless raise_on_error is True.

    Args:
        path: YAML file path to read
        default: Value to return if file missing or invalid (default: None)
        raise_on_error: If True, propagate exceptions instead of returning default.
    """
    path = Path(path)
    if not path.exists():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {path}")
        return default

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError:
        if raise_on_error:
            raise
        return default
    return data if data is not None else default


def parse_yaml_string(content: str, default: Any = None) -> Any:
    """Parse YAML from string, returning ``default`` on error or empty input."""
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError:
        return default
    return data if data is not None else default


def iter_yaml_files(dir_path: Path) -> list[Path]:
    """Return YAML files in ``dir_path`` in deterministic order.

    Includes both ``*.yml`` and ``*.yaml``. When both ``<name>.yaml`` and
    ``<name>.yml`` exist only the ``.yaml`` path is returned.
    """
    d = Path(dir_path)
    if not d.exists():
        return []
    yml_files = {p.stem: p for p in d.glob("*.yml")}
    yaml_files = {p.stem: p for p in d.glob("*.yaml")}

    out: list[Path] = []
    for stem in sorted(set(yml_files.keys()) | set(yaml_files.keys())):
        preferred = yaml_files.get(stem) or yml_files.get(stem)
        if preferred is not None:
            out.append(preferred)
    return out


__all__ = ["read_yaml", "parse_yaml_string", "iter_yaml_files"]
