"""I/O utilities for mdtangle.

- Core: atomic writes, directory management, text I/O
- YAML: read and iterate configuration files
"""
from __future__ import annotations

from .core import (
    PathLike,
    atomic_write,
    ensure_directory,
    ensure_parent_dir,
    read_text,
    write_text,
)
from .yaml import (
    iter_yaml_files,
    parse_yaml_string,
    read_yaml,
)

__all__ = [
    # core
    "PathLike",
    "ensure_parent_dir",
    "ensure_directory",
    "atomic_write",
    "read_text",
    "write_text",
    # yaml
    "read_yaml",
    "parse_yaml_string",
    "iter_yaml_files",
]
