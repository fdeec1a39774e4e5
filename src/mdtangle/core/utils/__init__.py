"""Utility helpers for mdtangle core.

- io/: File I/O operations (atomic writes, YAML)
- text/: Markdown fenced-block reading
- merge: Deep merge used by configuration layering
"""
from __future__ import annotations

from .io import (
    PathLike,
    atomic_write,
    ensure_directory,
    ensure_parent_dir,
    iter_yaml_files,
    parse_yaml_string,
    read_text,
    read_yaml,
    write_text,
)
from .merge import deep_merge, merge_arrays

__all__ = [
    "PathLike",
    "atomic_write",
    "ensure_directory",
    "ensure_parent_dir",
    "iter_yaml_files",
    "parse_yaml_string",
    "read_text",
    "read_yaml",
    "write_text",
    "deep_merge",
    "merge_arrays",
]
