"""Core I/O utilities for mdtangle.

Single source of truth for file access used when reading documents and
writing tangled output:
- Atomic writes with fsync and advisory locks
- Text file read/write operations
- Directory management utilities
"""
from __future__ import annotations

import fcntl
import os
import tempfile
from pathlib import Path
from typing import Callable, Optional, TextIO, Union

PathLike = Union[str, Path]


def ensure_parent_dir(path: Path) -> None:
    """Ensure the parent directory for ``path`` exists."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def ensure_directory(path: Path, create: bool = True) -> Path:
    """Ensure directory exists.

    Args:
        path: Directory path to check/create
        create: If True, create directory if missing; if False, raise if missing

    Returns:
        Path: The directory path (guaranteed to exist if create=True)

    Raises:
        FileNotFoundError: If create=False and directory doesn't exist
        NotADirectoryError: If path exists but is not a directory
    """
    path = Path(path)

    if path.exists():
        if not path.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {path}")
        return path

    if create:
        path.mkdir(parents=True, exist_ok=True)
        return path
    raise FileNotFoundError(f"Directory does not exist: {path}")


def atomic_write(
    path: Path,
    write_fn: Callable[[TextIO], None],
    *,
    encoding: str = "utf-8",
) -> None:
    """Write to ``path`` atomically using a temp file + fsync + rename.

    - Parent directory is created if missing
    - Data is written to a temporary file in the same directory
    - File is fsync'd, unlocked, then atomically replaced
    - Any leftover temp file is cleaned up on failure

    Args:
        path: Target file path
        write_fn: Callable that writes content to the file object
        encoding: Text encoding (default: utf-8)
    """
    path = Path(path)
    ensure_parent_dir(path)

    tmp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding=encoding,
            dir=str(path.parent),
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)

        os.replace(str(tmp_path), str(path))
    finally:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()


def read_text(path: PathLike) -> str:
    """Read a UTF-8 text file.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Text file not found: {path}")
    return path.read_text(encoding="utf-8")


def write_text(path: PathLike, content: str) -> None:
    """Atomically write UTF-8 text to ``path``."""
    target = Path(path)

    def _writer(f: TextIO) -> None:
        f.write(content)

    atomic_write(target, _writer)


__all__ = [
    "PathLike",
    "ensure_parent_dir",
    "ensure_directory",
    "atomic_write",
    "read_text",
    "write_text",
]
