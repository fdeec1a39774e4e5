from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Iterator

import pytest

TESTS_ROOT = Path(__file__).resolve().parent
SRC_ROOT = TESTS_ROOT.parent / "src"

# Make src/ importable as 'mdtangle' without an editable install.
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from mdtangle.core.config import clear_all_caches  # noqa: E402
from mdtangle.core.stdlib_logging import reset_stdlib_logging_for_tests  # noqa: E402
from mdtangle.core.tangle import Block  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_mdtangle(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop MDTANGLE_* env vars, config caches and installed log handlers."""
    for key in list(os.environ):
        if key.startswith("MDTANGLE_"):
            monkeypatch.delenv(key, raising=False)
    clear_all_caches()
    yield
    clear_all_caches()
    reset_stdlib_logging_for_tests()
    logging.getLogger("mdtangle").setLevel(logging.NOTSET)


@pytest.fixture
def mock_nodes() -> list[Block]:
    """Blocks for a greet program in index.js and a sum program in math.js."""
    return [
        Block("js", "// this is a code block\n<<#greet>>\n\ngreet()"),
        Block("js > #greet", "function greet() {\n  console.log('hello, world!')\n}"),
        Block(" > math.js", "function sum(a, b) {\n<<#sum-body>>\n}"),
        Block(" > math.js#sum-body", "  return a + b"),
        Block(" > math.js", "console.log(sum(2, 2))"),
    ]


@pytest.fixture
def write_config(tmp_path: Path):
    """Write ``<tmp_path>/.mdtangle/config/<name>`` and return its path."""

    def _write(name: str, content: str) -> Path:
        config_dir = tmp_path / ".mdtangle" / "config"
        config_dir.mkdir(parents=True, exist_ok=True)
        path = config_dir / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
