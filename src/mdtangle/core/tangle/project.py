"""Tangle markdown documents into files on disk.

``TangleProject`` wires the document reader, the ``CodeStore`` and the
file writer together:

    project = TangleProject.from_config(repo_root)
    project.load(["README.md"])
    outputs = project.write()
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Sequence

from mdtangle.core.exceptions import TangleError
from mdtangle.core.utils.io import PathLike, write_text

from .annotations import DEFAULT_FILENAME
from .documents import read_blocks
from .store import CodeStore

if TYPE_CHECKING:
    from mdtangle.core.config.domains import TangleConfig

logger = logging.getLogger(__name__)


@dataclass
class TangleOutput:
    """Rendered text of one code file and where it goes."""

    filename: str
    path: Path
    text: str
    changed: bool = True
    written: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filename": self.filename,
            "path": str(self.path),
            "changed": self.changed,
            "written": self.written,
            "bytes": len(self.text.encode("utf-8")),
        }


class TangleProject:
    """Tangle a set of markdown documents relative to ``repo_root``."""

    def __init__(
        self,
        repo_root: Path,
        *,
        default_filename: str = DEFAULT_FILENAME,
        auto_create_files: bool = True,
        output_dir: PathLike = ".",
        trailing_newline: bool = True,
        languages: Optional[Sequence[str]] = None,
    ) -> None:
        self.repo_root = Path(repo_root)
        self.output_dir = self.repo_root / Path(output_dir)
        self.trailing_newline = trailing_newline
        self.languages = list(languages or [])
        self.documents: List[Path] = []
        self.store = CodeStore(default_filename, auto_create_files=auto_create_files)

    @classmethod
    def from_config(
        cls,
        repo_root: Path,
        config: Optional["TangleConfig"] = None,
        **overrides: Any,
    ) -> "TangleProject":
        """Build a project from the ``tangle`` config section.

        Keyword ``overrides`` whose value is not None take precedence over config.
        """
        if config is None:
            from mdtangle.core.config.domains import TangleConfig

            config = TangleConfig(repo_root=repo_root)

        options: Dict[str, Any] = {
            "default_filename": config.default_filename,
            "auto_create_files": config.auto_create_files,
            "output_dir": config.output_dir,
            "trailing_newline": config.trailing_newline,
            "languages": config.languages,
        }
        options.update({k: v for k, v in overrides.items() if v is not None})
        return cls(repo_root, **options)

    def register_files(self, names: Iterable[str]) -> None:
        """Register target files up front (needed when auto-creation is off)."""
        for name in names:
            self.store.add_code_file(name)

    def load(self, documents: Iterable[PathLike]) -> int:
        """Ingest every fenced block of ``documents``; return the block count."""
        total = 0
        for document in documents:
            path = Path(document)
            if not path.is_absolute():
                path = self.repo_root / path
            blocks = read_blocks(path, languages=self.languages)
            count = self.store.add_nodes(blocks)
            self.documents.append(path)
            logger.info("Loaded %d block(s) from %s", count, path)
            total += count
        return total

    def resolve_output_path(self, filename: str) -> Path:
        """Return the output path for ``filename`` inside ``output_dir``.

        Raises:
            TangleError: If the filename points outside the output directory.
        """
        root = self.output_dir.resolve()
        target = (root / filename).resolve()
        if not target.is_relative_to(root):
            raise TangleError(
                f"Tangled file '{filename}' escapes the output directory {root}",
                context={"filename": filename, "output_dir": str(root)},
            )
        return target

    def _finalize(self, text: str) -> str:
        if self.trailing_newline:
            return text.rstrip() + "\n" if text.strip() else ""
        return text

    def render(self) -> List[TangleOutput]:
        """Render every file in the store; nothing is written."""
        outputs: List[TangleOutput] = []
        for filename, text in self.store.generate_all().items():
            path = self.resolve_output_path(filename)
            text = self._finalize(text)
            changed = not path.exists() or path.read_text(encoding="utf-8") != text
            outputs.append(TangleOutput(filename=filename, path=path, text=text, changed=changed))
        return outputs

    def write(self, *, dry_run: bool = False) -> List[TangleOutput]:
        """Render every file and write the ones whose content changed.

        All files are rendered before any is written, so a tangle error
        leaves the output directory untouched.
        """
        outputs = self.render()
        for output in outputs:
            if dry_run or not output.changed:
                continue
            write_text(output.path, output.text)
            output.written = True
            logger.info("Wrote %s", output.path)
        return outputs


__all__ = ["TangleOutput", "TangleProject"]
