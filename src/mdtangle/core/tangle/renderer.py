"""Recursive expansion of code sections into file text."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence, Tuple

from mdtangle.core.exceptions import CycleError, MissingFileError, MissingSectionError

from .references import substitute_references

if TYPE_CHECKING:
    from .store import CodeFile, CodeSection, CodeStore

logger = logging.getLogger(__name__)


def join_chunks(chunks: Sequence[str]) -> str:
    """Concatenate chunks, ending each non-empty chunk's last line before the next.

    Example:
        >>> join_chunks(["a {", "}\\n", "b"])
        'a {\\n}\\nb'
    """
    parts = []
    last = len(chunks) - 1
    for i, chunk in enumerate(chunks):
        parts.append(chunk)
        if i < last and chunk and not chunk.endswith("\n"):
            parts.append("\n")
    return "".join(parts)


class TangleRenderer:
    """Render code files held by a ``CodeStore``.

    Rendering is read-only and starts from scratch on every call.
    """

    def __init__(self, store: "CodeStore") -> None:
        self.store = store

    def _get_file(self, filename: str) -> "CodeFile":
        codefile = self.store.find_code_file_by_name(filename)
        if codefile is None:
            raise MissingFileError(
                f"Code file '{filename}' not found",
                context={"filename": filename},
            )
        return codefile

    def generate_source(self, filename: str) -> str:
        codefile = self._get_file(filename)
        if not codefile.root.blocks:
            logger.warning("Root section of %s is empty; generated text will be empty", filename)
        text = self.render(codefile.root)
        logger.debug("Rendered %s (%d characters)", filename, len(text))
        return text

    def render_section(self, filename: str, section_name: str) -> str:
        codefile = self._get_file(filename)
        section = codefile.find_code_section_by_name(section_name)
        if section is None:
            raise MissingSectionError(
                f"Section '{section_name}' not found in '{filename}'",
                filename=filename,
                section=section_name,
            )
        return self.render(section)

    def render(self, section: "CodeSection", chain: Tuple[str, ...] = ()) -> str:
        """Render ``section`` with every reference marker expanded.

        Args:
            section: Section to render.
            chain: Names of the sections currently being rendered, outermost first.

        Raises:
            CycleError: If ``section`` is already in ``chain``.
            MissingSectionError: If a referenced section does not exist.
        """
        filename = section.file.name
        if section.name in chain:
            cycle = [*chain, section.name]
            raise CycleError(
                f"Circular section reference in '{filename}': {' -> '.join(cycle)}",
                filename=filename,
                chain=cycle,
            )

        nested = (*chain, section.name)

        def resolve(name: str) -> str:
            child = section.file.find_code_section_by_name(name)
            if child is None:
                raise MissingSectionError(
                    f"Section '{name}' referenced from '{section.name}' in '{filename}' has no blocks",
                    filename=filename,
                    section=name,
                    referenced_from=section.name,
                )
            return self.render(child, nested)

        return join_chunks([substitute_references(chunk, resolve) for chunk in section.blocks])


__all__ = ["TangleRenderer", "join_chunks"]
