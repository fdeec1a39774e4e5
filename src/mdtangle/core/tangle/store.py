"""Registry of code files and their sections.

A ``CodeStore`` owns ``CodeFile`` entries keyed by name, in creation order.
Each ``CodeFile`` owns ``CodeSection`` entries keyed by name; the ``root``
section exists from the moment the file is created. Sections refer to each
other only by name and are resolved when a file is rendered.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from mdtangle.core.exceptions import DuplicateFileError, DuplicateSectionError, MissingFileError

from .annotations import DEFAULT_FILENAME, ROOT_SECTION
from .references import scan_block
from .renderer import TangleRenderer
from .types import AnnotatedBlock, Block

logger = logging.getLogger(__name__)


class CodeSection:
    """A named fragment of a code file.

    Attributes:
        name: ``"root"`` or a ``#``-prefixed section name.
        file: The owning ``CodeFile``.
        blocks: Raw text chunks, one per ingested block, in ingestion order.
        children: Distinct section names referenced from ``blocks``, in
            order of first appearance.
        headings: Distinct markdown headings the blocks were written under,
            in order of first appearance.
    """

    def __init__(self, name: str, file: "CodeFile") -> None:
        self.name = name
        self.file = file
        self.blocks: List[str] = []
        self.children: List[str] = []
        self.headings: List[str] = []

    @property
    def is_root(self) -> bool:
        return self.name == ROOT_SECTION

    def add_block(
        self,
        text: str,
        child_sections: Iterable[str] = (),
        heading: Optional[str] = None,
    ) -> None:
        self.blocks.append(text)
        if heading and heading not in self.headings:
            self.headings.append(heading)
        for name in child_sections:
            self.add_child(name)

    def add_child(self, name: str) -> None:
        if name not in self.children:
            self.children.append(name)

    def __repr__(self) -> str:
        return (
            f"CodeSection(name={self.name!r}, file={self.file.name!r}, "
            f"blocks={len(self.blocks)}, children={self.children!r})"
        )


class CodeFile:
    """One output source file made of named sections."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._sections: Dict[str, CodeSection] = {}
        self.add_code_section(ROOT_SECTION)

    @property
    def codesections(self) -> List[CodeSection]:
        """Sections in creation order, ``root`` first."""
        return list(self._sections.values())

    @property
    def root(self) -> CodeSection:
        return self._sections[ROOT_SECTION]

    def find_code_section_by_name(self, name: str) -> Optional[CodeSection]:
        return self._sections.get(name)

    def add_code_section(self, name: str) -> CodeSection:
        if name in self._sections:
            raise DuplicateSectionError(
                f"Section '{name}' already exists in '{self.name}'",
                context={"filename": self.name, "section": name},
            )
        section = CodeSection(name, self)
        self._sections[name] = section
        return section

    def get_or_add_code_section(self, name: str) -> CodeSection:
        section = self._sections.get(name)
        if section is None:
            section = self.add_code_section(name)
        return section

    def __repr__(self) -> str:
        return f"CodeFile(name={self.name!r}, sections={list(self._sections)!r})"


class CodeStore:
    """Collects annotated blocks and tangles them into source files.

    Example:
        store = CodeStore()
        store.add_node(Block("js", "<<#greet>>\\ngreet()"))
        store.add_node(Block("js > #greet", "function greet() {}"))
        store.generate_source("index.js")

    Args:
        default_filename: Target file for blocks whose annotation names none.
        auto_create_files: When False, ``add_node`` only accepts blocks for
            files registered with ``add_code_file``.
    """

    def __init__(
        self,
        default_filename: str = DEFAULT_FILENAME,
        *,
        auto_create_files: bool = True,
    ) -> None:
        self.default_filename = default_filename
        self.auto_create_files = auto_create_files
        self._files: Dict[str, CodeFile] = {}

    @property
    def codefiles(self) -> List[CodeFile]:
        """Files in creation order."""
        return list(self._files.values())

    def add_code_file(self, name: Optional[str] = None) -> CodeFile:
        """Register a new code file, defaulting to ``default_filename``.

        Raises:
            DuplicateFileError: If a file with the same name exists.
        """
        name = name or self.default_filename
        if name in self._files:
            raise DuplicateFileError(
                f"Code file '{name}' already exists",
                context={"filename": name},
            )
        codefile = CodeFile(name)
        self._files[name] = codefile
        logger.debug("Registered code file %s", name)
        return codefile

    def find_code_file_by_name(self, name: str) -> Optional[CodeFile]:
        return self._files.get(name)

    def scan_block(self, block: Block) -> AnnotatedBlock:
        """Resolve a block's destination without ingesting it."""
        return scan_block(block, default_filename=self.default_filename)

    def add_node(self, block: Block) -> AnnotatedBlock:
        """Ingest a block into the section its annotation names.

        Files and sections are created on first use. The block text is
        appended to the section as is; the sections it references are
        recorded on the section by name.

        Raises:
            FormatError: If the block annotation is malformed.
            MissingFileError: If the target file is unknown and
                ``auto_create_files`` is disabled.
        """
        annotated = self.scan_block(block)

        codefile = self._files.get(annotated.filename)
        if codefile is None:
            if not self.auto_create_files:
                raise MissingFileError(
                    f"Block at {annotated.origin} targets unregistered file '{annotated.filename}'",
                    context={"filename": annotated.filename, "origin": annotated.origin},
                )
            codefile = self.add_code_file(annotated.filename)

        section = codefile.get_or_add_code_section(annotated.section)
        section.add_block(annotated.text, annotated.child_sections, annotated.heading)
        logger.debug(
            "Added block %s to %s%s (references: %s)",
            annotated.origin,
            codefile.name,
            "" if section.is_root else section.name,
            ", ".join(annotated.child_sections) or "none",
        )
        return annotated

    def add_nodes(self, blocks: Iterable[Block]) -> int:
        """Ingest ``blocks`` in order and return how many were added."""
        count = 0
        for block in blocks:
            self.add_node(block)
            count += 1
        return count

    def generate_source(self, filename: str) -> str:
        """Render the complete text of ``filename``.

        Raises:
            MissingFileError: If no such file exists.
            MissingSectionError: If a referenced section never received a block.
            CycleError: If a section references itself, directly or not.
        """
        return TangleRenderer(self).generate_source(filename)

    def render_section(self, filename: str, section: str) -> str:
        """Render one section of ``filename`` with its references expanded."""
        return TangleRenderer(self).render_section(filename, section)

    def generate_all(self) -> Dict[str, str]:
        """Render every file, keyed by filename, in creation order."""
        renderer = TangleRenderer(self)
        return {codefile.name: renderer.generate_source(codefile.name) for codefile in self.codefiles}


__all__ = ["CodeSection", "CodeFile", "CodeStore"]
