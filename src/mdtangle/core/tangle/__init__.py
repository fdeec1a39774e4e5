"""Tangle engine: annotated blocks in, complete source files out.

- annotations: ``<lang> > <filename>#<section>`` parsing
- references: ``<<section>>`` marker detection and substitution
- store: CodeStore / CodeFile / CodeSection registry
- renderer: recursive section expansion with cycle detection
- documents: markdown documents to blocks
- project: documents to files on disk
"""
from __future__ import annotations

from .annotations import (
    DEFAULT_FILENAME,
    ROOT_SECTION,
    normalize_section_name,
    parse_annotation,
)
from .documents import blocks_from_markdown, read_blocks
from .project import TangleOutput, TangleProject
from .references import REFERENCE_PATTERN, find_references, scan_block, substitute_references
from .renderer import TangleRenderer, join_chunks
from .store import CodeFile, CodeSection, CodeStore
from .types import AnnotatedBlock, Annotation, Block

__all__ = [
    # Types
    "Block",
    "Annotation",
    "AnnotatedBlock",
    # Annotations
    "DEFAULT_FILENAME",
    "ROOT_SECTION",
    "normalize_section_name",
    "parse_annotation",
    # References
    "REFERENCE_PATTERN",
    "find_references",
    "substitute_references",
    "scan_block",
    # Registry and rendering
    "CodeFile",
    "CodeSection",
    "CodeStore",
    "TangleRenderer",
    "join_chunks",
    # Documents
    "blocks_from_markdown",
    "read_blocks",
    "TangleOutput",
    "TangleProject",
]
