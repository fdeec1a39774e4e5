"""Section reference markers.

A block splices another section of the same file with a ``<<name>>``
marker, e.g. ``<<#greet>>`` or ``<<greet>>``. The name follows the same
normalization as annotation section names. Markers are left in the stored
text and replaced only at render time.

Any ``<<token>>`` without inner whitespace is a marker, including shift
operators written without spaces (``a<<b>>c``, ``cat<<EOF>>log``); such a
block fails to render with ``MissingSectionError``. Write shifts with spaces
(``a << b >> c``) inside tangled blocks.
"""
from __future__ import annotations

import re
from typing import Callable, List

from .annotations import DEFAULT_FILENAME, normalize_section_name, parse_annotation
from .types import AnnotatedBlock, Block

# Pattern: <<section-name>>
REFERENCE_PATTERN = re.compile(r"<<([^\s<>]+)>>")


def find_references(text: str) -> List[str]:
    """Return referenced section names in first-occurrence order, without duplicates."""
    names: List[str] = []
    for match in REFERENCE_PATTERN.finditer(text):
        name = normalize_section_name(match.group(1))
        if name not in names:
            names.append(name)
    return names


def substitute_references(text: str, resolve: Callable[[str], str]) -> str:
    """Replace every marker in ``text`` with ``resolve(section_name)``.

    Text around the markers is preserved exactly.
    """

    def replacer(match: re.Match[str]) -> str:
        return resolve(normalize_section_name(match.group(1)))

    return REFERENCE_PATTERN.sub(replacer, text)


def scan_block(block: Block, default_filename: str = DEFAULT_FILENAME) -> AnnotatedBlock:
    """Resolve a block's destination and the sections its text references."""
    annotation = parse_annotation(block.annotation, default_filename=default_filename)
    return AnnotatedBlock(
        filename=annotation.filename,
        section=annotation.section,
        text=block.text,
        child_sections=find_references(block.text),
        language=annotation.language,
        origin=block.describe(),
        heading=block.heading,
    )


__all__ = [
    "REFERENCE_PATTERN",
    "find_references",
    "substitute_references",
    "scan_block",
]
