"""Records exchanged between the document reader and the tangle engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Block:
    """A single code unit handed to the tangle engine.

    ``annotation`` is the raw annotation string (the fence info string for
    markdown), ``text`` is the raw payload. ``source``, ``line`` and
    ``heading`` (the closest markdown heading above the block) only feed
    log and error messages and the section listing.
    """

    annotation: Optional[str]
    text: str
    source: Optional[str] = None
    line: Optional[int] = None
    heading: Optional[str] = None

    def describe(self) -> str:
        if self.source and self.line:
            location = f"{self.source}:{self.line}"
        else:
            location = self.source or "<block>"
        if self.heading:
            return f"{location} under {self.heading!r}"
        return location


@dataclass(frozen=True)
class Annotation:
    """Destination of a block: target file and section."""

    filename: str
    section: str
    language: Optional[str] = None


@dataclass(frozen=True)
class AnnotatedBlock:
    """A block together with its destination and the sections it references."""

    filename: str
    section: str
    text: str
    child_sections: List[str] = field(default_factory=list)
    language: Optional[str] = None
    origin: str = "<block>"
    heading: Optional[str] = None


__all__ = ["Block", "Annotation", "AnnotatedBlock"]
