"""Turn markdown documents into tangle blocks."""
from __future__ import annotations

from pathlib import Path
from typing import Collection, Iterator, List, Optional

from mdtangle.core.utils.io import PathLike, read_text
from mdtangle.core.utils.text import iter_fenced_blocks

from .types import Block


def blocks_from_markdown(
    text: str,
    source: Optional[str] = None,
    languages: Optional[Collection[str]] = None,
) -> Iterator[Block]:
    """Yield a ``Block`` for every fenced code block in ``text``.

    Args:
        text: Markdown document text.
        source: Name used in log and error messages (usually the path).
        languages: When non-empty, only blocks whose language tag is listed
            are yielded.
    """
    for fenced in iter_fenced_blocks(text):
        if languages and fenced.language not in languages:
            continue
        yield Block(
            annotation=fenced.info,
            text=fenced.text,
            source=source,
            line=fenced.line,
            heading=fenced.heading,
        )


def read_blocks(path: PathLike, languages: Optional[Collection[str]] = None) -> List[Block]:
    """Read a markdown file and return its blocks in document order."""
    path = Path(path)
    return list(blocks_from_markdown(read_text(path), source=str(path), languages=languages))


__all__ = ["blocks_from_markdown", "read_blocks"]
