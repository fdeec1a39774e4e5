"""Markdown utilities for fenced code blocks.

Only the parts of CommonMark needed to find code are recognised:

- Fences open with three or more backticks or tildes, indented by at most
  three spaces, optionally followed by an info string.
- A fence closes on a line holding the same fence character repeated at
  least as many times as the opening fence, and nothing but whitespace.
- A fence left open runs to the end of the document.
- The fence indentation is removed from each content line.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional

OPEN_FENCE = re.compile(r"^( {0,3})(`{3,}|~{3,})(.*)$")
CLOSE_FENCE = re.compile(r"^ {0,3}(`{3,}|~{3,})[ \t]*$")
HEADING = re.compile(r"^ {0,3}#{1,6}(?:[ \t]+(.*?))?(?:[ \t]+#+)?[ \t]*$")
# CommonMark line endings only; \f, \x85 and U+2028 stay inside the line.
LINE_ENDING = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class FencedBlock:
    """A fenced code block found in a markdown document."""

    info: Optional[str]
    text: str
    line: int  # 1-based line of the opening fence
    heading: Optional[str] = None

    @property
    def language(self) -> Optional[str]:
        if not self.info:
            return None
        return self.info.split()[0]


def _strip_indent(line: str, width: int) -> str:
    removed = 0
    while removed < width and line[removed : removed + 1] == " ":
        removed += 1
    return line[removed:]


def parse_title(line: str) -> Optional[str]:
    """Parse a title from an ATX heading line of any level.

    Example:
        >>> parse_title("## Greeting")
        'Greeting'
        >>> parse_title("Regular text") is None
        True
    """
    match = HEADING.match(line)
    if match is None:
        return None
    return (match.group(1) or "").strip()


def iter_fenced_blocks(text: str) -> Iterator[FencedBlock]:
    """Yield the fenced code blocks of ``text`` in document order.

    The block payload excludes the fence lines and carries no trailing
    newline. Each block also records the closest heading above it.

    Example:
        >>> [b.text for b in iter_fenced_blocks("```\\nx = 1\\n```\\n")]
        ['x = 1']
    """
    lines = LINE_ENDING.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    heading: Optional[str] = None
    i = 0
    while i < len(lines):
        match = OPEN_FENCE.match(lines[i])
        if match is None:
            title = parse_title(lines[i])
            if title is not None:
                heading = title
            i += 1
            continue

        indent, fence, info = match.groups()
        if fence[0] == "`" and "`" in info:
            # Backtick fences may not carry backticks in the info string.
            i += 1
            continue

        start = i
        body: List[str] = []
        i += 1
        while i < len(lines):
            close = CLOSE_FENCE.match(lines[i])
            if close and close.group(1)[0] == fence[0] and len(close.group(1)) >= len(fence):
                break
            body.append(_strip_indent(lines[i], len(indent)))
            i += 1
        i += 1

        info = info.strip()
        yield FencedBlock(
            info=info or None,
            text="\n".join(body),
            line=start + 1,
            heading=heading,
        )


__all__ = ["FencedBlock", "iter_fenced_blocks", "parse_title"]
