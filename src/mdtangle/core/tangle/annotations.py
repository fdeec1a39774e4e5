"""Annotation parsing for tangled code blocks.

An annotation names the destination of a block::

    [<lang-tag>] [> [<filename>][#<section-name>]]

Examples:
    ``js``                  -> index.js, root
    ``js > math.js``        -> math.js, root
    ``js > #greet``         -> index.js, #greet
    ``js > index.js#default`` -> index.js, root
"""
from __future__ import annotations

import re
from typing import Optional

from mdtangle.core.exceptions import FormatError

from .types import Annotation

DEFAULT_FILENAME = "index.js"
ROOT_SECTION = "root"
DEFAULT_SECTION_ALIAS = "default"
SECTION_PREFIX = "#"

_SECTION_NAME = re.compile(r"^[^\s#<>]+$")


def normalize_section_name(name: Optional[str]) -> str:
    """Return the canonical name for a section reference.

    ``None``, an empty name and ``default`` all resolve to the root section;
    any other name gains a ``#`` prefix when it lacks one.

    Raises:
        FormatError: If the name holds whitespace, angle brackets or an inner ``#``.
    """
    if name is None:
        return ROOT_SECTION
    bare = name.strip()
    if bare.startswith(SECTION_PREFIX):
        bare = bare[len(SECTION_PREFIX):]
    if not bare or bare == DEFAULT_SECTION_ALIAS:
        return ROOT_SECTION
    if not _SECTION_NAME.match(bare):
        raise FormatError(
            f"Invalid section name: {name!r}",
            context={"section": name},
        )
    return f"{SECTION_PREFIX}{bare}"


def parse_annotation(raw: Optional[str], default_filename: str = DEFAULT_FILENAME) -> Annotation:
    """Parse a block annotation into its destination.

    Args:
        raw: Annotation string, usually a fence info string. May be None.
        default_filename: Filename used when the annotation names none.

    Returns:
        Annotation with filename, normalized section name and language tag.

    Raises:
        FormatError: If the destination part cannot be parsed.
    """
    if raw is None:
        return Annotation(filename=default_filename, section=ROOT_SECTION)
    if not isinstance(raw, str):
        raise FormatError(
            f"Annotation must be a string, got {type(raw).__name__}",
            context={"annotation": repr(raw)},
        )

    head, separator, destination = raw.partition(">")
    tokens = head.split()
    language = tokens[0] if tokens else None

    if not separator:
        return Annotation(filename=default_filename, section=ROOT_SECTION, language=language)

    if ">" in destination:
        raise FormatError(
            f"Annotation has more than one '>' separator: {raw!r}",
            context={"annotation": raw},
        )

    filename, _, section = destination.strip().partition(SECTION_PREFIX)
    filename = filename.strip()
    if any(ch.isspace() for ch in filename):
        raise FormatError(
            f"Filename may not contain whitespace: {filename!r}",
            context={"annotation": raw},
        )

    try:
        section_name = normalize_section_name(section)
    except FormatError as exc:
        raise FormatError(str(exc), context={"annotation": raw, **exc.context}) from exc

    return Annotation(
        filename=filename or default_filename,
        section=section_name,
        language=language,
    )


__all__ = [
    "DEFAULT_FILENAME",
    "ROOT_SECTION",
    "DEFAULT_SECTION_ALIAS",
    "SECTION_PREFIX",
    "normalize_section_name",
    "parse_annotation",
]
