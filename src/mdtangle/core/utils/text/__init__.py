"""Text processing utilities.

- markdown: fenced code block scanning and heading parsing
"""
from __future__ import annotations

from .markdown import FencedBlock, iter_fenced_blocks, parse_title

__all__ = ["FencedBlock", "iter_fenced_blocks", "parse_title"]
