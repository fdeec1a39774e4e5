"""
mdtangle - literate programming for markdown

mdtangle extracts annotated fenced code blocks from markdown documents and
tangles them into complete source files, splicing named sections into the
places that reference them.
"""

__version__ = "0.3.0"
__all__ = ["__version__"]
