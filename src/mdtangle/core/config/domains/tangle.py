"""Domain-specific configuration for the tangle engine."""
from __future__ import annotations

from functools import cached_property
from typing import List

from mdtangle.core.tangle.annotations import DEFAULT_FILENAME

from ..base import BaseDomainConfig


class TangleConfig(BaseDomainConfig):
    """Accessor for the ``tangle`` config section."""

    def _config_section(self) -> str:
        return "tangle"

    @cached_property
    def default_filename(self) -> str:
        return str(self.section.get("default_filename") or DEFAULT_FILENAME)

    @cached_property
    def auto_create_files(self) -> bool:
        return bool(self.section.get("auto_create_files", True))

    @cached_property
    def output_dir(self) -> str:
        return str(self.section.get("output_dir") or ".")

    @cached_property
    def trailing_newline(self) -> bool:
        return bool(self.section.get("trailing_newline", True))

    @cached_property
    def languages(self) -> List[str]:
        return [str(lang) for lang in (self.section.get("languages") or []) if lang]


__all__ = ["TangleConfig"]
