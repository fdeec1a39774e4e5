"""
mdtangle CLI package.

Commands are auto-discovered from ``mdtangle/cli/commands/*.py``; each module
exposes ``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``.

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._args import (
    add_documents_arg,
    add_dry_run_flag,
    add_json_flag,
    add_repo_root_flag,
    add_standard_flags,
    add_verbose_flag,
)
from ._output import OutputFormatter
from ._utils import get_repo_root

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_documents_arg",
    "add_dry_run_flag",
    "add_json_flag",
    "add_repo_root_flag",
    "add_standard_flags",
    "add_verbose_flag",
    # Utilities
    "get_repo_root",
]
