"""Common CLI argument registration utilities.

This module provides reusable argument registration functions to reduce
duplication across CLI commands.
"""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    """Add --repo-root flag for repository root override."""
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Override repository root path (default: current directory)",
    )


def add_documents_arg(parser: argparse.ArgumentParser) -> None:
    """Add the positional list of markdown documents."""
    parser.add_argument(
        "documents",
        nargs="+",
        metavar="DOCUMENT",
        help="Markdown documents to read, relative to the repository root",
    )


def add_dry_run_flag(parser: argparse.ArgumentParser) -> None:
    """Add --dry-run flag."""
    parser.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Show what would be done without making changes",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    """Add --verbose flag."""
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add standard flags that most commands use.

    Adds: --json, --repo-root
    """
    add_json_flag(parser)
    add_repo_root_flag(parser)


__all__ = [
    "add_json_flag",
    "add_repo_root_flag",
    "add_documents_arg",
    "add_dry_run_flag",
    "add_verbose_flag",
    "add_standard_flags",
]
