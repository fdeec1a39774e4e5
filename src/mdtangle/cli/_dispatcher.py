"""
Auto-discovery CLI dispatcher for mdtangle.

Scans ``cli/commands`` and registers every module found there.
Adding a new command = just add a .py file exposing ``SUMMARY``,
``register_args(parser)`` and ``main(args) -> int``.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


@lru_cache(maxsize=32)
def discover_root_commands() -> dict[str, dict[str, Any]]:
    """Discover top-level commands under cli/commands."""
    commands_dir = Path(__file__).parent / "commands"
    commands: dict[str, dict[str, Any]] = {}

    if not commands_dir.exists():
        return commands

    for item in commands_dir.glob("*.py"):
        if item.name.startswith("_"):
            continue

        cmd_name = item.stem
        try:
            module = importlib.import_module(f"mdtangle.cli.commands.{cmd_name}")
            commands[cmd_name] = {
                "module": module,
                "summary": getattr(module, "SUMMARY", cmd_name),
                "register_args": getattr(module, "register_args", None),
                "main": getattr(module, "main", None),
            }
        except ImportError as e:
            print(f"Warning: Could not import command {cmd_name}: {e}", file=sys.stderr)
            continue

    return commands


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser with auto-discovered commands.

    Returns:
        Configured ArgumentParser
    """
    from ._args import add_verbose_flag

    parser = argparse.ArgumentParser(
        prog="mdtangle",
        description="mdtangle - tangle source files out of markdown documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    add_verbose_flag(parser)
    parser.add_argument(
        "--log-file",
        type=str,
        help="Write log records to this file instead of stderr",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        description="Available commands",
        metavar="<command>",
    )

    for cmd_name, cmd_info in sorted(discover_root_commands().items()):
        primary_name = cmd_name.replace("_", "-")
        aliases = [cmd_name] if primary_name != cmd_name else []
        cmd_parser = subparsers.add_parser(
            primary_name,
            aliases=aliases,
            help=cmd_info["summary"],
        )
        if cmd_info["register_args"]:
            cmd_info["register_args"](cmd_parser)
        if cmd_info["main"]:
            cmd_parser.set_defaults(_func=cmd_info["main"])

    return parser


def _get_version() -> str:
    """Get mdtangle version string."""
    from mdtangle import __version__

    return __version__


def _configure_logging(args: argparse.Namespace, *, json_mode: bool) -> None:
    """Set up stdlib logging from the ``logging`` config section and CLI flags.

    A broken project config falls back to the defaults here; the command
    itself reports the config error.
    """
    from mdtangle.cli._utils import get_repo_root
    from mdtangle.core.stdlib_logging import (
        configure_stdlib_logging,
        suppress_lastresort_in_json_mode,
    )
    from mdtangle.core.config.domains import LoggingConfig
    from mdtangle.core.exceptions import TangleError

    level = "WARNING"
    log_path: Path | None = None
    try:
        cfg = LoggingConfig(repo_root=get_repo_root(args), validate=False)
        level = cfg.level
        log_path = cfg.path
    except TangleError as e:
        logger.debug("Using default logging settings: %s", e)

    if getattr(args, "verbose", False):
        level = "DEBUG"
    if getattr(args, "log_file", None):
        log_path = Path(args.log_file).expanduser().resolve()

    if json_mode and log_path is None:
        # JSON mode must remain machine-readable on stdout/stderr.
        suppress_lastresort_in_json_mode()
        return
    configure_stdlib_logging(level=level, log_path=log_path)


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the mdtangle CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    json_mode = bool(getattr(args, "json", False))
    _configure_logging(args, json_mode=json_mode)

    func: Callable[[argparse.Namespace], int] | None = getattr(args, "_func", None)
    if func is None:
        parser.print_help()
        return 1

    try:
        return func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        logger.debug("Unhandled error in %s", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
