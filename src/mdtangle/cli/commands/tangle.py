"""
mdtangle tangle command.

SUMMARY: Tangle markdown documents into source files
"""

from __future__ import annotations

import argparse

from mdtangle.cli import (
    OutputFormatter,
    add_documents_arg,
    add_dry_run_flag,
    add_standard_flags,
    get_repo_root,
)
from mdtangle.core.exceptions import TangleError
from mdtangle.core.tangle import TangleProject

SUMMARY = "Tangle markdown documents into source files"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_documents_arg(parser)
    parser.add_argument(
        "--output-dir",
        "-o",
        type=str,
        help="Directory tangled files are written to (default: tangle.output_dir)",
    )
    parser.add_argument(
        "--file",
        dest="files",
        action="append",
        default=[],
        metavar="NAME",
        help="Register a target file before reading documents (repeatable)",
    )
    parser.add_argument(
        "--strict-files",
        action="store_true",
        help="Reject blocks targeting files not registered with --file",
    )
    add_dry_run_flag(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Read documents, render every code file and write the changed ones."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        project = TangleProject.from_config(
            repo_root,
            output_dir=args.output_dir,
            auto_create_files=False if args.strict_files else None,
        )
        project.register_files(args.files)
        block_count = project.load(args.documents)
        outputs = project.write(dry_run=args.dry_run)
    except TangleError as e:
        formatter.error(e, error_code="tangle_error")
        return 1
    except FileNotFoundError as e:
        formatter.error(e, error_code="document_not_found")
        return 1

    if formatter.json_mode:
        formatter.json_output(
            {
                "status": "success",
                "dry_run": bool(args.dry_run),
                "documents": [str(p) for p in project.documents],
                "blocks": block_count,
                "files": [output.to_dict() for output in outputs],
            }
        )
        return 0

    for output in outputs:
        if args.dry_run:
            state = "would write" if output.changed else "unchanged"
        else:
            state = "wrote" if output.written else "unchanged"
        formatter.text(f"{state}: {output.path}")

    written = sum(1 for o in outputs if o.written)
    formatter.text(
        f"Tangled {block_count} block(s) from {len(project.documents)} document(s) "
        f"into {len(outputs)} file(s), {written} written"
    )
    return 0
