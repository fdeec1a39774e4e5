"""
mdtangle sections command.

SUMMARY: List code files and sections defined by markdown documents
"""

from __future__ import annotations

import argparse
from typing import Any, Dict, List

from mdtangle.cli import (
    OutputFormatter,
    add_documents_arg,
    add_standard_flags,
    get_repo_root,
)
from mdtangle.core.exceptions import TangleError
from mdtangle.core.tangle import CodeFile, TangleProject

SUMMARY = "List code files and sections defined by markdown documents"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_documents_arg(parser)
    add_standard_flags(parser)


def _describe_file(codefile: CodeFile) -> Dict[str, Any]:
    sections: List[Dict[str, Any]] = []
    missing: List[str] = []
    for section in codefile.codesections:
        sections.append(
            {
                "name": section.name,
                "blocks": len(section.blocks),
                "children": list(section.children),
                "headings": list(section.headings),
            }
        )
        for child in section.children:
            if codefile.find_code_section_by_name(child) is None and child not in missing:
                missing.append(child)
    return {"name": codefile.name, "sections": sections, "missing": missing}


def main(args: argparse.Namespace) -> int:
    """Show what the documents define, without rendering anything."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        project = TangleProject.from_config(get_repo_root(args))
        project.load(args.documents)
    except TangleError as e:
        formatter.error(e, error_code="tangle_error")
        return 1
    except FileNotFoundError as e:
        formatter.error(e, error_code="document_not_found")
        return 1

    files = [_describe_file(codefile) for codefile in project.store.codefiles]

    if formatter.json_mode:
        formatter.json_output({"files": files})
        return 0

    if not files:
        formatter.text("No code blocks found.")
        return 0

    for info in files:
        formatter.text(info["name"])
        for section in info["sections"]:
            line = f"  {section['name']} ({section['blocks']} block(s))"
            if section["headings"]:
                line += " in " + ", ".join(repr(h) for h in section["headings"])
            if section["children"]:
                line += f" -> {', '.join(section['children'])}"
            formatter.text(line)
        if info["missing"]:
            formatter.text(f"  missing: {', '.join(info['missing'])}")
    return 0
