"""CLI entry point for quizmark."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .config import DEFAULT_OUT_DIR

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def app(argv: list[str] | None = None) -> None:
    """Console script entrypoint."""
    raise SystemExit(main(argv))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="quizmark",
        description="Extract and validate quiz blocks embedded in Markdown documents.",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"quizmark {__version__}",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check", help="Parse and validate documents, report every defect")
    p_check.add_argument("files", nargs="+", type=Path, help="Markdown documents")

    p_list = sub.add_parser("list", help="List the quiz blocks of a document")
    p_list.add_argument("file", type=Path, help="Markdown document")

    p_export = sub.add_parser("export", help="Write quiz records and a manifest for a document")
    p_export.add_argument("file", type=Path, help="Markdown document")
    p_export.add_argument("--out", "-o", type=Path, default=DEFAULT_OUT_DIR, help="Output directory")
    p_export.add_argument("--force", action="store_true", help="Replace an existing export")

    p_fmt = sub.add_parser("fmt", help="Print the quiz blocks of a document in canonical form")
    p_fmt.add_argument("file", type=Path, help="Markdown document")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
    )

    if args.cmd == "check":
        return _cmd_check(args)
    if args.cmd == "list":
        return _cmd_list(args)
    if args.cmd == "export":
        return _cmd_export(args)
    if args.cmd == "fmt":
        return _cmd_fmt(args)

    parser.print_help()
    return 2


def _cmd_check(args: Any) -> int:
    from .validate import check

    failed = False
    for path in args.files:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            print(f"Error: {e}", file=sys.stderr)
            failed = True
            continue

        report = check(text)
        if report.ok:
            print(f"✓ {path}: {len(report.blocks)} quiz blocks, {report.total_points} points")
            continue

        failed = True
        print(f"✗ {path}: {len(report.errors)} errors", file=sys.stderr)
        for error in report.errors:
            print(f"  - {error}", file=sys.stderr)

    return 1 if failed else 0


def _cmd_list(args: Any) -> int:
    from .parse.blocks import parse_file

    try:
        result = parse_file(args.file)
        blocks = result.blocks
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not blocks:
        print("No quiz blocks found")
        return 0

    print(f"Quiz blocks in {args.file}:\n")
    for block in blocks:
        answer = block.answer if block.answer is not None else "-"
        points = block.points if block.points is not None else "-"
        print(f"  {block.id:32} {block.kind.value:16} {points:>4}pt  answer={answer:4}  {block.title}")

    if result.errors:
        print(f"\nParse errors ({len(result.errors)}):")
        for error in result.errors:
            print(f"  - {error}")
    return 0


def _cmd_export(args: Any) -> int:
    from .export.build import export_document

    try:
        result = export_document(args.file, args.out, force=bool(args.force))
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("✓ Export written")
    print(f"  Output: {result.output_dir}")
    print(f"  Blocks: {result.blocks_count}")
    print(f"  Points: {result.total_points}")

    if result.warnings:
        print(f"\nWarnings ({len(result.warnings)}):")
        for w in result.warnings[:10]:
            print(f"  - {w}")
        if len(result.warnings) > 10:
            print(f"  ... and {len(result.warnings) - 10} more")

    return 0


def _cmd_fmt(args: Any) -> int:
    from .parse.blocks import parse_file
    from .parse.encode import encode_document

    try:
        result = parse_file(args.file)
        blocks = result.blocks
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(encode_document(blocks))
    for error in result.errors:
        print(f"skipped: {error}", file=sys.stderr)
    return 1 if result.errors else 0


if __name__ == "__main__":
    app()
