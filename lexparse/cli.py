"""
lexparse command line.

Usage:
  lexparse <command> [options]

Commands:
  parse   Parse a .txt/.docx code and write CSV, XLSX, SQL or JSON exports.
  tree    Print the heading outline of a document.
  serve   Run the HTTP server.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from lexparse import __version__
from lexparse.core.errors import ExportError, LoaderError
from lexparse.exporters import ExporterRegistry
from lexparse.pipeline import DEFAULT_FORMATS, export_result, parse_file
from lexparse.settings import get_settings

logger = logging.getLogger(__name__)


def _cmd_parse(args: argparse.Namespace) -> int:
    settings = get_settings()
    result = parse_file(
        Path(args.file),
        split_mode=settings.title_split_mode,
        attach_mode=settings.attach_mode,
    )
    out_dir = Path(args.out) if args.out else settings.output_dir
    written = export_result(
        result,
        out_dir,
        args.format or DEFAULT_FORMATS,
        sql_dialect=args.dialect or settings.sql_dialect,
    )

    counts = result.data.counts()
    print(f"{result.document_id}: {result.data.total} headings")
    for key, count in counts.items():
        print(f"  {key:<12} {count}")
    for issue in result.issues:
        print(f"  ! {issue['message']}")
    for fmt, path in written.items():
        print(f"{fmt}: {path}")
    return 0


def _cmd_tree(args: argparse.Namespace) -> int:
    settings = get_settings()
    result = parse_file(
        Path(args.file),
        split_mode=settings.title_split_mode,
        attach_mode=settings.attach_mode,
    )
    outline = result.tree.render(max_depth=args.depth)
    print(outline if outline else "(no headings recognized)")
    malformed = result.tree.diagnostics.malformed
    if malformed:
        print(f"\n{len(malformed)} malformed heading(s):", file=sys.stderr)
        for error in malformed:
            print(f"  line {error.line_number}: {error.line}", file=sys.stderr)
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    from lexparse.server import run_server

    run_server(host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lexparse",
        description="Structural parser for bilingual legal codes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"lexparse {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(title="commands", metavar="<command>", dest="command")
    subparsers.required = True

    p_parse = subparsers.add_parser("parse", help="Parse a document and export the results")
    p_parse.add_argument("file", help="Path to a .txt or .docx document")
    p_parse.add_argument("--out", help="Output directory (default: LEXPARSE_OUTPUT_DIR)")
    p_parse.add_argument(
        "--format",
        action="append",
        choices=sorted(ExporterRegistry.available_exporters()),
        help="Export format, may be repeated (default: csv, xlsx, sql)",
    )
    p_parse.add_argument("--dialect", choices=["sqlite", "mssql"], help="SQL dialect")
    p_parse.set_defaults(func=_cmd_parse)

    p_tree = subparsers.add_parser("tree", help="Print the heading outline")
    p_tree.add_argument("file", help="Path to a .txt or .docx document")
    p_tree.add_argument("--depth", type=int, default=None, help="Maximum depth to print")
    p_tree.set_defaults(func=_cmd_tree)

    p_serve = subparsers.add_parser("serve", help="Run the HTTP server")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=8080)
    p_serve.set_defaults(func=_cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    try:
        return args.func(args)
    except (LoaderError, ExportError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
