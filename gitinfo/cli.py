"""Validate .gitinfo files from the command line.

Usage:
  gitinfo-validate                       # validates ./.gitinfo
  gitinfo-validate path/to/.gitinfo other/.gitinfo
  gitinfo-validate --schema custom.schema.json --format json .gitinfo
"""
from __future__ import annotations
import argparse
import json
import logging
from typing import List, Optional, Tuple

from rich.console import Console
from rich.markup import escape

from gitinfo.check import Report, check_file
from gitinfo.config import settings
from gitinfo.errors import ParseFailure
from gitinfo.schema import load_schema

logger = logging.getLogger(__name__)


def make_consoles(color: bool) -> Tuple[Console, Console]:
    """stdout and stderr consoles; rich drops styling when the stream is not a terminal."""
    opts = dict(no_color=not color, highlight=False, soft_wrap=True)
    return Console(**opts), Console(stderr=True, **opts)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(prog="gitinfo-validate", description="Validate .gitinfo files against the gitinfo schema.")
    ap.add_argument("paths", nargs="*", help=f"files to validate (default: {settings.default_document})")
    ap.add_argument("--schema", default=settings.schema_path, help="schema document to validate against")
    ap.add_argument("--format", choices=["text", "json"], default="text", help="output format")
    ap.add_argument("--no-color", action="store_true", help="disable ANSI colors")
    ap.add_argument("--strict-icon", action="store_true", help="reject data:image/ URIs in the icon field")
    ap.add_argument("-q", "--quiet", action="store_true", help="only report failures")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return ap.parse_args(argv)


def report_text(report: Report, out: Console, err: Console, quiet: bool) -> None:
    source = escape(report.source)
    if report.valid:
        if not quiet:
            out.print(f"[green]✓ {source} is valid[/green]")
        return
    err.print(f"[red]Validation failed for {source}:[/red]")
    for e in report.errors:
        err.print(f"  - {e}", markup=False)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(levelname)s: %(message)s",
    )
    out, err = make_consoles(settings.color and not args.no_color)
    paths = args.paths or [settings.default_document]
    allow_icon = settings.allow_data_uri_icon and not args.strict_icon

    try:
        schema = load_schema(args.schema)
    except ParseFailure as e:
        if args.format == "json":
            print(json.dumps({"error": str(e), "results": []}, indent=2))
        else:
            err.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1

    failures = 0
    results = []
    for path in paths:
        try:
            report = check_file(path, schema, allow_icon)
        except ParseFailure as e:
            failures += 1
            logger.debug("parse failure for %s", path, exc_info=True)
            if args.format == "json":
                results.append({"source": path, "valid": False, "error": str(e), "errors": []})
            else:
                err.print(f"[red]Error: {escape(str(e))}[/red]")
            continue
        if not report.valid:
            failures += 1
        if args.format == "json":
            results.append(report.to_dict())
        else:
            report_text(report, out, err, args.quiet)

    if args.format == "json":
        print(json.dumps({"results": results}, indent=2, ensure_ascii=False))
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
