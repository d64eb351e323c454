"""
Command-line front end.

    vexport export SNAPSHOT --format css [--options FILE] [--output FILE]
                            [--prefix P] [--collection ID ...]
                            [--styles variables|classes]
    vexport check SNAPSHOT [--options FILE]

Exit codes: 0 success, 1 check found problems, 2 unreadable input.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from vexport import __version__
from vexport.analyzer import analyze_graph, format_report
from vexport.backends import export
from vexport.config import DEFAULT_FILE_NAME, ExportFormat, ExportOptions, StyleOutputMode, default_options_for
from vexport.serialization import SnapshotError, load_graph_file, load_options_file

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vexport", description="Export design variables to CSS, SCSS, JSON or TypeScript")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command")
    sub.required = True

    export_cmd = sub.add_parser("export", help="Generate one output format from a snapshot")
    export_cmd.add_argument("snapshot", help="Snapshot file (.json, .yaml or .yml)")
    export_cmd.add_argument(
        "-f", "--format",
        default=ExportFormat.CSS.value,
        choices=[f.value for f in ExportFormat],
        help="Output format (default: css)",
    )
    export_cmd.add_argument("--options", help="Export options file (.json or .yaml)")
    export_cmd.add_argument("-o", "--output", help="Write to this file instead of stdout")
    export_cmd.add_argument("--prefix", help="Prefix for the default naming rule")
    export_cmd.add_argument(
        "--collection",
        action="append",
        dest="collections",
        metavar="ID",
        help="Export only this collection id (repeatable)",
    )
    export_cmd.add_argument(
        "--styles",
        choices=[m.value for m in StyleOutputMode],
        help="Include styles, as variables or as classes/mixins",
    )

    check_cmd = sub.add_parser("check", help="Report problems in a snapshot")
    check_cmd.add_argument("snapshot", help="Snapshot file (.json, .yaml or .yml)")
    check_cmd.add_argument("--options", help="Export options file used for naming checks")

    return parser


def _load_options(path: Optional[str], fmt: ExportFormat) -> ExportOptions:
    if path:
        return load_options_file(path, fmt)
    return default_options_for(fmt)


def _run_export(args: argparse.Namespace) -> int:
    fmt = ExportFormat(args.format)
    graph = load_graph_file(args.snapshot)
    options = _load_options(args.options, fmt)

    if args.prefix is not None:
        options.prefix = args.prefix
    if args.collections:
        options.selected_collections = list(args.collections)
    if args.styles:
        options.include_styles = True
        options.style_output_mode = StyleOutputMode(args.styles)
    if options.file_name == DEFAULT_FILE_NAME:
        options.file_name = os.path.splitext(os.path.basename(args.snapshot))[0]

    output = export(graph, fmt, options)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output)
        logger.info("Wrote %s output to %s", fmt.value, args.output)
    else:
        sys.stdout.write(output if output.endswith("\n") else output + "\n")
    return 0


def _run_check(args: argparse.Namespace) -> int:
    graph = load_graph_file(args.snapshot)
    options = _load_options(args.options, ExportFormat.CSS)
    report = analyze_graph(graph, options)
    print(format_report(report))
    return 0 if report.is_clean else 1


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "export":
            return _run_export(args)
        return _run_check(args)
    except (SnapshotError, FileNotFoundError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
