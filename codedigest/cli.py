"""Command line entry point: ``codedigest [ROOT] [options]``."""

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional

from codedigest.core.config import DEFAULT_IGNORE_PATTERNS, DEFAULT_MAX_FILE_SIZE, DEFAULT_OUTPUT_NAME
from codedigest.core.pipeline import generate_digest
from codedigest.utils.format import format_count, format_size, parse_size
from codedigest.utils.logger import get_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codedigest",
        description="Summarize a source tree into a single line-numbered XML document",
    )
    parser.add_argument(
        "root_dir",
        nargs="?",
        default=".",
        type=Path,
        help="Root directory to scan (default: current directory)",
    )
    parser.add_argument(
        "--max-file-size",
        type=parse_size,
        default=DEFAULT_MAX_FILE_SIZE,
        help=f"Skip files larger than this, e.g. 500KB or 2MB (default: {format_size(DEFAULT_MAX_FILE_SIZE)})",
    )
    parser.add_argument(
        "--ignore",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Additional ignore glob ('**' crosses directories, '*' does not). Repeatable.",
    )
    parser.add_argument(
        "--no-default-ignores",
        action="store_true",
        help="Do not apply the built-in ignore patterns",
    )
    parser.add_argument("--no-line-numbers", action="store_true", help="Write file content without line numbers")
    parser.add_argument(
        "--output-name",
        default=DEFAULT_OUTPUT_NAME,
        help=f"File name of the artifact written at the root (default: {DEFAULT_OUTPUT_NAME})",
    )
    parser.add_argument("--no-save", action="store_true", help="Do not write the artifact to disk")
    parser.add_argument("--stdout", action="store_true", help="Print the XML document to stdout")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "NOTICE", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument("--log-dir", default="logs", help="Directory for log files (default: logs)")
    parser.add_argument("--no-log-file", action="store_true", help="Disable the log file")
    return parser


def overrides_from_args(args: argparse.Namespace) -> Dict:
    """Translate parsed arguments into configuration overrides."""
    patterns: List[str] = [] if args.no_default_ignores else list(DEFAULT_IGNORE_PATTERNS)
    patterns.extend(args.ignore)
    return {
        "max_file_size": args.max_file_size,
        "ignore_patterns": patterns,
        "show_line_numbers": not args.no_line_numbers,
        "output_file_name": None if args.no_save else args.output_name,
    }


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI; returns the process exit code."""
    args = build_parser().parse_args(argv)

    logger = get_logger()
    # Keep stdout clean for the document when --stdout is used.
    logger.configure(
        log_level=args.log_level,
        log_dir=args.log_dir,
        enable_console=not args.stdout,
        enable_file=not args.no_log_file,
    )

    def report_progress(message: str, percent: Optional[int] = None) -> None:
        if percent is None:
            logger.info(message)
        else:
            logger.info(f"[{percent:>3}%] {message}")

    result = generate_digest(args.root_dir, overrides_from_args(args), progress_callback=report_progress)

    if not result.success:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    if args.stdout:
        sys.stdout.write(result.content)
        return 0

    output = result.output
    print("\n" + "=" * 60)
    print("Digest Complete!")
    print("=" * 60)
    print(f"Files: {format_count(output.total_files, 'file')}")
    print(f"Lines: {output.total_lines:,}")
    print(f"Characters: {output.total_characters:,}")
    print(f"Artifact size: {format_size(len(result.content.encode('utf-8')))}")
    if result.output_path is not None:
        print(f"Saved to: {result.output_path}")
    if result.diagnostics:
        print(f"Warnings: {format_count(len(result.diagnostics), 'warning')}")
        for diagnostic in result.diagnostics:
            print(f"  - [{diagnostic.kind.value}] {diagnostic.path}")
    return 0
