"""Argument parsing for the jj-hunk CLI."""

import argparse
from pathlib import Path

from jj_hunk.diff.types import BinaryMode
from jj_hunk.listing.render import ListFormat, ListGrouping


def add_spec_args(parser: argparse.ArgumentParser, with_message: bool) -> None:
    """Add the positional spec (and message) plus --spec-file to a parser."""
    parser.add_argument(
        "spec",
        nargs="?",
        help="JSON/YAML spec string, or '-' for stdin (omit when using --spec-file)",
    )
    if with_message:
        parser.add_argument("message", nargs="?", help="Commit message")
    parser.add_argument(
        "--spec-file", "-f",
        dest="spec_file",
        metavar="PATH",
        help="Read spec from a file (JSON or YAML)",
    )


def add_rev_arg(parser: argparse.ArgumentParser, help_text: str) -> None:
    parser.add_argument("--rev", "-r", metavar="REVSET", help=help_text)


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="jj-hunk",
        description="Programmatic hunk selection for jj",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging on stderr",
    )
    parser.add_argument(
        "--config",
        type=Path,
        metavar="PATH",
        help="Load configuration from this file only (skips layered lookup)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # list - read-only view of hunks
    list_parser = subparsers.add_parser("list", help="List hunks in current changes")
    add_rev_arg(list_parser, "Revset to diff (e.g. @, @-, or a change id)")
    list_parser.add_argument(
        "--include", "-i",
        action="append",
        default=[],
        metavar="GLOB",
        help="Include glob patterns (repeatable, comma-separated)",
    )
    list_parser.add_argument(
        "--exclude", "-x",
        action="append",
        default=[],
        metavar="GLOB",
        help="Exclude glob patterns (repeatable, comma-separated)",
    )
    list_parser.add_argument(
        "--group",
        choices=[m.value for m in ListGrouping],
        help="Group output by directory, extension, or status",
    )
    list_parser.add_argument(
        "--format",
        choices=[m.value for m in ListFormat],
        help="Output format (default: json)",
    )
    list_parser.add_argument(
        "--binary",
        choices=[m.value for m in BinaryMode],
        help="Binary handling (default: mark)",
    )
    list_parser.add_argument(
        "--max-bytes",
        type=int,
        metavar="N",
        help="Truncate file contents to N bytes before diffing",
    )
    list_parser.add_argument(
        "--max-lines",
        type=int,
        metavar="N",
        help="Truncate file contents to N lines before diffing",
    )
    list_parser.add_argument(
        "--spec",
        help="Optional JSON/YAML spec to preview (inline or '-')",
    )
    list_parser.add_argument(
        "--spec-file", "-f",
        dest="spec_file",
        metavar="PATH",
        help="Read preview spec from a file (JSON or YAML)",
    )
    mode_group = list_parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        "--files",
        action="store_true",
        help="Only list files with hunk counts",
    )
    mode_group.add_argument(
        "--spec-template",
        action="store_true",
        help="Output a spec template instead of hunks",
    )

    # select - diff editor entry point called by jj
    select_parser = subparsers.add_parser(
        "select",
        help="Select hunks (called by jj --tool)",
    )
    select_parser.add_argument("left", type=Path, help='Path to "before" directory')
    select_parser.add_argument("right", type=Path, help='Path to "after" directory')
    select_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would change without writing",
    )

    split_parser = subparsers.add_parser("split", help="Split changes with hunk selection")
    add_spec_args(split_parser, with_message=True)
    add_rev_arg(split_parser, "Revision to split (default: @)")

    commit_parser = subparsers.add_parser("commit", help="Commit selected hunks")
    add_spec_args(commit_parser, with_message=True)

    squash_parser = subparsers.add_parser("squash", help="Squash selected hunks into parent")
    add_spec_args(squash_parser, with_message=False)
    add_rev_arg(squash_parser, "Revision to squash (default: @)")

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(argv)
