"""Implementations of the jj-hunk subcommands.

Each command returns a process exit code; errors propagate as JjHunkError
subclasses and are mapped to exit codes by main().
"""

import argparse
import logging
import os
from pathlib import Path

from jj_hunk.cli.output import print_outcomes, write_stdout
from jj_hunk.config.schema import Config
from jj_hunk.core.constants import SELECTION_ENV
from jj_hunk.core.errors import UsageError
from jj_hunk.diff.types import BinaryMode, DiffOptions
from jj_hunk.listing.collect import ListOptions, collect_changes
from jj_hunk.listing.render import (
    ListFormat,
    ListGrouping,
    ListMode,
    build_list_output,
    build_spec_template,
    render,
)
from jj_hunk.select.pipeline import select_snapshots
from jj_hunk.select.spec import load_spec_file, parse_spec, resolve_spec_input
from jj_hunk.vcs.jj import JjClient

logger = logging.getLogger(__name__)


def make_client(config: Config) -> JjClient:
    return JjClient(executable=config.jj.executable, timeout=config.jj.timeout)


def normalize_spec_message(
    spec: str | None,
    message: str | None,
    spec_file: str | None,
    command: str,
) -> tuple[str | None, str]:
    """Sort out positional spec/message for commands that take both.

    With --spec-file the lone positional is the message.

    Returns:
        Tuple of (inline spec or None when using --spec-file, message).

    Raises:
        UsageError: If the message or spec is missing, or both a spec and
            --spec-file were given.
    """
    if spec_file is not None and message is None:
        message, spec = spec, None

    if message is None:
        raise UsageError(f"{command} requires a commit message")

    if spec_file is not None:
        if spec is not None:
            raise UsageError(f"{command}: omit <spec> when using --spec-file")
        return None, message

    if spec is None:
        raise UsageError(f"{command} requires a spec (or use --spec-file)")
    return spec, message


def normalize_spec_only(spec: str | None, spec_file: str | None, command: str) -> str | None:
    """Validate the spec arguments of a command without a message."""
    if spec_file is not None:
        if spec is not None:
            raise UsageError(f"{command}: omit <spec> when using --spec-file")
        return None
    if spec is None:
        raise UsageError(f"{command} requires a spec (or use --spec-file)")
    return spec


def _list_diff_options(args: argparse.Namespace, config: Config) -> DiffOptions:
    """Command-line flags override the configured diff settings."""
    return DiffOptions(
        binary=BinaryMode(args.binary) if args.binary else config.diff.binary,
        max_bytes=args.max_bytes if args.max_bytes is not None else config.diff.max_bytes,
        max_lines=args.max_lines if args.max_lines is not None else config.diff.max_lines,
    )


def cmd_list(args: argparse.Namespace, config: Config) -> int:
    """List hunks of the working copy or a revision."""
    fmt = ListFormat(args.format) if args.format else config.list.format
    grouping = ListGrouping(args.group) if args.group else config.list.group
    if args.files:
        mode = ListMode.FILES
    elif args.spec_template:
        mode = ListMode.SPEC_TEMPLATE
    else:
        mode = ListMode.FULL

    if mode is ListMode.SPEC_TEMPLATE and fmt is ListFormat.TEXT:
        raise UsageError("--spec-template does not support text output (use json or yaml)")
    for flag in ("max_bytes", "max_lines"):
        value = getattr(args, flag)
        if value is not None and value < 0:
            raise UsageError(f"--{flag.replace('_', '-')} must be >= 0")

    spec = None
    if args.spec is not None or args.spec_file is not None:
        spec = parse_spec(resolve_spec_input(args.spec, args.spec_file))

    options = ListOptions(
        rev=args.rev,
        include=args.include,
        exclude=args.exclude,
        diff=_list_diff_options(args, config),
        spec=spec,
    )
    files = collect_changes(make_client(config), options)

    if mode is ListMode.SPEC_TEMPLATE:
        data = build_spec_template(files)
    else:
        data = build_list_output(files, grouping, mode)
    write_stdout(render(data, fmt, mode))
    return 0


async def cmd_select(args: argparse.Namespace, config: Config) -> int:
    """Rewrite the right snapshot according to the handed-over spec."""
    spec_path = os.environ.get(SELECTION_ENV)
    if not spec_path:
        # No selection: keep everything
        logger.info("%s not set; leaving snapshot unchanged", SELECTION_ENV)
        return 0

    spec = load_spec_file(Path(spec_path))
    outcomes = await select_snapshots(
        args.left,
        args.right,
        spec,
        config.diff.to_options(),
        workers=config.select.workers,
        dry_run=args.dry_run,
    )
    if args.dry_run:
        print_outcomes(outcomes)
    return 0


def cmd_split(args: argparse.Namespace, config: Config) -> int:
    spec, message = normalize_spec_message(args.spec, args.message, args.spec_file, "split")
    spec_text = resolve_spec_input(spec, args.spec_file)
    parse_spec(spec_text)
    make_client(config).split(spec_text, message, args.rev)
    return 0


def cmd_commit(args: argparse.Namespace, config: Config) -> int:
    spec, message = normalize_spec_message(args.spec, args.message, args.spec_file, "commit")
    spec_text = resolve_spec_input(spec, args.spec_file)
    parse_spec(spec_text)
    make_client(config).commit(spec_text, message)
    return 0


def cmd_squash(args: argparse.Namespace, config: Config) -> int:
    spec = normalize_spec_only(args.spec, args.spec_file, "squash")
    spec_text = resolve_spec_input(spec, args.spec_file)
    parse_spec(spec_text)
    make_client(config).squash(spec_text, args.rev)
    return 0
