"""Entry point for the jj-hunk CLI."""

import asyncio
import logging

from jj_hunk.cli.arg_parser import parse_args
from jj_hunk.cli.commands import cmd_commit, cmd_list, cmd_select, cmd_split, cmd_squash
from jj_hunk.cli.logging_setup import configure_logging
from jj_hunk.cli.output import print_error
from jj_hunk.config.loader import load_config
from jj_hunk.core.errors import JjHunkError, SelectionError, SpecError, UsageError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_SPEC = 2
EXIT_INTERRUPTED = 130


def run(argv: list[str] | None = None) -> int:
    """Parse arguments, run one subcommand, and return its exit code."""
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(args.config)
        if args.command == "list":
            return cmd_list(args, config)
        if args.command == "select":
            return asyncio.run(cmd_select(args, config))
        if args.command == "split":
            return cmd_split(args, config)
        if args.command == "commit":
            return cmd_commit(args, config)
        if args.command == "squash":
            return cmd_squash(args, config)
        print_error(f"Unknown command: {args.command}")
        return EXIT_FAILURE
    except (SpecError, SelectionError, UsageError) as e:
        print_error(e.message)
        return EXIT_BAD_SPEC
    except JjHunkError as e:
        logger.debug("Command failed", exc_info=True)
        print_error(e.message)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED


def main() -> None:
    """Entry point for the jj-hunk console script."""
    raise SystemExit(run())


if __name__ == "__main__":
    main()
