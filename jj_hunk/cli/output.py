"""Rich-based output utilities for the jj-hunk CLI.

Machine-readable listings go to stdout untouched; messages for humans go
through a stderr console.
"""

import sys

from rich.console import Console
from rich.table import Table
from rich.text import Text

from jj_hunk.select.pipeline import FileOutcome
from jj_hunk.select.resolver import PerHunk

# Shared stderr console instance
console = Console(stderr=True, highlight=False)


def write_stdout(text: str) -> None:
    """Write raw text to stdout without markup processing."""
    sys.stdout.write(text)
    sys.stdout.flush()


def print_error(message: str) -> None:
    """Print an error message in red."""
    console.print(Text.assemble(("Error:", "bold red"), " ", message))


def print_outcomes(outcomes: list[FileOutcome]) -> None:
    """Show which paths a selection would rewrite."""
    table = Table(title="Selection preview", show_lines=False)
    table.add_column("Path")
    table.add_column("Decision")
    table.add_column("Hunks", justify="right")
    table.add_column("Result")

    for outcome in outcomes:
        decision = outcome.decision
        if isinstance(decision, PerHunk):
            label = "hunks"
            hunks = f"{len(decision.selected)}/{len(outcome.diff.hunks)}"
        else:
            label = decision.action.value
            hunks = str(len(outcome.diff.hunks))

        if not outcome.changed:
            result = "[dim]unchanged[/dim]"
        elif outcome.content is None:
            result = "[red]removed[/red]"
        else:
            result = "[yellow]rewritten[/yellow]"
        table.add_row(Text(outcome.path), label, hunks, result)

    console.print(table)
