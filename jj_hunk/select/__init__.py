"""Selection module: parse specs, resolve decisions, rebuild content.

Main components:
- Spec: parse_spec() - JSON/YAML selection documents
- Resolver: resolve() - per-file WholeFile / PerHunk decision
- Reconstruct: reconstruct() - final content from hunks and a decision
- Pipeline: select_snapshots() - apply a spec across two snapshot trees
"""

from jj_hunk.select.pipeline import FileOutcome, plan_selection, select_snapshots
from jj_hunk.select.reconstruct import reconstruct
from jj_hunk.select.resolver import Decision, PerHunk, WholeFile, resolve, resolve_file
from jj_hunk.select.spec import (
    Action,
    FileSelector,
    HunkSelector,
    SelectionSpec,
    WholeFileSelector,
    parse_spec,
    resolve_spec_input,
)

__all__ = [
    # Spec
    "Action",
    "FileSelector",
    "HunkSelector",
    "SelectionSpec",
    "WholeFileSelector",
    "parse_spec",
    "resolve_spec_input",
    # Resolver
    "Decision",
    "PerHunk",
    "WholeFile",
    "resolve",
    "resolve_file",
    # Reconstruct
    "reconstruct",
    # Pipeline
    "FileOutcome",
    "plan_selection",
    "select_snapshots",
]
