"""Diff module for computing and identifying hunks between file versions.

Main components:
- Types: Hunk, FileDiff, LineRange - structured representation of changes
- Myers: edit_script() - minimal line-level edit script
- Identity: compute_hunk_id() - stable content-addressed hunk ids
- Engine: compute_file_diff() - classify, truncate, and group into hunks

Example usage:
    >>> from jj_hunk.diff import compute_file_diff
    >>> diff = compute_file_diff("f.txt", b"a\\nb\\nc\\n", b"a\\nx\\nc\\n")
    >>> [h.kind.value for h in diff.hunks]
    ['replace']
"""

from jj_hunk.diff.engine import compute_file_diff, get_hunks, is_binary_data, truncate_text
from jj_hunk.diff.identity import compute_hunk_id, normalize_hunk_id
from jj_hunk.diff.myers import EditOp, edit_script
from jj_hunk.diff.types import (
    BinaryMode,
    DiffOptions,
    FileDiff,
    FileStatus,
    Hunk,
    HunkContext,
    HunkKind,
    LineRange,
)

__all__ = [
    # Types
    "BinaryMode",
    "DiffOptions",
    "FileDiff",
    "FileStatus",
    "Hunk",
    "HunkContext",
    "HunkKind",
    "LineRange",
    # Algorithm
    "EditOp",
    "edit_script",
    # Identity
    "compute_hunk_id",
    "normalize_hunk_id",
    # Engine
    "compute_file_diff",
    "get_hunks",
    "is_binary_data",
    "truncate_text",
]
