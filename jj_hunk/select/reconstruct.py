"""Rebuild file content from hunks and a decision.

Unchanged gaps are copied from the old content verbatim, and each hunk
contributes either its added or its removed text. No re-encoding or
line-ending normalization is applied.
"""

from jj_hunk.core.errors import DiffError
from jj_hunk.diff.engine import split_lines
from jj_hunk.diff.types import FileDiff
from jj_hunk.select.resolver import Decision, WholeFile
from jj_hunk.select.spec import Action


def _side(action: Action, old: bytes | None, new: bytes | None) -> bytes | None:
    return new if action is Action.KEEP else old


def _splice(file_diff: FileDiff, decision: Decision, old_text: str) -> str:
    """Walk hunks over the old text, emitting the chosen side of each."""
    old_lines = split_lines(old_text)
    out: list[str] = []
    cursor = 0

    for hunk in file_diff.hunks:
        start = hunk.before_range.start - 1
        out.extend(old_lines[cursor:start])
        out.append(hunk.added if decision.is_selected(hunk) else hunk.removed)
        cursor = start + hunk.before_range.length

    out.extend(old_lines[cursor:])
    return "".join(out)


def reconstruct(
    file_diff: FileDiff,
    decision: Decision,
    old: bytes | None,
    new: bytes | None,
) -> bytes | None:
    """Produce the final content for one path.

    Args:
        file_diff: Diff computed from ``old`` and ``new``
        decision: Resolved decision for the file
        old: Old content, or None if absent in the old snapshot
        new: New content, or None if absent in the new snapshot

    Returns:
        Final bytes, or None if the path must not exist.

    Raises:
        DiffError: If a truncated diff lacks a cut on either side.
    """
    if file_diff.skipped:
        return old

    if isinstance(decision, WholeFile):
        return _side(decision.action, old, new)

    hunks = file_diff.hunks
    selected = [decision.is_selected(hunk) for hunk in hunks]
    tail_is_new = decision.fallback is Action.KEEP

    if not hunks:
        return _side(decision.fallback, old, new)
    if not any(selected) and (not file_diff.truncated or not tail_is_new):
        return old
    if all(selected) and (not file_diff.truncated or tail_is_new):
        return new

    # Binary files carry at most one opaque hunk, so they never get here
    old_text = (old or b"").decode("utf-8")
    new_text = (new or b"").decode("utf-8")
    if not file_diff.truncated:
        return _splice(file_diff, decision, old_text).encode("utf-8")

    # Both cuts must sit on the same unchanged line boundary
    old_cut, new_cut = file_diff.old_cut, file_diff.new_cut
    if old_cut is None or new_cut is None:
        raise DiffError(f"Truncated diff of '{file_diff.path}' has no aligned cut")

    result = _splice(file_diff, decision, old_text[:old_cut])
    result += new_text[new_cut:] if tail_is_new else old_text[old_cut:]
    return result.encode("utf-8")
