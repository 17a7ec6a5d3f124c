"""Resolve a selection spec against one file's hunks.

Two scopes share the spec's ``default`` and are kept as separate branches:

- An unlisted file resolves to a whole-file decision using ``default``.
- A listed file with ``hunks``/``ids`` keeps exactly the referenced hunks
  and reverts the rest; ``default`` only decides the side used where hunk
  addressing cannot reach (truncated tails, hunk-less binaries).
"""

import logging
from dataclasses import dataclass

from jj_hunk.core.errors import SelectionError
from jj_hunk.diff.types import FileDiff, Hunk
from jj_hunk.select.spec import Action, HunkSelector, SelectionSpec, WholeFileSelector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WholeFile:
    """Use one side of the file in full."""

    action: Action

    def is_selected(self, hunk: Hunk) -> bool:
        return self.action is Action.KEEP

    @property
    def fallback(self) -> Action:
        return self.action


@dataclass(frozen=True)
class PerHunk:
    """Keep the selected hunks, revert the others.

    Attributes:
        selected: Ids of hunks whose new side is used
        fallback: Side used for content no hunk can address
    """

    selected: frozenset[str]
    fallback: Action

    def is_selected(self, hunk: Hunk) -> bool:
        return hunk.id in self.selected


Decision = WholeFile | PerHunk


def _resolve_hunk_selector(file_diff: FileDiff, selector: HunkSelector, default: Action) -> PerHunk:
    """Map index and id references onto the file's hunks."""
    hunk_count = len(file_diff.hunks)
    selected: set[str] = set()

    for index in sorted(selector.indices()):
        if index >= hunk_count:
            raise SelectionError(
                file_diff.path,
                index,
                f"index out of range (file has {hunk_count} hunk(s))",
            )
        selected.add(file_diff.hunks[index].id)

    known_ids = set(file_diff.hunk_ids())
    for hunk_id in sorted(selector.id_set()):
        if hunk_id not in known_ids:
            raise SelectionError(
                file_diff.path,
                hunk_id,
                "id does not match any current hunk (regenerate ids with 'jj-hunk list')",
            )
        selected.add(hunk_id)

    return PerHunk(selected=frozenset(selected), fallback=default)


def resolve_file(
    file_diff: FileDiff,
    selector: WholeFileSelector | HunkSelector | None,
    default: Action,
) -> Decision:
    """Produce the decision for one file.

    Args:
        file_diff: The file's hunks
        selector: The file's entry in the spec, or None if unlisted
        default: The spec's default action

    Raises:
        SelectionError: If an index is out of range or an id is unknown.
    """
    if selector is None:
        return WholeFile(default)
    if isinstance(selector, WholeFileSelector):
        return WholeFile(selector.action)

    decision = _resolve_hunk_selector(file_diff, selector, default)
    logger.debug(
        "Resolved %s: %d of %d hunk(s) selected",
        file_diff.path,
        len(decision.selected),
        len(file_diff.hunks),
    )
    return decision


def resolve(file_diff: FileDiff, spec: SelectionSpec) -> Decision:
    """Produce the decision for one file from the whole spec."""
    return resolve_file(file_diff, spec.selector_for(file_diff.path), spec.default)
