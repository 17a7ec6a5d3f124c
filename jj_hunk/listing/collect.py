"""Collect the hunks of a jj revision for listing.

This is a read-only view over the diff engine. With a candidate spec the
listing becomes a preview: only what the spec would keep is shown.
"""

import logging
from dataclasses import dataclass, field

from jj_hunk.diff.engine import compute_file_diff
from jj_hunk.diff.types import DiffOptions, FileDiff, Hunk
from jj_hunk.listing.filters import normalize_patterns, should_include
from jj_hunk.listing.render import ListedFile
from jj_hunk.select.resolver import WholeFile, resolve
from jj_hunk.select.spec import Action, SelectionSpec, WholeFileSelector
from jj_hunk.vcs.jj import JjClient, resolve_revisions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListOptions:
    """What to list and how to diff it."""

    rev: str | None = None
    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    diff: DiffOptions = field(default_factory=DiffOptions)
    spec: SelectionSpec | None = None


def spec_resets_file(spec: SelectionSpec, path: str) -> bool:
    """Whether a spec resets a whole file, so nothing of it would be kept."""
    selector = spec.selector_for(path)
    if selector is None:
        return spec.default is Action.RESET
    return isinstance(selector, WholeFileSelector) and selector.action is Action.RESET


def preview_hunks(file_diff: FileDiff, spec: SelectionSpec | None) -> tuple[Hunk, ...] | None:
    """Get the hunks a spec would keep, or None if it keeps none of the file.

    Raises:
        SelectionError: If the file's selector does not match its hunks.
    """
    if spec is None:
        return file_diff.hunks

    decision = resolve(file_diff, spec)
    if isinstance(decision, WholeFile):
        return file_diff.hunks if decision.action is Action.KEEP else None
    if not decision.selected:
        return None
    return tuple(hunk for hunk in file_diff.hunks if decision.is_selected(hunk))


def collect_changes(client: JjClient, options: ListOptions) -> list[ListedFile]:
    """Diff every changed path of a revision that passes the filters.

    Returns:
        Listed files in the order jj reports them. Files with no hunks are
        dropped unless binary; skipped binaries are always dropped.
    """
    include = normalize_patterns(options.include)
    exclude = normalize_patterns(options.exclude)
    before_rev, after_rev = resolve_revisions(options.rev)

    listed: list[ListedFile] = []
    for entry in client.diff_summary(options.rev):
        path = entry.primary_path
        if not path:
            continue
        if not should_include(entry.all_paths(), include, exclude):
            continue
        if options.spec is not None and spec_resets_file(options.spec, path):
            logger.debug("Preview: %s is reset by spec", path)
            continue

        before_path = entry.before_path()
        after_path = entry.after_path()
        old = client.file_show(before_path, before_rev) if before_path else None
        new = client.file_show(after_path, after_rev) if after_path else None

        file_diff = compute_file_diff(
            path,
            old,
            new,
            options.diff,
            status=entry.file_status,
            rename_from=entry.rename_from,
        )
        if file_diff.skipped:
            continue

        hunks = preview_hunks(file_diff, options.spec)
        if hunks is None:
            continue
        if not hunks and not file_diff.is_binary:
            continue

        listed.append(ListedFile(file_diff, hunks))

    return listed
