"""Apply a selection spec to a pair of snapshot trees.

Every path in either tree is planned independently (read, diff, resolve,
reconstruct) on worker threads. Planning finishes for all files before the
first write, so any error leaves the new tree untouched.
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from jj_hunk.core.errors import DiffError, ReconstructionError
from jj_hunk.core.paths import atomic_write_bytes, list_snapshot_files, read_optional_bytes
from jj_hunk.diff.engine import compute_file_diff
from jj_hunk.diff.types import DiffOptions, FileDiff
from jj_hunk.select.reconstruct import reconstruct
from jj_hunk.select.resolver import Decision, resolve
from jj_hunk.select.spec import SelectionSpec

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 4


@dataclass(frozen=True)
class FileOutcome:
    """Planned result for one path.

    Attributes:
        path: Snapshot-relative path
        diff: Hunks between the two snapshots
        decision: Resolved decision
        current: Content currently in the new snapshot (None if absent)
        content: Content to leave in the new snapshot (None to remove it)
    """

    path: str
    diff: FileDiff
    decision: Decision
    current: bytes | None
    content: bytes | None

    @property
    def changed(self) -> bool:
        return self.content != self.current


def plan_file(
    path: str,
    left: Path,
    right: Path,
    spec: SelectionSpec,
    options: DiffOptions,
) -> FileOutcome:
    """Plan one path without touching the filesystem beyond reads.

    Raises:
        DiffError: If either snapshot file cannot be read.
        SelectionError: If the path's selector does not match its hunks.
    """
    try:
        old = read_optional_bytes(left / path)
        new = read_optional_bytes(right / path)
    except OSError as e:
        raise DiffError(f"Failed to read snapshot content for '{path}': {e}") from e

    file_diff = compute_file_diff(path, old, new, options)
    decision = resolve(file_diff, spec)
    content = reconstruct(file_diff, decision, old, new)
    return FileOutcome(path, file_diff, decision, new, content)


async def plan_selection(
    left: Path,
    right: Path,
    spec: SelectionSpec,
    options: DiffOptions | None = None,
    workers: int = DEFAULT_WORKERS,
) -> list[FileOutcome]:
    """Plan every path present in either snapshot.

    Args:
        left: Old snapshot root
        right: New snapshot root
        spec: Parsed selection spec
        options: Diff options (binary mode, truncation)
        workers: Maximum files planned concurrently

    Returns:
        Outcomes sorted by path.
    """
    options = options or DiffOptions()
    paths = sorted(list_snapshot_files(left) | list_snapshot_files(right))

    unknown = set(spec.files) - set(paths)
    for path in sorted(unknown):
        logger.info("Spec entry matches no file in the snapshot: %s", path)

    semaphore = asyncio.Semaphore(max(workers, 1))

    async def run(path: str) -> FileOutcome:
        async with semaphore:
            return await asyncio.to_thread(plan_file, path, left, right, spec, options)

    # gather keeps one slot per path in input order
    return list(await asyncio.gather(*(run(path) for path in paths)))


def apply_outcomes(right: Path, outcomes: list[FileOutcome]) -> int:
    """Write planned content into the new snapshot.

    Returns:
        Number of paths rewritten or removed.

    Raises:
        ReconstructionError: If a file cannot be written or removed.
    """
    written = 0
    for outcome in outcomes:
        if not outcome.changed:
            continue
        target = right / outcome.path
        try:
            if outcome.content is None:
                target.unlink(missing_ok=True)
                logger.debug("Removed %s", outcome.path)
            else:
                atomic_write_bytes(target, outcome.content)
                logger.debug("Rewrote %s", outcome.path)
        except OSError as e:
            raise ReconstructionError(f"Failed to write '{outcome.path}': {e}") from e
        written += 1
    return written


async def select_snapshots(
    left: Path,
    right: Path,
    spec: SelectionSpec,
    options: DiffOptions | None = None,
    workers: int = DEFAULT_WORKERS,
    dry_run: bool = False,
) -> list[FileOutcome]:
    """Plan and (unless dry_run) apply a selection to the new snapshot."""
    outcomes = await plan_selection(left, right, spec, options, workers)
    if dry_run:
        return outcomes
    written = apply_outcomes(right, outcomes)
    logger.info("Selection applied: %d of %d path(s) rewritten", written, len(outcomes))
    return outcomes
