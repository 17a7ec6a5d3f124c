"""Diff engine: turn two versions of a file into an ordered hunk sequence.

Content is classified as text or binary, truncated to the configured
limits, split into lines, and run through the Myers edit script. Runs of
non-equal steps become hunks; every gap between hunks is identical in both
versions.
"""

import logging

from jj_hunk.diff.identity import compute_hunk_id
from jj_hunk.diff.myers import Edit, EditOp, edit_script
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

logger = logging.getLogger(__name__)

# Unchanged lines captured on each side of a hunk for display
CONTEXT_LINES = 1


def split_lines(text: str) -> list[str]:
    """Split text on ``\\n`` keeping terminators; a trailing partial line is kept."""
    if not text:
        return []
    lines = text.split("\n")
    result = [line + "\n" for line in lines[:-1]]
    if lines[-1]:
        result.append(lines[-1])
    return result


def count_lines(text: str) -> int:
    """Count lines in a fragment, including an unterminated final line."""
    if not text:
        return 0
    count = text.count("\n")
    if not text.endswith("\n"):
        count += 1
    return count


def is_binary_data(data: bytes) -> bool:
    """Check if content is binary: a NUL byte or invalid UTF-8."""
    if not data:
        return False
    if b"\x00" in data:
        return True
    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        return True
    return False


def truncate_text(
    text: str, max_bytes: int | None = None, max_lines: int | None = None
) -> tuple[str, bool]:
    """Apply line then byte limits to text.

    The byte limit backs off to the end of the last whole line, so the
    result never ends in a partial line.

    Returns:
        Tuple of (possibly shortened text, whether anything was cut).
    """
    truncated = False
    result = text

    if max_lines is not None:
        lines = split_lines(result)
        if len(lines) > max_lines:
            result = "".join(lines[:max_lines])
            truncated = True

    if max_bytes is not None:
        encoded = result.encode("utf-8")
        if len(encoded) > max_bytes:
            head = encoded[:max_bytes]
            result = head[:head.rfind(b"\n") + 1].decode("utf-8")
            truncated = True

    return result, truncated


def determine_kind(removed: str, added: str) -> HunkKind:
    """Classify a hunk from its two sides."""
    if not removed and added:
        return HunkKind.INSERT
    if removed and not added:
        return HunkKind.DELETE
    return HunkKind.REPLACE


def _build_context(old_lines: list[str], before_range: LineRange) -> HunkContext | None:
    """Collect the unchanged old-side lines around a hunk."""
    if not old_lines:
        return None

    start_idx = min(max(before_range.start - 1, 0), len(old_lines))
    pre = old_lines[max(start_idx - CONTEXT_LINES, 0):start_idx]
    after_idx = min(start_idx + before_range.length, len(old_lines))
    post = old_lines[after_idx:after_idx + CONTEXT_LINES]

    if not pre and not post:
        return None
    return HunkContext(before="".join(pre), after="".join(post))


def _make_hunk(
    path: str,
    index: int,
    removed: str,
    added: str,
    before_range: LineRange,
    after_range: LineRange,
    context: HunkContext | None,
) -> Hunk:
    kind = determine_kind(removed, added)
    return Hunk(
        index=index,
        id=compute_hunk_id(path, kind, removed, added, before_range, after_range),
        kind=kind,
        removed=removed,
        added=added,
        before_range=before_range,
        after_range=after_range,
        context=context,
    )


def get_hunks(path: str, old_text: str, new_text: str) -> list[Hunk]:
    """Extract the ordered hunks between two texts.

    Args:
        path: Repository-relative path, part of each hunk's identity
        old_text: Old version
        new_text: New version

    Returns:
        Hunks in ascending position order with indices assigned.

    Example:
        >>> hunks = get_hunks("f", "a\\nb\\nc\\n", "a\\nx\\nc\\n")
        >>> [(h.kind.value, h.removed, h.added) for h in hunks]
        [('replace', 'b\\n', 'x\\n')]
    """
    old_lines = split_lines(old_text)
    new_lines = split_lines(new_text)
    return _group_hunks(path, old_lines, new_lines, edit_script(old_lines, new_lines))


def cut_at_last_equal(script: list[Edit]) -> tuple[list[Edit], int, int]:
    """Cut an edit script over truncated prefixes after its last unchanged line.

    Steps past that line are left to the untouched tail.

    Returns:
        Tuple of (kept steps, old line count, new line count) where the
        counts locate the shared line boundary on each side.
    """
    for pos in range(len(script) - 1, -1, -1):
        op, old_idx, new_idx = script[pos]
        if op is EditOp.EQUAL:
            return script[:pos + 1], old_idx + 1, new_idx + 1
    return [], 0, 0


def _group_hunks(
    path: str,
    old_lines: list[str],
    new_lines: list[str],
    script: list[Edit],
) -> list[Hunk]:
    hunks: list[Hunk] = []

    removed: list[str] = []
    added: list[str] = []
    in_hunk = False
    before_start = after_start = 0

    def finalize() -> None:
        before_range = LineRange(before_start, len(removed))
        after_range = LineRange(after_start, len(added))
        hunks.append(
            _make_hunk(
                path,
                len(hunks),
                "".join(removed),
                "".join(added),
                before_range,
                after_range,
                _build_context(old_lines, before_range),
            )
        )
        removed.clear()
        added.clear()

    for op, old_idx, new_idx in script:
        if op is EditOp.EQUAL:
            if in_hunk:
                finalize()
                in_hunk = False
            continue

        if not in_hunk:
            in_hunk = True
            before_start = old_idx + 1
            after_start = new_idx + 1
        if op is EditOp.DELETE:
            removed.append(old_lines[old_idx])
        else:
            added.append(new_lines[new_idx])

    if in_hunk:
        finalize()

    return hunks


def _binary_hunk(path: str, old: bytes, new: bytes) -> Hunk | None:
    """Build the single opaque hunk used by BinaryMode.INCLUDE."""
    if old == new:
        return None
    removed = old.decode("utf-8", "surrogateescape")
    added = new.decode("utf-8", "surrogateescape")
    return _make_hunk(
        path,
        0,
        removed,
        added,
        LineRange(1, count_lines(removed)),
        LineRange(1, count_lines(added)),
        None,
    )


def infer_status(old: bytes | None, new: bytes | None) -> FileStatus:
    """Derive file status from which snapshot sides exist."""
    if old is None:
        return FileStatus.ADDED
    if new is None:
        return FileStatus.DELETED
    return FileStatus.MODIFIED


def compute_file_diff(
    path: str,
    old: bytes | None,
    new: bytes | None,
    options: DiffOptions | None = None,
    status: FileStatus | None = None,
    rename_from: str | None = None,
) -> FileDiff:
    """Diff one file's two versions.

    Args:
        path: Repository-relative path
        old: Old content, or None if the file does not exist there
        new: New content, or None if the file does not exist there
        options: Binary handling and truncation limits
        status: Status reported by the VCS; inferred when omitted
        rename_from: Source path for renames and copies

    Returns:
        FileDiff with hunks, or a hunk-less binary FileDiff. When either
        side is truncated, both cuts are set to the last line the two
        prefixes share, and only hunks before it are listed.
    """
    options = options or DiffOptions()
    status = status or infer_status(old, new)
    old_bytes = old or b""
    new_bytes = new or b""

    if is_binary_data(old_bytes) or is_binary_data(new_bytes):
        if options.binary is BinaryMode.SKIP:
            logger.debug("Skipping binary file: %s", path)
            return FileDiff(path, status, rename_from, is_binary=True, skipped=True)
        hunks: tuple[Hunk, ...] = ()
        if options.binary is BinaryMode.INCLUDE:
            hunk = _binary_hunk(path, old_bytes, new_bytes)
            hunks = (hunk,) if hunk is not None else ()
        return FileDiff(path, status, rename_from, is_binary=True, hunks=hunks)

    old_text = old_bytes.decode("utf-8")
    new_text = new_bytes.decode("utf-8")
    old_prefix, old_truncated = truncate_text(old_text, options.max_bytes, options.max_lines)
    new_prefix, new_truncated = truncate_text(new_text, options.max_bytes, options.max_lines)

    old_lines = split_lines(old_prefix)
    new_lines = split_lines(new_prefix)
    script = edit_script(old_lines, new_lines)

    old_cut: int | None = None
    new_cut: int | None = None
    if old_truncated or new_truncated:
        script, old_count, new_count = cut_at_last_equal(script)
        old_cut = sum(len(line) for line in old_lines[:old_count])
        new_cut = sum(len(line) for line in new_lines[:new_count])
        logger.debug(
            "Truncated %s after old line %d / new line %d", path, old_count, new_count
        )

    hunks = tuple(_group_hunks(path, old_lines, new_lines, script))
    logger.debug("Diffed %s: %d hunk(s)", path, len(hunks))

    return FileDiff(
        path,
        status,
        rename_from,
        old_cut=old_cut,
        new_cut=new_cut,
        hunks=hunks,
    )
