"""Types for line-level hunk representation.

This module provides dataclasses for representing the hunks between two
versions of a file in a structured format suitable for listing, selection,
and reconstruction.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class HunkKind(str, Enum):
    """Shape of a hunk."""

    INSERT = "insert"  # old range empty
    DELETE = "delete"  # new range empty
    REPLACE = "replace"  # both non-empty


class FileStatus(str, Enum):
    """How a file changed between the two snapshots."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "removed"
    RENAMED = "renamed"
    COPIED = "copied"


class BinaryMode(str, Enum):
    """How binary content is handled."""

    SKIP = "skip"  # excluded from output, always left unchanged
    MARK = "mark"  # flagged, eligible for whole-file keep/reset
    INCLUDE = "include"  # one opaque replace hunk spanning the file


@dataclass(frozen=True)
class DiffOptions:
    """Knobs applied when diffing one file.

    Attributes:
        binary: Binary handling mode
        max_bytes: Truncate each side to this many bytes before diffing
        max_lines: Truncate each side to this many lines before diffing
    """

    binary: BinaryMode = BinaryMode.MARK
    max_bytes: int | None = None
    max_lines: int | None = None


@dataclass(frozen=True)
class LineRange:
    """A run of lines: 1-based start line and line count."""

    start: int
    length: int

    def to_dict(self) -> dict[str, int]:
        return {"start": self.start, "lines": self.length}


@dataclass(frozen=True)
class HunkContext:
    """Unchanged line immediately before and after a hunk (display only)."""

    before: str
    after: str

    def to_dict(self) -> dict[str, str]:
        return {"pre": self.before, "post": self.after}


@dataclass(frozen=True)
class Hunk:
    """One contiguous region where old and new content diverge.

    Attributes:
        index: 0-based position among the file's hunks
        id: Content-addressed identifier, stable across runs
        kind: Insert, delete, or replace
        removed: Exact old-side text including line terminators
        added: Exact new-side text including line terminators
        before_range: Lines covered in the old version
        after_range: Lines covered in the new version
        context: Neighbouring unchanged lines, for display
    """

    index: int
    id: str
    kind: HunkKind
    removed: str
    added: str
    before_range: LineRange
    after_range: LineRange
    context: HunkContext | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the listing field names."""
        data: dict[str, Any] = {
            "index": self.index,
            "id": self.id,
            "type": self.kind.value,
            "removed": self.removed,
            "added": self.added,
            "before": self.before_range.to_dict(),
            "after": self.after_range.to_dict(),
        }
        if self.context is not None:
            data["context"] = self.context.to_dict()
        return data


@dataclass(frozen=True)
class FileDiff:
    """All hunks for a single file.

    Attributes:
        path: Repository-relative path (new side for renames)
        status: How the file changed
        rename_from: Source path for renames and copies
        is_binary: Either side is binary content
        skipped: Binary file excluded by BinaryMode.SKIP; always left unchanged
        old_cut: Character offset in the old text where hunks stop, set on
            both sides when either side was truncated
        new_cut: Matching character offset in the new text
        hunks: Hunks in ascending position order
    """

    path: str
    status: FileStatus
    rename_from: str | None = None
    is_binary: bool = False
    skipped: bool = False
    old_cut: int | None = None
    new_cut: int | None = None
    hunks: tuple[Hunk, ...] = field(default_factory=tuple)

    @property
    def truncated(self) -> bool:
        return self.old_cut is not None or self.new_cut is not None

    def hunk_ids(self) -> list[str]:
        """Get hunk ids in order."""
        return [hunk.id for hunk in self.hunks]
