"""Unit tests for jj_hunk.select.reconstruct module."""

from dataclasses import replace

import pytest

from jj_hunk.core.errors import DiffError
from jj_hunk.diff.engine import compute_file_diff
from jj_hunk.diff.types import BinaryMode, DiffOptions
from jj_hunk.select.reconstruct import reconstruct
from jj_hunk.select.resolver import PerHunk, WholeFile
from jj_hunk.select.spec import Action


def select(old: bytes | None, new: bytes | None, indices: list[int],
           fallback: Action = Action.RESET, options: DiffOptions | None = None) -> bytes | None:
    """Diff, select hunks by index, and reconstruct."""
    diff = compute_file_diff("f.txt", old, new, options)
    decision = PerHunk(frozenset(diff.hunks[i].id for i in indices), fallback)
    return reconstruct(diff, decision, old, new)


class TestReconstructPerHunk:
    """Tests for per-hunk reconstruction."""

    def test_keep_single_hunk(self) -> None:
        assert select(b"a\nb\nc\n", b"a\nx\nc\n", [0]) == b"a\nx\nc\n"

    def test_revert_single_hunk(self) -> None:
        assert select(b"a\nb\nc\n", b"a\nx\nc\n", []) == b"a\nb\nc\n"

    def test_keep_first_of_two(self) -> None:
        assert select(b"1\n2\n3\n4\n", b"1\nX\n3\nY\n", [0]) == b"1\nX\n3\n4\n"

    def test_keep_second_of_two(self) -> None:
        assert select(b"1\n2\n3\n4\n", b"1\nX\n3\nY\n", [1]) == b"1\n2\n3\nY\n"

    def test_all_selected_is_new(self) -> None:
        old = b"keep\nold1\nkeep\nold2\nkeep\n"
        new = b"new0\nkeep\nnew1\nkeep\nkeep\nnew2\n"
        diff = compute_file_diff("f.txt", old, new)

        assert select(old, new, list(range(len(diff.hunks)))) == new

    def test_mixed_insert_delete_replace(self) -> None:
        """Each hunk kind can be kept independently."""
        old = b"a\nb\nc\nd\ne\n"
        new = b"a\nINS\nb\nd\nE\n"
        diff = compute_file_diff("f.txt", old, new)
        kinds = [h.kind.value for h in diff.hunks]

        assert kinds == ["insert", "delete", "replace"]
        assert select(old, new, [0]) == b"a\nINS\nb\nc\nd\ne\n"
        assert select(old, new, [1]) == b"a\nb\nd\ne\n"
        assert select(old, new, [2]) == b"a\nb\nc\nd\nE\n"
        assert select(old, new, [0, 2]) == b"a\nINS\nb\nc\nd\nE\n"

    def test_line_endings_preserved(self) -> None:
        assert select(b"a\r\nb\r\n", b"a\r\nB\r\n", [0]) == b"a\r\nB\r\n"

    def test_missing_final_newline(self) -> None:
        assert select(b"a\nb", b"a\nc", [0]) == b"a\nc"

    def test_non_ascii_text(self) -> None:
        old = "α\nβ\nγ\n".encode("utf-8")
        new = "α\nΒ\nγ\nδ\n".encode("utf-8")

        assert select(old, new, [1]) == "α\nβ\nγ\nδ\n".encode("utf-8")

    def test_added_file_nothing_selected(self) -> None:
        """Reverting every hunk of an added file removes it."""
        assert select(None, b"a\n", []) is None

    def test_added_file_selected(self) -> None:
        assert select(None, b"a\n", [0]) == b"a\n"

    def test_removed_file_selected(self) -> None:
        """Keeping the deletion removes the file."""
        assert select(b"a\n", None, [0]) is None


class TestReconstructWholeFile:
    """Tests for whole-file decisions."""

    def test_keep_and_reset(self) -> None:
        diff = compute_file_diff("f.txt", b"old\n", b"new\n")

        assert reconstruct(diff, WholeFile(Action.KEEP), b"old\n", b"new\n") == b"new\n"
        assert reconstruct(diff, WholeFile(Action.RESET), b"old\n", b"new\n") == b"old\n"

    def test_reset_added_file_removes_it(self) -> None:
        diff = compute_file_diff("f.txt", None, b"new\n")

        assert reconstruct(diff, WholeFile(Action.RESET), None, b"new\n") is None

    def test_keep_deleted_file_removes_it(self) -> None:
        diff = compute_file_diff("f.txt", b"old\n", None)

        assert reconstruct(diff, WholeFile(Action.KEEP), b"old\n", None) is None


class TestReconstructBinary:
    """Tests for binary files."""

    old = b"\x00\x01\x02"
    new = b"\x00\x09"

    def test_skipped_binary_is_left_unchanged(self) -> None:
        diff = compute_file_diff("b.bin", self.old, self.new, DiffOptions(binary=BinaryMode.SKIP))

        assert reconstruct(diff, WholeFile(Action.RESET), self.old, self.new) == self.old
        assert reconstruct(diff, WholeFile(Action.KEEP), self.old, self.new) == self.old

    def test_marked_binary_follows_fallback(self) -> None:
        diff = compute_file_diff("b.bin", self.old, self.new)

        keep = PerHunk(frozenset(), Action.KEEP)
        reset = PerHunk(frozenset(), Action.RESET)
        assert reconstruct(diff, keep, self.old, self.new) == self.new
        assert reconstruct(diff, reset, self.old, self.new) == self.old

    def test_included_binary_hunk(self) -> None:
        options = DiffOptions(binary=BinaryMode.INCLUDE)

        assert select(self.old, self.new, [0], options=options) == self.new
        assert select(self.old, self.new, [], options=options) == self.old


class TestReconstructTruncated:
    """Tests for files diffed with truncation limits."""

    old = b"a\nb\nc\nd\n"
    new = b"a\nB\nc\nD\n"
    options = DiffOptions(max_lines=3)

    def test_tail_from_old_on_reset(self) -> None:
        assert select(self.old, self.new, [0], Action.RESET, self.options) == b"a\nB\nc\nd\n"

    def test_tail_from_new_on_keep(self) -> None:
        assert select(self.old, self.new, [0], Action.KEEP, self.options) == self.new

    def test_reverted_prefix_with_new_tail(self) -> None:
        assert select(self.old, self.new, [], Action.KEEP, self.options) == b"a\nb\nc\nD\n"

    def test_nothing_selected_reset_is_old(self) -> None:
        assert select(self.old, self.new, [], Action.RESET, self.options) == self.old

    def test_change_past_shared_line_follows_fallback(self) -> None:
        """A change the prefixes cannot place belongs to the tail."""
        options = DiffOptions(max_lines=2)

        assert select(self.old, self.new, [], Action.KEEP, options) == self.new
        assert select(self.old, self.new, [], Action.RESET, options) == self.old


def output_lines_come_from_inputs(result: bytes, old: bytes, new: bytes) -> bool:
    known = set(old.splitlines(keepends=True)) | set(new.splitlines(keepends=True))
    return all(line in known for line in result.splitlines(keepends=True))


class TestReconstructMisalignedCuts:
    """Tests for truncated files whose sides diverge before the limit."""

    def test_byte_limit_inside_changed_line(self) -> None:
        """A line cut by the byte limit is never half applied."""
        old = b"a\nb\ncc\n"
        new = b"a\nb\ncXYZ\n"
        options = DiffOptions(max_bytes=6)

        assert compute_file_diff("f.txt", old, new, options).hunks == ()
        assert select(old, new, [], Action.RESET, options) == old
        assert select(old, new, [], Action.KEEP, options) == new

    def test_insertion_before_limit(self) -> None:
        old = b"a\nb\nc\n"
        new = b"x\na\nb\nc\n"
        options = DiffOptions(max_lines=2)

        assert select(old, new, [], Action.KEEP, options) == b"a\nb\nc\n"
        assert select(old, new, [], Action.RESET, options) == old
        assert select(old, new, [0], Action.RESET, options) == new
        assert select(old, new, [0], Action.KEEP, options) == new

    def test_deletion_before_limit(self) -> None:
        old = b"x\na\nb\nc\n"
        new = b"a\nb\nc\n"
        options = DiffOptions(max_lines=2)

        assert select(old, new, [], Action.KEEP, options) == old
        assert select(old, new, [0], Action.RESET, options) == new

    def test_every_selection_uses_only_existing_lines(self) -> None:
        """No selection under any limit produces a line absent from both versions."""
        old = b"h\nx\na\nb\nc\nd\ne\n"
        new = b"h\na\nY\nb\nc\nD\ne\nf\n"
        for options in (
            DiffOptions(max_lines=3),
            DiffOptions(max_lines=4),
            DiffOptions(max_bytes=5),
            DiffOptions(max_bytes=9),
        ):
            diff = compute_file_diff("f.txt", old, new, options)
            count = len(diff.hunks)
            for mask in range(2 ** count):
                indices = [i for i in range(count) if mask & (1 << i)]
                for fallback in (Action.RESET, Action.KEEP):
                    result = select(old, new, indices, fallback, options)
                    assert output_lines_come_from_inputs(result, old, new)

    def test_missing_cut_raises(self) -> None:
        old = b"a\nb\nc\n"
        new = b"x\na\nb\nc\n"
        diff = replace(
            compute_file_diff("f.txt", old, new, DiffOptions(max_lines=2)), new_cut=None
        )

        with pytest.raises(DiffError):
            reconstruct(diff, PerHunk(frozenset(), Action.KEEP), old, new)
