"""Unit tests for jj_hunk.vcs.jj module."""

import os
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from jj_hunk.core.constants import SELECTION_ENV
from jj_hunk.core.errors import VcsError
from jj_hunk.diff.types import FileStatus
from jj_hunk.vcs.jj import (
    DiffSummaryEntry,
    JjClient,
    parse_diff_summary,
    resolve_revisions,
)


def completed(returncode: int = 0, stdout: bytes = b"", stderr: bytes = b"") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=["jj"], returncode=returncode, stdout=stdout, stderr=stderr)


class TestParseDiffSummary:
    """Tests for parse_diff_summary function."""

    def test_parses_json_lines(self) -> None:
        output = (
            '{"status":"modified","path":"src/a.py","source":"src/a.py","target":"src/a.py"}\n'
            "\n"
            '{"status":"renamed","path":"new.txt","source":"old.txt","target":"new.txt"}\n'
        )

        entries = parse_diff_summary(output)

        assert [e.path for e in entries] == ["src/a.py", "new.txt"]
        assert entries[1].rename_from == "old.txt"
        assert entries[1].file_status is FileStatus.RENAMED

    def test_bad_line(self) -> None:
        with pytest.raises(VcsError) as exc_info:
            parse_diff_summary('{"status":"added"}\nnot json\n')

        assert "line 2" in str(exc_info.value)


class TestDiffSummaryEntry:
    """Tests for DiffSummaryEntry paths."""

    def test_added(self) -> None:
        entry = DiffSummaryEntry("added", "new.txt", "", "new.txt")

        assert entry.before_path() is None
        assert entry.after_path() == "new.txt"
        assert entry.file_status is FileStatus.ADDED

    def test_removed(self) -> None:
        entry = DiffSummaryEntry("removed", "gone.txt", "gone.txt", "")

        assert entry.before_path() == "gone.txt"
        assert entry.after_path() is None
        assert entry.file_status is FileStatus.DELETED

    def test_renamed(self) -> None:
        entry = DiffSummaryEntry("renamed", "b.txt", "a.txt", "b.txt")

        assert entry.before_path() == "a.txt"
        assert entry.after_path() == "b.txt"
        assert entry.all_paths() == ["b.txt", "a.txt"]

    def test_unknown_status(self) -> None:
        assert DiffSummaryEntry("weird", "x").file_status is None


class TestResolveRevisions:
    """Tests for resolve_revisions function."""

    def test_working_copy(self) -> None:
        assert resolve_revisions(None) == ("@-", None)

    def test_explicit_revision(self) -> None:
        assert resolve_revisions("abc | def") == ("(abc | def)^", "abc | def")


class TestJjClient:
    """Tests for JjClient subprocess calls."""

    def test_diff_summary_command(self) -> None:
        client = JjClient(executable="/opt/jj", timeout=5)
        output = b'{"status":"modified","path":"f","source":"f","target":"f"}\n'

        with patch("jj_hunk.vcs.jj.subprocess.run", return_value=completed(stdout=output)) as run:
            entries = client.diff_summary("@-")

        cmd = run.call_args.args[0]
        assert cmd[:3] == ["/opt/jj", "diff", "--template"]
        assert cmd[-2:] == ["-r", "@-"]
        assert run.call_args.kwargs["timeout"] == 5
        assert entries[0].path == "f"

    def test_diff_summary_failure(self) -> None:
        client = JjClient()

        with patch(
            "jj_hunk.vcs.jj.subprocess.run",
            return_value=completed(1, stderr=b"Error: no jj repo"),
        ):
            with pytest.raises(VcsError) as exc_info:
                client.diff_summary()

        assert "no jj repo" in str(exc_info.value)

    def test_file_show(self) -> None:
        client = JjClient()

        with patch("jj_hunk.vcs.jj.subprocess.run", return_value=completed(stdout=b"data\x00")) as run:
            content = client.file_show("dir/f.bin", "@-")

        assert content == b"data\x00"
        assert run.call_args.args[0] == ["jj", "file", "show", "-r", "@-", "dir/f.bin"]

    def test_file_show_failure(self) -> None:
        client = JjClient()

        with patch("jj_hunk.vcs.jj.subprocess.run", return_value=completed(1, stderr=b"nope")):
            with pytest.raises(VcsError) as exc_info:
                client.file_show("f")

        assert "'f'" in str(exc_info.value)

    def test_missing_executable(self) -> None:
        client = JjClient(executable="no-such-jj")

        with patch("jj_hunk.vcs.jj.subprocess.run", side_effect=FileNotFoundError()):
            with pytest.raises(VcsError) as exc_info:
                client.diff_summary()

        assert "no-such-jj" in str(exc_info.value)

    def test_timeout(self) -> None:
        client = JjClient(timeout=1)

        with patch(
            "jj_hunk.vcs.jj.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="jj", timeout=1),
        ):
            with pytest.raises(VcsError) as exc_info:
                client.file_show("f")

        assert "timed out" in str(exc_info.value)


class TestRunWithSelection:
    """Tests for commands that hand a spec to the select tool."""

    def test_spec_file_handed_over_and_removed(self) -> None:
        client = JjClient()
        seen: dict[str, str] = {}

        def fake_run(cmd, **kwargs):
            spec_path = kwargs["env"][SELECTION_ENV]
            seen["path"] = spec_path
            seen["text"] = Path(spec_path).read_text(encoding="utf-8")
            seen["cmd"] = cmd
            assert kwargs["capture_output"] is False
            return completed()

        with patch("jj_hunk.vcs.jj.subprocess.run", side_effect=fake_run):
            client.split('{"default": "keep"}', "first part", "xyz")

        assert seen["text"] == '{"default": "keep"}'
        assert seen["cmd"] == ["jj", "split", "--tool=jj-hunk", "-m", "first part", "-r", "xyz"]
        assert not os.path.exists(seen["path"])

    def test_commit_and_squash_arguments(self) -> None:
        client = JjClient()

        with patch("jj_hunk.vcs.jj.subprocess.run", return_value=completed()) as run:
            client.commit("{}", "msg")
            commit_cmd = run.call_args.args[0]
            client.squash("{}")
            squash_cmd = run.call_args.args[0]

        assert commit_cmd == ["jj", "commit", "-i", "--tool=jj-hunk", "-m", "msg"]
        assert squash_cmd == ["jj", "squash", "-i", "--tool=jj-hunk"]

    def test_failure_still_removes_spec(self) -> None:
        client = JjClient()
        seen: dict[str, str] = {}

        def fake_run(cmd, **kwargs):
            seen["path"] = kwargs["env"][SELECTION_ENV]
            return completed(3)

        with patch("jj_hunk.vcs.jj.subprocess.run", side_effect=fake_run):
            with pytest.raises(VcsError) as exc_info:
                client.squash("{}", "@")

        assert "exit 3" in str(exc_info.value)
        assert not os.path.exists(seen["path"])
