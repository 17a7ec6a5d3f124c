"""Subprocess adapter for the jj version control system.

Reads change summaries and file contents for listing, and drives
split/commit/squash with jj-hunk installed as the diff editor tool. The
spec reaches the tool through a temporary file whose path is exported in
the JJ_HUNK_SELECTION environment variable for the one jj invocation.
"""

import json
import logging
import os
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path

from jj_hunk.core.constants import SELECTION_ENV, TOOL_NAME
from jj_hunk.core.errors import VcsError
from jj_hunk.diff.types import FileStatus

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0

# jj template printing one JSON object per changed path
SUMMARY_TEMPLATE = (
    '"{\\"status\\":" ++ self.status().escape_json()'
    ' ++ ",\\"path\\":" ++ self.path().display().escape_json()'
    ' ++ ",\\"source\\":" ++ self.source().path().display().escape_json()'
    ' ++ ",\\"target\\":" ++ self.target().path().display().escape_json()'
    ' ++ "}\\n"'
)


@dataclass(frozen=True)
class DiffSummaryEntry:
    """One changed path as reported by ``jj diff``."""

    status: str
    path: str
    source: str = ""
    target: str = ""

    @property
    def primary_path(self) -> str:
        return self.path or self.target or self.source

    @property
    def file_status(self) -> FileStatus | None:
        try:
            return FileStatus(self.status)
        except ValueError:
            return None

    @property
    def rename_from(self) -> str | None:
        if self.status in ("renamed", "copied") and self.source:
            return self.source
        return None

    def all_paths(self) -> list[str]:
        """Path, source, and target without duplicates or blanks."""
        paths: list[str] = []
        for candidate in (self.path, self.source, self.target):
            if candidate and candidate not in paths:
                paths.append(candidate)
        return paths

    def before_path(self) -> str | None:
        """Path to read on the old side, None for added files."""
        if self.status == "added":
            return None
        if self.status in ("renamed", "copied"):
            return self.source or self.primary_path
        return self.primary_path

    def after_path(self) -> str | None:
        """Path to read on the new side, None for removed files."""
        if self.status == "removed":
            return None
        if self.status in ("renamed", "copied"):
            return self.target or self.primary_path
        return self.primary_path


def resolve_revisions(rev: str | None) -> tuple[str, str | None]:
    """Get (old, new) revsets for a revision; new None means the working copy."""
    if rev is not None:
        return f"({rev})^", rev
    return "@-", None


def parse_diff_summary(output: str) -> list[DiffSummaryEntry]:
    """Parse the JSON-lines output of ``jj diff --template``."""
    entries: list[DiffSummaryEntry] = []
    for number, line in enumerate(output.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            raise VcsError(f"Failed to parse diff summary line {number}: {e}") from e
        entries.append(
            DiffSummaryEntry(
                status=data.get("status", ""),
                path=data.get("path", ""),
                source=data.get("source", ""),
                target=data.get("target", ""),
            )
        )
    return entries


class JjClient:
    """Runs jj commands for jj-hunk."""

    def __init__(
        self,
        executable: str = "jj",
        timeout: float = DEFAULT_TIMEOUT,
        cwd: Path | None = None,
    ) -> None:
        self._executable = executable
        self._timeout = timeout
        self._cwd = cwd

    def _run(
        self,
        args: list[str],
        env: dict[str, str] | None = None,
        capture: bool = True,
    ) -> subprocess.CompletedProcess[bytes]:
        cmd = [self._executable, *args]
        logger.debug("Running: %s", " ".join(cmd))
        try:
            return subprocess.run(
                cmd,
                cwd=str(self._cwd) if self._cwd else None,
                env=env,
                capture_output=capture,
                timeout=self._timeout if capture else None,
            )
        except FileNotFoundError as e:
            raise VcsError(f"jj executable not found: {self._executable}") from e
        except subprocess.TimeoutExpired as e:
            raise VcsError(f"jj {args[0]} timed out after {self._timeout}s") from e
        except OSError as e:
            raise VcsError(f"Failed to run jj {args[0]}: {e}") from e

    def diff_summary(self, rev: str | None = None) -> list[DiffSummaryEntry]:
        """List changed paths of a revision (working copy by default)."""
        args = ["diff", "--template", SUMMARY_TEMPLATE]
        if rev is not None:
            args.extend(["-r", rev])
        result = self._run(args)
        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            raise VcsError(f"jj diff failed: {stderr}")
        return parse_diff_summary(result.stdout.decode("utf-8", errors="replace"))

    def file_show(self, path: str, rev: str | None = None) -> bytes:
        """Read a file's content at a revision (working copy by default)."""
        args = ["file", "show"]
        if rev is not None:
            args.extend(["-r", rev])
        args.append(path)
        result = self._run(args)
        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            raise VcsError(f"jj file show failed for '{path}': {stderr}")
        return result.stdout

    def run_with_selection(self, args: list[str], spec_text: str) -> None:
        """Run a jj command that calls back into ``jj-hunk select``.

        The spec is written to a temporary file for the duration of the call.

        Raises:
            VcsError: If jj cannot be started or exits non-zero.
        """
        fd, spec_path = tempfile.mkstemp(prefix=f"{TOOL_NAME}-", suffix=".spec")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(spec_text)
            env = {**os.environ, SELECTION_ENV: spec_path}
            result = self._run(args, env=env, capture=False)
        finally:
            try:
                os.unlink(spec_path)
            except OSError:
                pass

        if result.returncode != 0:
            raise VcsError(f"jj {args[0]} failed (exit {result.returncode})")

    def split(self, spec_text: str, message: str, rev: str | None = None) -> None:
        args = ["split", f"--tool={TOOL_NAME}", "-m", message]
        if rev is not None:
            args.extend(["-r", rev])
        self.run_with_selection(args, spec_text)

    def commit(self, spec_text: str, message: str) -> None:
        self.run_with_selection(["commit", "-i", f"--tool={TOOL_NAME}", "-m", message], spec_text)

    def squash(self, spec_text: str, rev: str | None = None) -> None:
        args = ["squash", "-i", f"--tool={TOOL_NAME}"]
        if rev is not None:
            args.extend(["-r", rev])
        self.run_with_selection(args, spec_text)
