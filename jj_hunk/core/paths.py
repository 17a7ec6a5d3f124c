"""Snapshot tree helpers: walking file trees and atomic writes."""

import os
import tempfile
from pathlib import Path

from jj_hunk.core.constants import INSTRUCTIONS_FILE


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """Write bytes to a file atomically using temp file + rename.

    The temp file is created in the same directory to ensure same-filesystem
    rename, so the file is never left in a partial state on interruption.
    Missing parent directories are created.

    Raises:
        OSError: If the file cannot be written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=".tmp_", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_path, str(path))
    except Exception:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def list_snapshot_files(root: Path) -> set[str]:
    """List files under a snapshot root as POSIX-style relative paths.

    The instructions file jj places next to the snapshot is not content and
    is left out. A missing root yields an empty set.
    """
    files: set[str] = set()
    if not root.is_dir():
        return files

    for dirpath, _dirnames, filenames in os.walk(root):
        for filename in filenames:
            full = Path(dirpath) / filename
            if not full.is_file():
                continue
            rel = full.relative_to(root).as_posix()
            if rel != INSTRUCTIONS_FILE:
                files.add(rel)
    return files


def read_optional_bytes(path: Path) -> bytes | None:
    """Read a file's bytes, or None if it does not exist."""
    if not path.is_file():
        return None
    return path.read_bytes()
