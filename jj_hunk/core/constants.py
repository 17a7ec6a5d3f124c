"""Core constants and paths for jj-hunk.

Single source of truth for global paths and the names shared with jj.
"""

from pathlib import Path

JJ_HUNK_DIR_NAME = ".jj-hunk"

# Environment variable carrying the spec file path to the `select` tool
SELECTION_ENV = "JJ_HUNK_SELECTION"

# Name under which jj invokes us as a diff editor (--tool=jj-hunk)
TOOL_NAME = "jj-hunk"

# File jj drops into the right-hand snapshot for interactive editors
INSTRUCTIONS_FILE = "JJ-INSTRUCTIONS"

HUNK_ID_PREFIX = "hunk-"


def get_global_dir() -> Path:
    """Get ~/.jj-hunk (global config directory)."""
    return Path.home() / JJ_HUNK_DIR_NAME


def get_default_config_path() -> Path:
    """Get global config file path."""
    return get_global_dir() / "config.json"
