"""Read JSON config layers."""

import json
import logging
from pathlib import Path
from typing import Any

from jj_hunk.core.errors import LoadError

logger = logging.getLogger(__name__)


def load_json_file(path: Path, error_context: str = "") -> dict[str, Any]:
    """Read a JSON object from ``path``; an empty file is an empty object.

    Raises:
        LoadError: If the file is missing, unreadable, not JSON, or not an object.
    """
    prefix = f"{error_context}: " if error_context else ""
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise LoadError(f"{prefix}File not found: {path}") from e
    except OSError as e:
        raise LoadError(f"{prefix}Failed to read {path}: {e}") from e

    if not content.strip():
        return {}

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise LoadError(f"{prefix}Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise LoadError(f"{prefix}Expected object in {path}, got {type(data).__name__}")
    return data


def load_json_file_optional(path: Path, error_context: str = "") -> dict[str, Any] | None:
    """Like load_json_file, but a missing layer yields None."""
    if not path.exists():
        logger.debug("No config layer at %s", path)
        return None
    return load_json_file(path, error_context)
