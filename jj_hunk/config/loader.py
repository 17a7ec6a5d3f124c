"""Configuration loading with fail-fast behavior and layered merging.

Layers, later overriding earlier:
1. Global user config (~/.jj-hunk/config.json)
2. Repository local config (<cwd>/.jj-hunk/config.json)
"""

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from jj_hunk.config.load_utils import load_json_file, load_json_file_optional
from jj_hunk.config.schema import Config
from jj_hunk.core.constants import JJ_HUNK_DIR_NAME, get_default_config_path
from jj_hunk.core.errors import ConfigError, LoadError
from jj_hunk.core.utils import deep_merge

logger = logging.getLogger(__name__)


def load_config(
    path: Path | None = None,
    cwd: Path | None = None,
    global_path: Path | None = None,
) -> Config:
    """Load configuration from file with layered merging.

    Args:
        path: Explicit config file path. If provided, skips layered loading.
        cwd: Working directory for the local layer. Defaults to Path.cwd().
        global_path: Override for the global config file location.

    Returns:
        Validated Config object.

    Raises:
        ConfigError: If any config file contains invalid JSON or merged config
            fails validation.
    """
    if path is not None:
        return _load_from_path(path)

    effective_cwd = cwd or Path.cwd()
    layers = [
        global_path or get_default_config_path(),
        effective_cwd / JJ_HUNK_DIR_NAME / "config.json",
    ]

    merged: dict[str, Any] = {}
    loaded_from: list[Path] = []
    for layer in layers:
        try:
            data = load_json_file_optional(layer, error_context="config")
        except LoadError as e:
            raise ConfigError(e.message) from e
        if data:
            merged = deep_merge(merged, data)
            loaded_from.append(layer)

    if loaded_from:
        logger.info("Config loaded from: %s", [str(p) for p in loaded_from])
    else:
        logger.debug("No config files found, using Pydantic defaults")
        return Config()

    try:
        return Config.model_validate(merged)
    except ValidationError as e:
        sources = ", ".join(str(p) for p in loaded_from)
        raise ConfigError(f"Config validation failed (merged from {sources}): {e}") from e


def _load_from_path(path: Path) -> Config:
    """Load and validate config from a specific path.

    Raises:
        ConfigError: If file doesn't exist, contains invalid JSON, or fails validation.
    """
    try:
        data = load_json_file(path, error_context="config")
    except LoadError as e:
        raise ConfigError(e.message) from e

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Config validation failed for {path}: {e}") from e
