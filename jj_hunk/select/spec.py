"""Selection spec models and parsing.

A selection spec maps repository paths to selectors plus a default action
for unlisted paths. A selector is either a whole-file action or a set of
hunk references; the two shapes are mutually exclusive and validated when
the document is parsed.

Example spec (JSON or YAML):
    {
        "files": {
            "src/lib.rs": {"hunks": [0, "hunk-3fa1..."]},
            "README.md": {"action": "keep"}
        },
        "default": "reset"
    }
"""

import json
import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Any, TextIO

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from jj_hunk.core.errors import SpecError, SpecParseError
from jj_hunk.diff.identity import normalize_hunk_id

logger = logging.getLogger(__name__)

# Spec argument value meaning "read the spec from standard input"
STDIN_SENTINEL = "-"


class Action(str, Enum):
    """Whole-file outcome."""

    KEEP = "keep"  # use the new content
    RESET = "reset"  # use the old content


def _normalize_id_list(values: Any, field_name: str) -> list[str]:
    if values is None:
        return []
    if not isinstance(values, list):
        raise ValueError(f"'{field_name}' must be a list")
    normalized = []
    for value in values:
        if not isinstance(value, str):
            raise ValueError(f"Invalid hunk id selector: {value!r}")
        hunk_id = normalize_hunk_id(value)
        if hunk_id is None:
            raise ValueError(f"Invalid hunk id selector: {value!r}")
        normalized.append(hunk_id)
    return normalized


class WholeFileSelector(BaseModel):
    """Keep or reset an entire file, bypassing per-hunk selection."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    action: Action


class HunkSelector(BaseModel):
    """Select individual hunks by index or id.

    ``hunks`` accepts indices (integers or decimal strings) and ids mixed;
    ``ids`` accepts ids only. Both are unioned at resolution time.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    hunks: list[int | str] = Field(default_factory=list)
    ids: list[str] = Field(default_factory=list)

    @field_validator("hunks", mode="before")
    @classmethod
    def _normalize_hunks(cls, values: Any) -> list[int | str]:
        if values is None:
            return []
        if not isinstance(values, list):
            raise ValueError("'hunks' must be a list")
        normalized: list[int | str] = []
        for value in values:
            # bool is an int subclass; true/false are never indices
            if isinstance(value, bool):
                raise ValueError(f"Invalid hunk selector: {value!r}")
            if isinstance(value, int):
                if value < 0:
                    raise ValueError(f"Invalid hunk selector: {value} (negative index)")
                normalized.append(value)
            elif isinstance(value, str):
                trimmed = value.strip()
                if not trimmed:
                    raise ValueError("Invalid hunk selector: empty value")
                if trimmed.isdecimal():
                    normalized.append(int(trimmed))
                    continue
                hunk_id = normalize_hunk_id(trimmed)
                if hunk_id is None:
                    raise ValueError(f"Invalid hunk selector: {value!r}")
                normalized.append(hunk_id)
            else:
                raise ValueError(f"Invalid hunk selector: {value!r}")
        return normalized

    @field_validator("ids", mode="before")
    @classmethod
    def _normalize_ids(cls, values: Any) -> list[str]:
        return _normalize_id_list(values, "ids")

    def indices(self) -> set[int]:
        """Indices referenced from ``hunks``."""
        return {value for value in self.hunks if isinstance(value, int)}

    def id_set(self) -> set[str]:
        """Ids referenced from ``hunks`` and ``ids``."""
        refs = {value for value in self.hunks if isinstance(value, str)}
        refs.update(self.ids)
        return refs

    def is_empty(self) -> bool:
        return not self.hunks and not self.ids


FileSelector = WholeFileSelector | HunkSelector


class SelectionSpec(BaseModel):
    """Per-path selectors plus the action for unlisted paths."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    files: dict[str, FileSelector] = Field(default_factory=dict)
    default: Action = Action.RESET

    @model_validator(mode="before")
    @classmethod
    def _check_selectors(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        files = data.get("files")
        if files is None:
            return {**data, "files": {}}
        if not isinstance(files, dict):
            raise ValueError("'files' must be a mapping of path to selector")
        checked: dict[str, Any] = {}
        for path, selector in files.items():
            if isinstance(selector, dict) and "action" in selector and (
                "hunks" in selector or "ids" in selector
            ):
                raise ValueError(
                    f"Selector for '{path}' sets both 'action' and 'hunks'/'ids'; "
                    "action is exclusive"
                )
            # YAML may load keys like 2024 or true as non-strings
            checked[str(path)] = selector
        return {**data, "files": checked}

    def selector_for(self, path: str) -> FileSelector | None:
        """Get the selector listed for a path, or None if unlisted."""
        return self.files.get(path)


def parse_spec(text: str) -> SelectionSpec:
    """Parse a JSON or YAML selection document.

    JSON is tried first; YAML is the fallback.

    Raises:
        SpecParseError: If the document is neither valid JSON nor YAML, is
            not a mapping, or does not match the spec shape.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as json_err:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as yaml_err:
            raise SpecParseError(
                f"Failed to parse spec as JSON ({json_err}) or YAML ({yaml_err})"
            ) from yaml_err

    if data is None:
        raise SpecParseError("Spec is empty")
    if not isinstance(data, dict):
        raise SpecParseError(f"Spec must be a mapping, got {type(data).__name__}")

    try:
        spec = SelectionSpec.model_validate(data)
    except ValidationError as e:
        raise SpecParseError(f"Invalid spec: {e}") from e

    logger.debug("Parsed spec: %d file selector(s), default=%s", len(spec.files), spec.default.value)
    return spec


def resolve_spec_input(
    spec: str | None,
    spec_file: str | None,
    stdin: TextIO | None = None,
) -> str:
    """Get spec text from a file, stdin, or the inline argument.

    Args:
        spec: Inline spec text, or "-" to read standard input
        spec_file: Path to a spec file; takes precedence over ``spec``
        stdin: Stream used for "-" (defaults to sys.stdin)

    Raises:
        SpecError: If no spec was given, stdin is empty, or the file is unreadable.
    """
    if spec_file is not None:
        if not spec_file:
            raise SpecError("Spec file path is empty")
        try:
            return Path(spec_file).read_text(encoding="utf-8")
        except OSError as e:
            raise SpecError(f"Failed to read spec file {spec_file}: {e}") from e

    if spec is None:
        raise SpecError("Spec is required (or use --spec-file)")

    if spec == STDIN_SENTINEL:
        stream = stdin if stdin is not None else sys.stdin
        buffer = stream.read()
        if not buffer.strip():
            raise SpecError("Spec from stdin is empty")
        return buffer

    return spec


def load_spec_file(path: Path) -> SelectionSpec:
    """Read and parse a spec file handed over by the caller."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SpecError(f"Failed to read spec from {path}: {e}") from e
    return parse_spec(text)
