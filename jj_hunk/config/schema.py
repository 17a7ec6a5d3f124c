"""Pydantic models for jj-hunk configuration validation."""

from pydantic import BaseModel, ConfigDict, Field

from jj_hunk.diff.types import BinaryMode, DiffOptions
from jj_hunk.listing.render import ListFormat, ListGrouping


class JjConfig(BaseModel):
    """How to invoke jj.

    Example in config.json:
        "jj": {"executable": "/usr/local/bin/jj", "timeout": 120}
    """

    model_config = ConfigDict(extra="forbid")

    executable: str = "jj"
    """jj binary name or path."""

    timeout: float = Field(default=60.0, gt=0)
    """Timeout in seconds for jj commands whose output is captured."""


class DiffConfig(BaseModel):
    """Diff engine settings shared by `list` and `select`.

    `select` runs as a jj tool with no flags of its own, so hunk ids only
    match between `list` and `select` when both use the same limits.
    """

    model_config = ConfigDict(extra="forbid")

    binary: BinaryMode = BinaryMode.MARK
    """Binary handling: skip, mark, or include."""

    max_bytes: int | None = Field(default=None, ge=0)
    """Truncate each side to this many bytes before diffing."""

    max_lines: int | None = Field(default=None, ge=0)
    """Truncate each side to this many lines before diffing."""

    def to_options(self) -> DiffOptions:
        return DiffOptions(binary=self.binary, max_bytes=self.max_bytes, max_lines=self.max_lines)


class ListConfig(BaseModel):
    """Defaults for `jj-hunk list`."""

    model_config = ConfigDict(extra="forbid")

    format: ListFormat = ListFormat.JSON
    group: ListGrouping = ListGrouping.NONE


class SelectConfig(BaseModel):
    """Settings for `jj-hunk select`."""

    model_config = ConfigDict(extra="forbid")

    workers: int = Field(default=4, ge=1, le=64)
    """Maximum files planned concurrently."""


class Config(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(extra="forbid")

    jj: JjConfig = JjConfig()
    diff: DiffConfig = DiffConfig()
    list: ListConfig = ListConfig()
    select: SelectConfig = SelectConfig()
