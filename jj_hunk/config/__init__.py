"""Configuration loading and validation."""

from jj_hunk.config.loader import load_config
from jj_hunk.config.schema import Config, DiffConfig, JjConfig, ListConfig, SelectConfig

__all__ = [
    "Config",
    "DiffConfig",
    "JjConfig",
    "ListConfig",
    "SelectConfig",
    "load_config",
]
