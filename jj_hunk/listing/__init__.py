"""Listing module: read-only views over a revision's hunks.

Main components:
- Filters: glob_match(), should_include() - include/exclude patterns
- Collect: collect_changes() - diff a jj revision, optionally previewing a spec
- Render: build_list_output(), build_spec_template(), render() - JSON/YAML/text
"""

from jj_hunk.listing.collect import ListOptions, collect_changes, preview_hunks
from jj_hunk.listing.filters import glob_match, normalize_patterns, should_include
from jj_hunk.listing.render import (
    ListedFile,
    ListFormat,
    ListGrouping,
    ListMode,
    build_list_output,
    build_spec_template,
    render,
)

__all__ = [
    "ListFormat",
    "ListGrouping",
    "ListMode",
    "ListOptions",
    "ListedFile",
    "build_list_output",
    "build_spec_template",
    "collect_changes",
    "glob_match",
    "normalize_patterns",
    "preview_hunks",
    "render",
    "should_include",
]
