"""Host VCS integration."""

from jj_hunk.vcs.jj import DiffSummaryEntry, JjClient, parse_diff_summary, resolve_revisions

__all__ = [
    "DiffSummaryEntry",
    "JjClient",
    "parse_diff_summary",
    "resolve_revisions",
]
