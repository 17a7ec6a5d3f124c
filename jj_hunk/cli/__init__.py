"""Command-line interface for jj-hunk."""
