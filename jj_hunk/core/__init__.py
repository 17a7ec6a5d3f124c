"""Core utilities shared across jj-hunk."""
