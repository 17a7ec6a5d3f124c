"""Programmatic hunk selection for jj."""

__version__ = "0.1.0"
