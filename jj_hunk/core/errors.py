"""Typed exception hierarchy for jj-hunk."""

from __future__ import annotations


class JjHunkError(Exception):
    """Base class for all jj-hunk errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(JjHunkError):
    """Raised for configuration issues (missing file, invalid JSON, validation failure)."""


class LoadError(JjHunkError):
    """Raised when a JSON document on disk cannot be loaded."""


class SpecError(JjHunkError):
    """Raised for an invalid selection spec."""


class SpecParseError(SpecError):
    """Malformed selection document (syntax, unknown field, action + hunks)."""


class SelectionError(JjHunkError):
    """Raised when a selector does not match the current hunks of a file."""

    def __init__(self, path: str, selector: int | str, reason: str) -> None:
        self.path = path
        self.selector = selector
        self.reason = reason
        super().__init__(f"Invalid hunk selector {selector!r} for '{path}': {reason}")


class DiffError(JjHunkError):
    """Raised when snapshot content cannot be read or diffed."""


class ReconstructionError(JjHunkError):
    """Raised when reconstructed content cannot be written back."""


class VcsError(JjHunkError):
    """Raised when the host VCS invocation fails."""


class UsageError(JjHunkError):
    """Raised for invalid combinations of command-line arguments."""
