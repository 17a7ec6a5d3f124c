"""Include/exclude glob filtering of changed paths.

Patterns are matched one ``/`` segment at a time: ``**`` spans zero or more
segments, while ``*`` and ``?`` stay inside a single segment.
"""

from collections.abc import Iterable
from fnmatch import fnmatchcase


def normalize_patterns(patterns: Iterable[str]) -> list[str]:
    """Split comma-separated patterns and drop blanks."""
    result: list[str] = []
    for pattern in patterns:
        for part in pattern.split(","):
            part = part.strip()
            if part:
                result.append(part)
    return result


def _strip_dot_slash(value: str) -> str:
    while value.startswith("./"):
        value = value[2:]
    return value


def _match_segments(pattern: list[str], path: list[str]) -> bool:
    if not pattern:
        return not path

    if pattern[0] == "**":
        if _match_segments(pattern[1:], path):
            return True
        return bool(path) and _match_segments(pattern, path[1:])

    if not path:
        return False
    if not fnmatchcase(path[0], pattern[0]):
        return False
    return _match_segments(pattern[1:], path[1:])


def glob_match(pattern: str, path: str) -> bool:
    """Match a repository path against a glob pattern.

    Example:
        >>> glob_match("src/**/*.py", "src/pkg/mod.py")
        True
        >>> glob_match("*.py", "src/mod.py")
        False
    """
    pattern = _strip_dot_slash(pattern)
    path = _strip_dot_slash(path)
    if not pattern:
        return not path

    pattern_segments = [s for s in pattern.split("/") if s]
    path_segments = [s for s in path.split("/") if s]
    return _match_segments(pattern_segments, path_segments)


def matches_any(patterns: list[str], path: str) -> bool:
    return any(glob_match(pattern, path) for pattern in patterns)


def should_include(paths: list[str], include: list[str], exclude: list[str]) -> bool:
    """Apply include then exclude patterns to all paths of one change."""
    if include and not any(matches_any(include, path) for path in paths):
        return False
    if exclude and any(matches_any(exclude, path) for path in paths):
        return False
    return True
