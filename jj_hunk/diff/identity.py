"""Content-addressed hunk identifiers.

A hunk id is reproducible across processes for the same path, kind, text,
and ranges, and changes if any of them changes. Position indices shift when
unrelated hunks come and go; ids do not.
"""

import hashlib
import string

from jj_hunk.core.constants import HUNK_ID_PREFIX
from jj_hunk.diff.types import HunkKind, LineRange

# Prefixes accepted on user-supplied ids, besides HUNK_ID_PREFIX
_ID_ALIASES = ("id:", "sha256:", "sha:")

_HEX_DIGITS = frozenset(string.hexdigits)


def compute_hunk_id(
    path: str,
    kind: HunkKind,
    removed: str,
    added: str,
    before_range: LineRange,
    after_range: LineRange,
) -> str:
    """Hash the canonical serialization of a hunk into a prefixed hex id.

    Fields are labelled and NUL-separated so that no two distinct tuples
    serialize to the same bytes. Text is encoded with surrogateescape so
    opaque binary hunks hash their exact bytes.
    """
    fields = (
        ("path", path),
        ("type", kind.value),
        ("removed", removed),
        ("added", added),
        ("before", f"{before_range.start},{before_range.length}"),
        ("after", f"{after_range.start},{after_range.length}"),
    )
    hasher = hashlib.sha256()
    for label, value in fields:
        hasher.update(label.encode("ascii"))
        hasher.update(b"\0")
        hasher.update(str(len(value)).encode("ascii"))
        hasher.update(b"\0")
        hasher.update(value.encode("utf-8", "surrogateescape"))
        hasher.update(b"\0")
    return f"{HUNK_ID_PREFIX}{hasher.hexdigest()}"


def normalize_hunk_id(value: str) -> str | None:
    """Normalize a user-supplied hunk id.

    Accepts ``hunk-<hex>``, ``id:<hex>``, ``sha:<hex>``, ``sha256:<hex>`` or
    bare hex, in any case.

    Returns:
        The canonical ``hunk-<lowercase hex>`` form, or None if the value is
        empty or not hexadecimal.
    """
    trimmed = value.strip()
    if not trimmed:
        return None

    hex_part = trimmed
    for prefix in (HUNK_ID_PREFIX, *_ID_ALIASES):
        if trimmed.startswith(prefix):
            hex_part = trimmed[len(prefix):]
            break

    if not hex_part or not all(c in _HEX_DIGITS for c in hex_part):
        return None

    return f"{HUNK_ID_PREFIX}{hex_part.lower()}"
