"""Myers O(ND) shortest edit script over line sequences.

The forward greedy pass follows every diagonal (run of equal lines) as far
as it goes before spending an edit, so among the minimal scripts the one
returned places insertions and deletions as late as possible. Within one
edit step a deletion is preferred over an insertion.
"""

from collections.abc import Sequence
from enum import Enum


class EditOp(Enum):
    """Kind of a single edit script step."""

    EQUAL = "equal"
    DELETE = "delete"
    INSERT = "insert"


# (op, old_index, new_index); the index not consumed by the op is the
# position the op sits at on that side.
Edit = tuple[EditOp, int, int]


def _shortest_trace(old: Sequence[str], new: Sequence[str]) -> list[dict[int, int]]:
    """Run the forward pass, returning the furthest-reaching x per diagonal for each d."""
    n, m = len(old), len(new)
    v: dict[int, int] = {1: 0}
    trace: list[dict[int, int]] = []

    for d in range(n + m + 1):
        trace.append(dict(v))
        for k in range(-d, d + 1, 2):
            if k == -d or (k != d and v[k - 1] < v[k + 1]):
                x = v[k + 1]
            else:
                x = v[k - 1] + 1
            y = x - k
            while x < n and y < m and old[x] == new[y]:
                x += 1
                y += 1
            v[k] = x
            if x >= n and y >= m:
                return trace

    # Unreachable: d == n + m always reaches the end
    return trace


def edit_script(old: Sequence[str], new: Sequence[str]) -> list[Edit]:
    """Compute a minimal edit script turning ``old`` into ``new``.

    Args:
        old: Old line sequence
        new: New line sequence

    Returns:
        Steps in document order. EQUAL consumes one line from each side,
        DELETE one old line, INSERT one new line.

    Example:
        >>> [op.value for op, _, _ in edit_script(["a", "b"], ["a", "c"])]
        ['equal', 'delete', 'insert']
    """
    if not old and not new:
        return []

    trace = _shortest_trace(old, new)
    x, y = len(old), len(new)
    steps: list[Edit] = []

    for d in range(len(trace) - 1, -1, -1):
        v = trace[d]
        k = x - y
        if k == -d or (k != d and v[k - 1] < v[k + 1]):
            prev_k = k + 1
        else:
            prev_k = k - 1
        prev_x = v[prev_k]
        prev_y = prev_x - prev_k

        while x > prev_x and y > prev_y:
            x -= 1
            y -= 1
            steps.append((EditOp.EQUAL, x, y))

        if d > 0:
            if x == prev_x:
                steps.append((EditOp.INSERT, prev_x, prev_y))
            else:
                steps.append((EditOp.DELETE, prev_x, prev_y))
        x, y = prev_x, prev_y

    steps.reverse()
    return steps
