"""
Myers shortest edit script.

Implements the greedy O((N + M) * D) algorithm from Eugene W. Myers,
"An O(ND) Difference Algorithm and Its Variations" (1986), over any pair
of sequences whose items support equality (lines, characters, keys).

The search follows every diagonal snake as far as it goes, so equal
items are aligned at the earliest opportunity, and inside a change run
the back-traced script lists deletions before insertions. Both rules are
observable in hunk boundaries and must stay stable.

The back-trace needs the frontier of every step, which is quadratic in
D if kept whole. Only a thinned set of checkpoint frontiers is kept
(about sqrt(D) of them); the frontiers between two checkpoints are
recomputed block by block while tracing back, which costs one extra
forward pass and keeps memory at O(D * sqrt(D)).
"""

from __future__ import annotations

from bisect import bisect_right
from enum import Enum
from typing import Hashable, Iterator, Optional, Sequence

Opcode = tuple[str, int, int, int, int]
Frontier = list[int]


class EditOp(str, Enum):
    """Single step of an edit script."""
    EQUAL = 'equal'
    DELETE = 'delete'
    INSERT = 'insert'


def _advance(
    a: Sequence[Hashable],
    b: Sequence[Hashable],
    prev: Optional[Frontier],
    d: int
) -> Frontier:
    """
    Compute the frontier of step ``d`` from the frontier of step ``d - 1``.

    ``frontier[i]`` is the furthest ``x`` reached on diagonal
    ``k = -d + 2 * i``. Step ``d`` only reads step ``d - 1``: diagonal
    ``k + 1`` sits at index ``i`` and ``k - 1`` at ``i - 1`` there.
    """
    n, m = len(a), len(b)
    row = [0] * (d + 1)

    for i in range(d + 1):
        if d == 0:
            x = 0
        elif i == 0 or (i != d and prev[i - 1] < prev[i]):
            x = prev[i]             # down, from diagonal k + 1
        else:
            x = prev[i - 1] + 1     # right, from diagonal k - 1
        y = x - (2 * i - d)
        while x < n and y < m and a[x] == b[y]:
            x += 1
            y += 1
        row[i] = x

    return row


def _forward(
    a: Sequence[Hashable],
    b: Sequence[Hashable]
) -> tuple[int, dict[int, Frontier]]:
    """
    Run the forward search to the end point.

    Returns:
        Tuple of (edit distance D, checkpoint frontiers by step). Step 0
        is always a checkpoint.
    """
    n, m = len(a), len(b)
    target = n - m
    checkpoints: dict[int, Frontier] = {}
    interval = 1
    row: Optional[Frontier] = None
    d = 0

    while True:
        row = _advance(a, b, row, d)
        if abs(target) <= d and (d - target) % 2 == 0 and row[(target + d) // 2] >= n:
            return d, checkpoints

        if d % interval == 0:
            checkpoints[d] = row
            if len(checkpoints) > 2 * interval:
                interval *= 2
                checkpoints = {s: r for s, r in checkpoints.items() if s % interval == 0}
        d += 1


def _common_prefix(a: Sequence[Hashable], b: Sequence[Hashable]) -> int:
    p = 0
    limit = min(len(a), len(b))
    while p < limit and a[p] == b[p]:
        p += 1
    return p


def _disjoint(a: Sequence[Hashable], b: Sequence[Hashable]) -> bool:
    """True when no item of ``a`` occurs in ``b``."""
    smaller, larger = (a, b) if len(a) <= len(b) else (b, a)
    return set(smaller).isdisjoint(larger)


def _trace_back(
    a: Sequence[Hashable],
    b: Sequence[Hashable],
    distance: int,
    checkpoints: dict[int, Frontier]
) -> list[tuple[EditOp, int, int]]:
    """Walk from the end point back to the origin, newest step first."""
    steps = sorted(checkpoints)
    script: list[tuple[EditOp, int, int]] = []
    x, y = len(a), len(b)

    block_start = distance
    block: list[Frontier] = []

    for d in range(distance, 0, -1):
        need = d - 1
        if need < block_start:
            block_start = steps[bisect_right(steps, need) - 1]
            block = [checkpoints[block_start]]
            for step in range(block_start + 1, need + 1):
                block.append(_advance(a, b, block[-1], step))
        prev = block[need - block_start]

        k = x - y
        i = (k + d) // 2
        if k == -d or (k != d and prev[i - 1] < prev[i]):
            prev_k, prev_x = k + 1, prev[i]
        else:
            prev_k, prev_x = k - 1, prev[i - 1]
        prev_y = prev_x - prev_k

        while x > prev_x and y > prev_y:
            x -= 1
            y -= 1
            script.append((EditOp.EQUAL, x, y))

        if x == prev_x:
            script.append((EditOp.INSERT, prev_x, prev_y))
        else:
            script.append((EditOp.DELETE, prev_x, prev_y))
        x, y = prev_x, prev_y

    while x > 0:
        x -= 1
        y -= 1
        script.append((EditOp.EQUAL, x, y))

    script.reverse()
    return script


def shortest_edit_script(
    a: Sequence[Hashable],
    b: Sequence[Hashable]
) -> list[tuple[EditOp, int, int]]:
    """
    Compute the minimal edit script turning ``a`` into ``b``.

    Returns:
        List of ``(op, a_index, b_index)`` in document order. For
        ``DELETE`` only ``a_index`` is meaningful, for ``INSERT`` only
        ``b_index``; both indices are the current positions otherwise.
    """
    # The common prefix is exactly the first snake of the search
    p = _common_prefix(a, b)
    script = [(EditOp.EQUAL, i, i) for i in range(p)]
    a_rest, b_rest = a[p:], b[p:]
    n, m = len(a_rest), len(b_rest)

    if not n and not m:
        return script

    if _disjoint(a_rest, b_rest):
        # Without any snake every diagonal ties the same way: all
        # deletions, then all insertions
        script.extend((EditOp.DELETE, p + i, p) for i in range(n))
        script.extend((EditOp.INSERT, p + n, p + j) for j in range(m))
        return script

    distance, checkpoints = _forward(a_rest, b_rest)
    for op, i, j in _trace_back(a_rest, b_rest, distance, checkpoints):
        script.append((op, p + i, p + j))
    return script


def iter_opcodes(
    a: Sequence[Hashable],
    b: Sequence[Hashable]
) -> Iterator[Opcode]:
    """
    Yield ``difflib``-style opcodes ``(tag, i1, i2, j1, j2)``.

    Tags are ``'equal'``, ``'delete'``, ``'insert'`` and ``'replace'``.
    A maximal run of non-equal steps becomes a single opcode; within such
    a run deleted and inserted indices are contiguous.
    """
    script = shortest_edit_script(a, b)
    i = j = 0
    pos = 0

    while pos < len(script):
        op = script[pos][0]
        i1, j1 = i, j
        if op == EditOp.EQUAL:
            while pos < len(script) and script[pos][0] == EditOp.EQUAL:
                i += 1
                j += 1
                pos += 1
            yield ('equal', i1, i, j1, j)
            continue

        while pos < len(script) and script[pos][0] != EditOp.EQUAL:
            if script[pos][0] == EditOp.DELETE:
                i += 1
            else:
                j += 1
            pos += 1

        if i > i1 and j > j1:
            tag = 'replace'
        elif i > i1:
            tag = 'delete'
        else:
            tag = 'insert'
        yield (tag, i1, i, j1, j)


def get_opcodes(a: Sequence[Hashable], b: Sequence[Hashable]) -> list[Opcode]:
    """List form of :func:`iter_opcodes`."""
    return list(iter_opcodes(a, b))
