"""Unit tests for the Myers shortest edit script."""

import math
import random
import time

import pytest

from sidediff.core.diff.highlight import highlight_differences
from sidediff.core.diff.myers import EditOp, _forward, get_opcodes, shortest_edit_script
from sidediff.core.diff.text_diff import TextDiffEngine


def _cost(script):
    return sum(1 for op, _, _ in script if op != EditOp.EQUAL)


def _full_trace_script(a, b):
    """Textbook greedy Myers that keeps the frontier of every step."""
    n, m = len(a), len(b)
    v = {1: 0}
    trace = []
    for d in range(n + m + 1):
        trace.append(dict(v))
        for k in range(-d, d + 1, 2):
            if k == -d or (k != d and v[k - 1] < v[k + 1]):
                x = v[k + 1]
            else:
                x = v[k - 1] + 1
            y = x - k
            while x < n and y < m and a[x] == b[y]:
                x += 1
                y += 1
            v[k] = x
            if x >= n and y >= m:
                break
        else:
            continue
        break

    script = []
    x, y = n, m
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
            script.append((EditOp.EQUAL, x, y))
        if d > 0:
            op = EditOp.INSERT if x == prev_x else EditOp.DELETE
            script.append((op, prev_x, prev_y))
        x, y = prev_x, prev_y

    script.reverse()
    return script


class TestShortestEditScript:
    """Tests for shortest_edit_script."""

    def test_both_empty(self):
        """Test that two empty sequences need no edits."""
        assert shortest_edit_script([], []) == []

    def test_identical_sequences(self):
        """Test identical input produces only equal steps."""
        script = shortest_edit_script("abc", "abc")
        assert [op for op, _, _ in script] == [EditOp.EQUAL] * 3

    def test_insert_into_empty(self):
        """Test inserting every item of b into an empty a."""
        assert shortest_edit_script([], ["x", "y"]) == [
            (EditOp.INSERT, 0, 0),
            (EditOp.INSERT, 0, 1),
        ]

    def test_delete_everything(self):
        """Test deleting every item of a."""
        assert shortest_edit_script(["x", "y"], []) == [
            (EditOp.DELETE, 0, 0),
            (EditOp.DELETE, 1, 0),
        ]

    def test_deletion_listed_before_insertion(self):
        """Test a substitution is scripted as delete then insert."""
        assert shortest_edit_script(["b"], ["x"]) == [
            (EditOp.DELETE, 0, 0),
            (EditOp.INSERT, 1, 0),
        ]

    def test_minimal_edit_count(self):
        """Test the classic example needs exactly five edits."""
        assert _cost(shortest_edit_script("ABCABBA", "CBABAC")) == 5

    def test_script_reconstructs_target(self):
        """Test applying the script to a yields b."""
        a = list("the quick brown fox")
        b = list("a quick brown cat")
        rebuilt = [
            b[j] if op == EditOp.INSERT else a[i]
            for op, i, j in shortest_edit_script(a, b)
            if op != EditOp.DELETE
        ]
        assert rebuilt == b


class TestGetOpcodes:
    """Tests for get_opcodes grouping."""

    def test_replace_in_middle(self):
        """Test a single changed line becomes one replace opcode."""
        assert get_opcodes(["a", "b", "c"], ["a", "x", "c"]) == [
            ("equal", 0, 1, 0, 1),
            ("replace", 1, 2, 1, 2),
            ("equal", 2, 3, 2, 3),
        ]

    def test_insert_only(self):
        """Test inserting into an empty sequence."""
        assert get_opcodes([], ["only new"]) == [("insert", 0, 0, 0, 1)]

    def test_delete_only(self):
        """Test deleting from a sequence."""
        assert get_opcodes(["a", "b"], ["a"]) == [
            ("equal", 0, 1, 0, 1),
            ("delete", 1, 2, 1, 1),
        ]

    def test_earliest_alignment_wins(self):
        """Test a duplicated line aligns with its first occurrence."""
        assert get_opcodes(["x"], ["x", "x"]) == [
            ("equal", 0, 1, 0, 1),
            ("insert", 1, 1, 1, 2),
        ]

    def test_opcodes_cover_both_sequences(self):
        """Test opcode ranges tile both inputs without gaps."""
        a = ["a", "b", "c", "d", "e"]
        b = ["b", "x", "d", "e", "f", "g"]
        opcodes = get_opcodes(a, b)

        i = j = 0
        for _, i1, i2, j1, j2 in opcodes:
            assert (i1, j1) == (i, j)
            i, j = i2, j2
        assert (i, j) == (len(a), len(b))

    def test_common_suffix_not_stripped(self):
        """Test a shared tail still aligns at the earliest opportunity."""
        assert get_opcodes(["x", "a"], ["a", "a"]) == [
            ("delete", 0, 1, 0, 0),
            ("equal", 1, 2, 0, 1),
            ("insert", 2, 2, 1, 2),
        ]


class TestAgainstFullTrace:
    """Thinned checkpoints must back-trace exactly like a full trace."""

    @pytest.mark.parametrize("seed", range(40))
    def test_random_small_alphabet(self, seed):
        """Test short inputs with many repeated items."""
        rng = random.Random(seed)
        a = [rng.choice("abc") for _ in range(rng.randint(0, 40))]
        b = [rng.choice("abc") for _ in range(rng.randint(0, 40))]

        assert shortest_edit_script(a, b) == _full_trace_script(a, b)

    @pytest.mark.parametrize("seed", range(5))
    def test_random_long_inputs(self, seed):
        """Test inputs long enough to thin the checkpoints several times."""
        rng = random.Random(1000 + seed)
        a = [rng.choice("abcdefgh") for _ in range(300)]
        b = [rng.choice("abcdefgh") for _ in range(rng.randint(200, 400))]

        assert shortest_edit_script(a, b) == _full_trace_script(a, b)

    def test_shared_prefix_then_changes(self):
        """Test a common prefix followed by an edited tail."""
        a = list("prefix-abcabc-tail")
        b = list("prefix-cbacba-tale")

        assert shortest_edit_script(a, b) == _full_trace_script(a, b)

    @pytest.mark.parametrize("a, b", [
        ("abc", "xyz"),
        ("ab", "xyzw"),
        ("same-abc", "same-xy"),
    ])
    def test_disjoint_remainder(self, a, b):
        """Test inputs with nothing in common after the prefix."""
        assert shortest_edit_script(list(a), list(b)) == _full_trace_script(list(a), list(b))


class TestScaling:
    """Large inputs stay within time and memory bounds."""

    def test_checkpoints_are_thinned(self):
        """Test the forward pass keeps far fewer frontiers than steps."""
        distance, checkpoints = _forward(list(range(400)), list(range(400, 800)))

        assert distance == 800
        assert 0 in checkpoints
        assert len(checkpoints) <= 4 * math.isqrt(distance) + 2

    def test_disjoint_documents(self):
        """Test two large documents without a shared line."""
        old = [f"old line {i}" for i in range(5000)]
        new = [f"new line {i}" for i in range(5000)]

        started = time.perf_counter()
        hunks = TextDiffEngine().compute_hunks(old, new)
        elapsed = time.perf_counter() - started

        assert len(hunks) == 1
        assert len(hunks[0].removed_lines) == 5000
        assert elapsed < 5.0

    def test_disjoint_long_lines(self):
        """Test highlighting two long lines without a shared character."""
        started = time.perf_counter()
        old_parts, new_parts = highlight_differences("a" * 4000, "b" * 4000)
        elapsed = time.perf_counter() - started

        assert len(old_parts) == 1 and old_parts[0].changed
        assert len(new_parts) == 1 and new_parts[0].changed
        assert elapsed < 5.0

    def test_scattered_changes(self):
        """Test a large document with one changed line in every twenty."""
        old = [f"line {i}" for i in range(2000)]
        new = [f"edited {i}" if i % 20 == 0 else line for i, line in enumerate(old)]

        started = time.perf_counter()
        hunks = TextDiffEngine().compute_hunks(old, new)
        elapsed = time.perf_counter() - started

        assert len(hunks) == 100
        assert [h.old_start for h in hunks] == [i + 1 for i in range(0, 2000, 20)]
        assert elapsed < 10.0
