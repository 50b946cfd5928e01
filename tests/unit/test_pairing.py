"""Unit tests for hunk line pairing."""

import pytest

from sidediff.core.diff.pairing import (
    PairCandidate,
    calculate_similarity,
    claim_pairs,
    find_candidates,
    pair_hunk_lines,
)
from sidediff.core.models import AddedChunk, ModifiedChunk, RemovedChunk


class TestCalculateSimilarity:
    """Tests for the containment similarity score."""

    def test_identical(self):
        """Test identical strings score 1.0."""
        assert calculate_similarity("hello", "hello") == 1.0

    def test_case_insensitive(self):
        """Test case differences are ignored."""
        assert calculate_similarity("ABC", "abc") == 1.0

    def test_both_empty(self):
        """Test two empty strings are fully similar."""
        assert calculate_similarity("", "") == 1.0

    def test_one_empty(self):
        """Test an empty string against a non-empty one scores zero."""
        assert calculate_similarity("abc", "") == 0.0
        assert calculate_similarity("", "abc") == 0.0

    def test_equal_length_tie_uses_first_as_longer(self):
        """Test the score is asymmetric on equal lengths."""
        assert calculate_similarity("aab", "abc") == pytest.approx(2 / 3)
        assert calculate_similarity("abc", "aab") == 1.0

    def test_divides_by_longer_length(self):
        """Test the shorter string's matches are divided by the longer length."""
        assert calculate_similarity("hello world", "hello world!") == pytest.approx(11 / 12)

    def test_containment_counts_repeats(self):
        """Test repeated characters each count when present."""
        assert calculate_similarity("abcdefgh", "aaaa") == 0.5


class TestFindCandidates:
    """Tests for per-removed-line best matches."""

    def test_threshold_is_exclusive(self):
        """Test a score exactly at the threshold does not qualify."""
        assert calculate_similarity("abcde", "abxy") == 0.4
        assert find_candidates(["abcde"], ["abxy"]) == []

    def test_just_above_threshold(self):
        """Test a score just above the threshold qualifies."""
        removed = "a" * 41 + "b" * 59
        candidates = find_candidates([removed], ["a" * 41])

        assert len(candidates) == 1
        assert candidates[0].score == pytest.approx(0.41)

    def test_tie_keeps_earliest_added(self):
        """Test equal scores select the first added line."""
        assert find_candidates(["ab"], ["ab", "ab"]) == [PairCandidate(0, 0, 1.0)]

    def test_best_match_chosen(self):
        """Test the highest scoring added line is chosen."""
        candidates = find_candidates(["abcx"], ["wxyz", "abcd"])
        assert candidates == [PairCandidate(0, 1, 0.75)]


class TestClaimPairs:
    """Tests for exclusive greedy claims."""

    def test_higher_score_claims_first(self):
        """Test a stronger candidate wins a contested added line."""
        candidates = [PairCandidate(0, 0, 0.5), PairCandidate(1, 0, 0.9)]
        assert claim_pairs(candidates) == [PairCandidate(1, 0, 0.9)]

    def test_equal_scores_keep_removed_order(self):
        """Test stable ordering lets the earlier removed line claim."""
        candidates = [PairCandidate(0, 0, 1.0), PairCandidate(1, 0, 1.0)]
        assert claim_pairs(candidates) == [PairCandidate(0, 0, 1.0)]

    def test_disjoint_candidates_all_accepted(self):
        """Test non-conflicting candidates are all accepted."""
        candidates = [PairCandidate(0, 1, 0.6), PairCandidate(1, 0, 0.8)]
        assert claim_pairs(candidates) == [PairCandidate(1, 0, 0.8), PairCandidate(0, 1, 0.6)]


class TestPairHunkLines:
    """Tests for turning a hunk into chunks."""

    def test_greedy_pairing_example(self):
        """Test a pair, a leftover removal and a leftover addition."""
        chunks = pair_hunk_lines(["abcd", "abcx"], ["abcd", "wxyz"], 10, 20)

        assert chunks == [
            ModifiedChunk(("abcd",), ("abcd",), 10, 20),
            RemovedChunk(("abcx",), 11),
            AddedChunk(("wxyz",), 21),
        ]

    def test_modified_sorted_before_removed_at_same_position(self):
        """Test a Modified chunk precedes a Removed chunk with the same position."""
        chunks = pair_hunk_lines(["zzzz", "hello world"], ["hello world!"], 5, 7)

        assert chunks == [
            ModifiedChunk(("hello world",), ("hello world!",), 6, 7),
            RemovedChunk(("zzzz",), 5),
        ]

    def test_duplicate_added_lines(self):
        """Test the earliest duplicate added line is paired."""
        chunks = pair_hunk_lines(["ab"], ["ab", "ab"], 1, 1)

        assert chunks == [
            ModifiedChunk(("ab",), ("ab",), 1, 1),
            AddedChunk(("ab",), 2),
        ]

    def test_duplicate_removed_lines(self):
        """Test the earliest duplicate removed line is paired."""
        chunks = pair_hunk_lines(["ab", "ab"], ["ab"], 1, 1)

        assert chunks == [
            ModifiedChunk(("ab",), ("ab",), 1, 1),
            RemovedChunk(("ab",), 2),
        ]

    def test_only_added(self):
        """Test a hunk with no removals yields one Added chunk per line."""
        assert pair_hunk_lines([], ["x", "y"], 3, 3) == [
            AddedChunk(("x",), 3),
            AddedChunk(("y",), 4),
        ]

    def test_only_removed(self):
        """Test a hunk with no additions yields one Removed chunk per line."""
        assert pair_hunk_lines(["x", "y"], [], 3, 3) == [
            RemovedChunk(("x",), 3),
            RemovedChunk(("y",), 4),
        ]

    def test_every_line_covered_once(self):
        """Test each removed and added line lands in exactly one chunk."""
        removed = ["alpha", "beta", "gamma", "delta"]
        added = ["alphA", "epsilon", "gamma!", "zeta", "eta"]
        chunks = pair_hunk_lines(removed, added, 1, 1)

        old_numbers = sorted(c.old_start for c in chunks if c.has_old_side)
        new_numbers = sorted(c.new_start for c in chunks if c.has_new_side)
        assert old_numbers == [1, 2, 3, 4]
        assert new_numbers == [1, 2, 3, 4, 5]

    def test_custom_threshold(self):
        """Test a threshold above the score prevents pairing."""
        chunks = pair_hunk_lines(["foo bar"], ["foo baz"], 1, 1, threshold=0.95)

        assert chunks == [RemovedChunk(("foo bar",), 1), AddedChunk(("foo baz",), 1)]
