"""
Pairing of removed and added lines within a hunk.

A hunk from the line diff only knows that some lines went away and some
arrived. This module decides which of them are better shown as a single
modified line, using a cheap character-containment similarity score and
a greedy, exclusive-claim assignment. The assignment is deliberately not
a globally optimal matching: its chunk contents and order are part of the
observable output and are kept exactly as described below.
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

from sidediff.core.models import AddedChunk, DiffChunk, ModifiedChunk, RemovedChunk

DEFAULT_SIMILARITY_THRESHOLD = 0.4


class PairCandidate(NamedTuple):
    """Best added-line match found for one removed line."""
    removed_index: int
    added_index: int
    score: float


def calculate_similarity(str1: str, str2: str) -> float:
    """
    Calculate similarity between two strings (0.0 to 1.0).

    Counts how many characters of the shorter string occur anywhere in
    the longer one, case-insensitively, and divides by the longer length.
    On equal lengths ``str1`` is treated as the longer string, so the
    score is not symmetric.
    """
    if len(str1) >= len(str2):
        longer, shorter = str1, str2
    else:
        longer, shorter = str2, str1

    if not longer:
        return 1.0

    longer_lower = longer.lower()
    matches = sum(1 for ch in shorter if ch.lower() in longer_lower)

    return matches / len(longer)


def find_candidates(
    removed: Sequence[str],
    added: Sequence[str],
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD
) -> list[PairCandidate]:
    """
    Find the best added match for every removed line.

    A removed line only competes for its own best match. A score must be
    strictly above ``threshold`` to count; on equal scores the earliest
    added line wins.
    """
    candidates: list[PairCandidate] = []

    for removed_idx, removed_line in enumerate(removed):
        best_match = -1
        best_score = threshold

        for added_idx, added_line in enumerate(added):
            score = calculate_similarity(removed_line, added_line)
            if score > best_score:
                best_score = score
                best_match = added_idx

        if best_match != -1:
            candidates.append(PairCandidate(removed_idx, best_match, best_score))

    return candidates


def claim_pairs(candidates: Sequence[PairCandidate]) -> list[PairCandidate]:
    """
    Accept candidates in descending score order with exclusive claims.

    The sort is stable, so equal scores keep removed-line order. A
    candidate is dropped when either of its lines was already claimed.
    """
    used_removed: set[int] = set()
    used_added: set[int] = set()
    accepted: list[PairCandidate] = []

    for candidate in sorted(candidates, key=lambda c: c.score, reverse=True):
        if candidate.removed_index in used_removed or candidate.added_index in used_added:
            continue
        accepted.append(candidate)
        used_removed.add(candidate.removed_index)
        used_added.add(candidate.added_index)

    return accepted


def pair_hunk_lines(
    removed: Sequence[str],
    added: Sequence[str],
    old_start: int,
    new_start: int,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD
) -> list[DiffChunk]:
    """
    Partition a hunk's removed and added lines into chunks.

    Args:
        removed: Removed lines in old-document order
        added: Added lines in new-document order
        old_start: 1-based line number of ``removed[0]``
        new_start: 1-based line number of ``added[0]``
        threshold: Minimum (exclusive) similarity for a pair

    Returns:
        One chunk per pair or unpaired line, each line covered exactly
        once, ordered by added index for Modified/Added chunks and by
        removed index for residual Removed chunks.
    """
    if not removed:
        return [AddedChunk((line,), new_start + j) for j, line in enumerate(added)]
    if not added:
        return [RemovedChunk((line,), old_start + i) for i, line in enumerate(removed)]

    accepted = claim_pairs(find_candidates(removed, added, threshold))
    paired_removed = {c.removed_index for c in accepted}
    paired_added = {c.added_index for c in accepted}

    positioned: list[tuple[int, DiffChunk]] = []

    for pair in accepted:
        positioned.append((pair.added_index, ModifiedChunk(
            old_lines=(removed[pair.removed_index],),
            new_lines=(added[pair.added_index],),
            old_start=old_start + pair.removed_index,
            new_start=new_start + pair.added_index,
        )))

    for i, line in enumerate(removed):
        if i not in paired_removed:
            positioned.append((i, RemovedChunk((line,), old_start + i)))

    for j, line in enumerate(added):
        if j not in paired_added:
            positioned.append((j, AddedChunk((line,), new_start + j)))

    positioned.sort(key=lambda item: item[0])
    return [chunk for _, chunk in positioned]
