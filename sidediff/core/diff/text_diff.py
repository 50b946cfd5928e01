"""
Text document diff engine.

Provides line-by-line comparison with support for:
- Myers shortest edit script
- Whitespace handling options
- Case sensitivity
- Zero-context hunk extraction
- Similarity-based pairing of removed/added lines
- Intraline (character) highlighting
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Sequence

from sidediff.core.diff import myers
from sidediff.core.diff.highlight import highlight_differences
from sidediff.core.diff.pairing import DEFAULT_SIMILARITY_THRESHOLD, pair_hunk_lines
from sidediff.core.models import (
    CharSegment,
    DiffChunk,
    DiffLineType,
    DiffResult,
    DiffStatistics,
    Hunk,
    HunkLine,
)


class WhitespaceMode(Enum):
    """Whitespace handling modes."""
    EXACT = auto()          # Compare whitespace exactly
    IGNORE_TRAILING = auto()  # Ignore trailing whitespace
    IGNORE_LEADING = auto()   # Ignore leading whitespace
    IGNORE_ALL = auto()       # Ignore all whitespace
    NORMALIZE = auto()        # Normalize whitespace (collapse multiple to single)


@dataclass
class TextCompareOptions:
    """Options for text comparison."""
    ignore_case: bool = False
    whitespace_mode: WhitespaceMode = WhitespaceMode.EXACT
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    intraline_char_threshold: int = 0  # Max line length for char-level diff, 0 = unlimited

    def normalize_line(self, line: str) -> str:
        """Normalize a line according to options."""
        result = line

        if self.whitespace_mode == WhitespaceMode.IGNORE_TRAILING:
            result = result.rstrip()
        elif self.whitespace_mode == WhitespaceMode.IGNORE_LEADING:
            result = result.lstrip()
        elif self.whitespace_mode == WhitespaceMode.IGNORE_ALL:
            result = ''.join(result.split())
        elif self.whitespace_mode == WhitespaceMode.NORMALIZE:
            result = ' '.join(result.split())

        if self.ignore_case:
            result = result.lower()

        return result

    @property
    def is_exact(self) -> bool:
        return not self.ignore_case and self.whitespace_mode == WhitespaceMode.EXACT


class TextDiffEngine:
    """
    Engine for comparing line sequences.

    The comparison runs in two stages: the line diff produces zero-context
    hunks, then every hunk is re-paired into Modified/Removed/Added chunks.
    Lines are compared by their normalized form, but chunks always carry
    the original line text.
    """

    def __init__(self, options: Optional[TextCompareOptions] = None):
        self.options = options or TextCompareOptions()

    def compare(
        self,
        left_lines: Sequence[str],
        right_lines: Sequence[str],
        left_label: str = "left",
        right_label: str = "right"
    ) -> DiffResult:
        """
        Compare two sequences of lines.

        Args:
            left_lines: Lines from the left/old document
            right_lines: Lines from the right/new document
            left_label: Label for the left document
            right_label: Label for the right document

        Returns:
            DiffResult holding the ordered chunk list
        """
        started = time.perf_counter()
        left = list(left_lines)
        right = list(right_lines)

        hunks = self.compute_hunks(left, right)
        chunks = self.pair_hunks(hunks)
        stats = self._calculate_statistics(chunks, len(left), len(right))

        logging.debug(
            f"TextDiffEngine - {left_label} vs {right_label}: {len(hunks)} hunks, "
            f"{len(chunks)} chunks ({stats}) in {time.perf_counter() - started:.3f}s"
        )

        return DiffResult(
            left_label=left_label,
            right_label=right_label,
            chunks=tuple(chunks),
            hunk_count=len(hunks),
            statistics=stats,
        )

    def compute_hunks(
        self,
        left_lines: Sequence[str],
        right_lines: Sequence[str]
    ) -> list[Hunk]:
        """
        Compute zero-context hunks between two line sequences.

        Each hunk is one maximal run of removed and/or added lines; no
        unchanged line ever appears inside a hunk.
        """
        left = list(left_lines)
        right = list(right_lines)

        if self.options.is_exact:
            left_keys, right_keys = left, right
        else:
            left_keys = [self.options.normalize_line(l) for l in left]
            right_keys = [self.options.normalize_line(r) for r in right]

        hunks: list[Hunk] = []
        for tag, i1, i2, j1, j2 in myers.iter_opcodes(left_keys, right_keys):
            if tag == 'equal':
                continue

            hunk = Hunk(old_start=i1 + 1, new_start=j1 + 1)
            for idx in range(i1, i2):
                hunk.lines.append(HunkLine(
                    line_type=DiffLineType.REMOVED,
                    content=left[idx],
                    old_line_num=idx + 1
                ))
            for idx in range(j1, j2):
                hunk.lines.append(HunkLine(
                    line_type=DiffLineType.ADDED,
                    content=right[idx],
                    new_line_num=idx + 1
                ))
            hunks.append(hunk)

        return hunks

    def pair_hunks(self, hunks: Sequence[Hunk]) -> list[DiffChunk]:
        """Run the pairing heuristic over every hunk, in hunk order."""
        chunks: list[DiffChunk] = []
        for hunk in hunks:
            chunks.extend(pair_hunk_lines(
                hunk.removed_lines,
                hunk.added_lines,
                hunk.old_start,
                hunk.new_start,
                threshold=self.options.similarity_threshold
            ))
        return chunks

    def compute_intraline_diff(
        self,
        left_line: str,
        right_line: str
    ) -> tuple[list[CharSegment], list[CharSegment]]:
        """
        Compute character-level differences within a line pair.

        Lines longer than ``intraline_char_threshold`` (when set) are
        reported as a single changed segment per side.

        Returns:
            Tuple of (left_segments, right_segments)
        """
        limit = self.options.intraline_char_threshold
        if limit and (len(left_line) > limit or len(right_line) > limit):
            return (
                [CharSegment(left_line, True)] if left_line else [],
                [CharSegment(right_line, True)] if right_line else []
            )
        return highlight_differences(left_line, right_line)

    def _calculate_statistics(
        self,
        chunks: Sequence[DiffChunk],
        total_left: int,
        total_right: int
    ) -> DiffStatistics:
        """Calculate diff statistics from chunks."""
        stats = DiffStatistics(
            total_lines_left=total_left,
            total_lines_right=total_right
        )

        for chunk in chunks:
            if chunk.chunk_type == DiffLineType.ADDED:
                stats.added_lines += len(chunk.new_lines)
            elif chunk.chunk_type == DiffLineType.REMOVED:
                stats.removed_lines += len(chunk.old_lines)
            elif chunk.chunk_type == DiffLineType.MODIFIED:
                stats.modified_lines += len(chunk.old_lines)

        stats.unchanged_lines = total_left - stats.removed_lines - stats.modified_lines

        return stats
