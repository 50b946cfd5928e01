"""
Windowed row resolution over a chunk list.

A side-by-side view shows one row per chunk line. The view only ever
renders the rows inside its viewport, so it needs to translate a flat
row index into the chunk holding that row without rescanning the whole
result on every frame. The mapper precomputes prefix sums of chunk row
counts once and answers each lookup with a binary search.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from itertools import accumulate
from typing import Iterator, Optional, Sequence

from sidediff.core.models import DiffChunk


@dataclass(frozen=True)
class RowRef:
    """Location of one visible row inside the chunk list."""
    chunk: DiffChunk
    offset: int         # 0-based line index within the chunk
    chunk_index: int

    @property
    def old_line(self) -> Optional[str]:
        """Old-side text at this row, or None when the old side has run out."""
        if self.offset < len(self.chunk.old_lines):
            return self.chunk.old_lines[self.offset]
        return None

    @property
    def new_line(self) -> Optional[str]:
        """New-side text at this row, or None when the new side has run out."""
        if self.offset < len(self.chunk.new_lines):
            return self.chunk.new_lines[self.offset]
        return None


class WindowIndexMapper:
    """
    Maps flat row indices to ``(chunk, offset)`` coordinates.

    ``_ends[i]`` is the exclusive end row of chunk ``i``, so the chunk
    containing row ``k`` is the first whose end is greater than ``k``.
    """

    def __init__(self, chunks: Sequence[DiffChunk]):
        self._chunks = tuple(chunks)
        self._ends = list(accumulate(chunk.row_count for chunk in self._chunks))

    def __len__(self) -> int:
        return self.total_row_count()

    @property
    def chunks(self) -> tuple[DiffChunk, ...]:
        return self._chunks

    @property
    def chunk_count(self) -> int:
        return len(self._chunks)

    def total_row_count(self) -> int:
        """Total number of rows across all chunks."""
        return self._ends[-1] if self._ends else 0

    def rows_for_chunk(self, chunk_index: int) -> range:
        """Row indices occupied by the given chunk."""
        end = self._ends[chunk_index]
        return range(end - self._chunks[chunk_index].row_count, end)

    def resolve(self, row: int) -> RowRef:
        """
        Resolve a row index to its chunk and intra-chunk offset.

        Raises:
            IndexError: If ``row`` is outside ``[0, total_row_count())``.
        """
        if row < 0 or row >= self.total_row_count():
            raise IndexError(f"row {row} out of range [0, {self.total_row_count()})")

        chunk_index = bisect_right(self._ends, row)
        start = self._ends[chunk_index - 1] if chunk_index > 0 else 0
        return RowRef(self._chunks[chunk_index], row - start, chunk_index)

    def iter_rows(self, start: int, stop: int) -> Iterator[RowRef]:
        """
        Resolve a contiguous range of rows, clamped to the valid rows.

        Only the first row needs a binary search; the rest of the range
        is walked sequentially.
        """
        start = max(start, 0)
        stop = min(stop, self.total_row_count())
        if start >= stop:
            return

        ref = self.resolve(start)
        chunk_index, offset = ref.chunk_index, ref.offset

        for _ in range(start, stop):
            chunk = self._chunks[chunk_index]
            while offset >= chunk.row_count:
                chunk_index += 1
                offset = 0
                chunk = self._chunks[chunk_index]
            yield RowRef(chunk, offset, chunk_index)
            offset += 1

    def viewport(
        self,
        scroll_top: int,
        viewport_height: int,
        row_height: int,
        overscan: int = 0
    ) -> range:
        """
        Rows to render for a scroll position, in pixels.

        ``overscan`` extra rows are included past each edge of the visible
        area so short scrolls do not show unrendered rows. The range is
        clamped to the valid rows.
        """
        if row_height <= 0:
            raise ValueError(f"row_height must be positive, got {row_height}")

        first = max(scroll_top, 0) // row_height
        last = -(-(max(scroll_top, 0) + max(viewport_height, 0)) // row_height)
        start = max(first - overscan, 0)
        stop = min(last + overscan, self.total_row_count())
        return range(start, max(start, stop))
