"""
Row rendering for side-by-side display.

Turns a resolved row into what one panel shows for it: the line number,
the change marker and the (possibly highlighted) text segments, or
nothing when that panel has no line on the row.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Callable, Iterator, Optional

from sidediff.core.diff.text_diff import TextCompareOptions, TextDiffEngine
from sidediff.core.models import CharSegment, DiffLineType, SideCell
from sidediff.core.window import RowRef, WindowIndexMapper

LEFT = 'left'
RIGHT = 'right'


Highlighter = Callable[[str, str], tuple[list[CharSegment], list[CharSegment]]]


class SideBySideRenderer:
    """
    Produces per-side cells for visible rows.

    Rendering runs once per visible row per frame, so highlight results
    are memoized per renderer. Modified rows are highlighted through
    ``TextDiffEngine.compute_intraline_diff`` unless a highlighter is
    given, so the intraline threshold in ``options`` applies.
    """

    def __init__(
        self,
        mapper: WindowIndexMapper,
        highlighter: Optional[Highlighter] = None,
        cache_size: int = 2048,
        options: Optional[TextCompareOptions] = None
    ):
        self.mapper = mapper
        self.highlighter = highlighter or TextDiffEngine(options).compute_intraline_diff
        self._highlight = lru_cache(maxsize=cache_size)(self._highlight_pair)

    def _highlight_pair(
        self,
        old_text: str,
        new_text: str
    ) -> tuple[tuple[CharSegment, ...], tuple[CharSegment, ...]]:
        old_parts, new_parts = self.highlighter(old_text, new_text)
        return tuple(old_parts), tuple(new_parts)

    def render_cell(self, row: int, side: str) -> Optional[SideCell]:
        """Render one side of one row; None means a blank filler cell."""
        return self.cell_for(self.mapper.resolve(row), side)

    def cell_for(self, ref: RowRef, side: str) -> Optional[SideCell]:
        if side == LEFT:
            return self._left_cell(ref)
        if side == RIGHT:
            return self._right_cell(ref)
        raise ValueError(f"Unknown side: {side!r}")

    def iter_cells(
        self,
        start: int,
        stop: int
    ) -> Iterator[tuple[Optional[SideCell], Optional[SideCell]]]:
        """Yield (left, right) cells for a viewport range."""
        for ref in self.mapper.iter_rows(start, stop):
            yield self._left_cell(ref), self._right_cell(ref)

    def _left_cell(self, ref: RowRef) -> Optional[SideCell]:
        chunk = ref.chunk
        old_text = ref.old_line
        if chunk.chunk_type not in (DiffLineType.REMOVED, DiffLineType.MODIFIED) or old_text is None:
            return None

        new_text = ref.new_line
        if chunk.chunk_type == DiffLineType.MODIFIED and new_text is not None:
            segments = self._highlight(old_text, new_text)[0]
        else:
            segments = (CharSegment(old_text, False),)

        return SideCell(
            chunk_type=chunk.chunk_type,
            line_number=chunk.old_start + ref.offset,
            marker='-',
            segments=segments
        )

    def _right_cell(self, ref: RowRef) -> Optional[SideCell]:
        chunk = ref.chunk
        new_text = ref.new_line
        if chunk.chunk_type not in (DiffLineType.ADDED, DiffLineType.MODIFIED) or new_text is None:
            return None

        old_text = ref.old_line
        if chunk.chunk_type == DiffLineType.MODIFIED and old_text is not None:
            segments = self._highlight(old_text, new_text)[1]
        else:
            segments = (CharSegment(new_text, False),)

        return SideCell(
            chunk_type=chunk.chunk_type,
            line_number=chunk.new_start + ref.offset,
            marker='+',
            segments=segments
        )


class SideBySideFormatter:
    """Format diff rows as plain text for side-by-side display."""

    def __init__(self, width: int = 80, tab_size: int = 4):
        self.width = width
        self.tab_size = tab_size

    def format(
        self,
        renderer: SideBySideRenderer,
        start: int = 0,
        stop: Optional[int] = None
    ) -> Iterator[tuple[str, str, str]]:
        """
        Format a row range for side-by-side display.

        Yields tuples of (left_line, separator, right_line)
        """
        if stop is None:
            stop = renderer.mapper.total_row_count()

        for left, right in renderer.iter_cells(start, stop):
            if left and right:
                sep = " | "
            elif right:
                sep = " > "
            else:
                sep = " < "

            yield (
                self._format_cell(left) if left else "",
                sep,
                self._format_cell(right) if right else ""
            )

    def _format_cell(self, cell: SideCell) -> str:
        """Format a single cell with line number and marker."""
        content = cell.text.rstrip('\r\n')
        content = content.replace('\t', ' ' * self.tab_size)

        prefix = f"{cell.line_number:4d}{cell.marker} "

        max_content = self.width - len(prefix)
        if len(content) > max_content:
            content = content[:max_content - 3] + "..."

        return prefix + content
