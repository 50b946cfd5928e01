"""
Character-level highlighting of a modified line pair.
"""

from __future__ import annotations

from sidediff.core.diff.myers import EditOp, shortest_edit_script
from sidediff.core.models import CharSegment


class _SegmentBuilder:
    """Collects characters and coalesces runs of the same kind."""

    def __init__(self):
        self.segments: list[CharSegment] = []
        self._chars: list[str] = []
        self._changed = False

    def add(self, ch: str, changed: bool) -> None:
        if self._chars and changed != self._changed:
            self._flush()
        self._changed = changed
        self._chars.append(ch)

    def build(self) -> list[CharSegment]:
        self._flush()
        return self.segments

    def _flush(self) -> None:
        if self._chars:
            self.segments.append(CharSegment(''.join(self._chars), self._changed))
            self._chars = []


def highlight_differences(
    old_text: str,
    new_text: str
) -> tuple[list[CharSegment], list[CharSegment]]:
    """
    Highlight character-level differences between two lines.

    Deleted characters go to the old side only and inserted characters
    to the new side only, both marked changed; equal characters go to
    both sides unchanged. Consecutive characters of the same kind are
    coalesced into one segment.

    Returns:
        Tuple of (old_parts, new_parts)
    """
    old_parts = _SegmentBuilder()
    new_parts = _SegmentBuilder()

    for op, old_idx, new_idx in shortest_edit_script(old_text, new_text):
        if op == EditOp.EQUAL:
            old_parts.add(old_text[old_idx], False)
            new_parts.add(new_text[new_idx], False)
        elif op == EditOp.DELETE:
            old_parts.add(old_text[old_idx], True)
        else:
            new_parts.add(new_text[new_idx], True)

    return old_parts.build(), new_parts.build()
