"""
Core data models for the side-by-side comparison engine.

This module defines all data structures shared across the package:
- Hunk models (line-level edit runs)
- Diff chunk models (the externally visible unit of difference)
- Character segment models (intraline highlighting)
- Result and statistics models
- Row render models

All models are designed to be:
- UI-agnostic (can be used with any frontend)
- Type-hinted for IDE support
- Immutable where practical
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from functools import cached_property
from typing import Iterator, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from sidediff.core.window import WindowIndexMapper


# =============================================================================
# Enumerations
# =============================================================================

class DiffLineType(Enum):
    """Type of line in a hunk or chunk."""
    UNCHANGED = auto()  # Line exists in both documents, identical
    ADDED = auto()      # Line exists only in the new document
    REMOVED = auto()    # Line exists only in the old document
    MODIFIED = auto()   # Removed line paired with an added line
    CONTEXT = auto()    # Unchanged line kept around a hunk


# =============================================================================
# Hunk Models
# =============================================================================

@dataclass(frozen=True)
class HunkLine:
    """A single tagged line inside a hunk."""
    line_type: DiffLineType
    content: str
    old_line_num: Optional[int] = None
    new_line_num: Optional[int] = None

    @property
    def prefix(self) -> str:
        """Get the unified diff prefix character."""
        if self.line_type == DiffLineType.ADDED:
            return '+'
        if self.line_type == DiffLineType.REMOVED:
            return '-'
        return ' '


@dataclass
class Hunk:
    """
    A contiguous run of line-level differences.

    Produced by the diff engine with zero context lines, so a hunk
    normally holds only removed and added lines. Consumed once by the
    pairing step and then discarded.
    """
    old_start: int        # Starting line number in old document (1-indexed)
    new_start: int        # Starting line number in new document (1-indexed)
    lines: list[HunkLine] = field(default_factory=list)

    @property
    def removed_lines(self) -> list[str]:
        return [l.content for l in self.lines if l.line_type == DiffLineType.REMOVED]

    @property
    def added_lines(self) -> list[str]:
        return [l.content for l in self.lines if l.line_type == DiffLineType.ADDED]

    @property
    def old_count(self) -> int:
        """Number of lines taken from the old document."""
        return sum(1 for l in self.lines if l.line_type != DiffLineType.ADDED)

    @property
    def new_count(self) -> int:
        """Number of lines taken from the new document."""
        return sum(1 for l in self.lines if l.line_type != DiffLineType.REMOVED)

    @property
    def header(self) -> str:
        """Generate unified diff hunk header."""
        return f"@@ -{self.old_start},{self.old_count} +{self.new_start},{self.new_count} @@"

    def iter_changes(self) -> Iterator[HunkLine]:
        """Iterate over only the changed lines."""
        for line in self.lines:
            if line.line_type in (DiffLineType.ADDED, DiffLineType.REMOVED):
                yield line


# =============================================================================
# Diff Chunk Models
# =============================================================================

class DiffChunk:
    """
    Base class of the externally visible unit of difference.

    Concrete chunks are immutable. Every chunk exposes both sides so
    renderers never need to branch on the concrete type; the absent
    side is an empty tuple with a ``None`` start.
    """
    chunk_type: DiffLineType
    old_lines: tuple[str, ...]
    new_lines: tuple[str, ...]
    old_start: Optional[int]
    new_start: Optional[int]

    @property
    def row_count(self) -> int:
        """Number of visible rows this chunk occupies."""
        return len(self.old_lines) + len(self.new_lines)

    @property
    def has_old_side(self) -> bool:
        return self.old_start is not None

    @property
    def has_new_side(self) -> bool:
        return self.new_start is not None


@dataclass(frozen=True)
class AddedChunk(DiffChunk):
    """Lines present only in the new document."""
    new_lines: tuple[str, ...]
    new_start: int
    chunk_type: DiffLineType = field(default=DiffLineType.ADDED, init=False)
    old_lines: tuple[str, ...] = field(default=(), init=False)
    old_start: Optional[int] = field(default=None, init=False)

    def __post_init__(self):
        object.__setattr__(self, 'new_lines', tuple(self.new_lines))


@dataclass(frozen=True)
class RemovedChunk(DiffChunk):
    """Lines present only in the old document."""
    old_lines: tuple[str, ...]
    old_start: int
    chunk_type: DiffLineType = field(default=DiffLineType.REMOVED, init=False)
    new_lines: tuple[str, ...] = field(default=(), init=False)
    new_start: Optional[int] = field(default=None, init=False)

    def __post_init__(self):
        object.__setattr__(self, 'old_lines', tuple(self.old_lines))


@dataclass(frozen=True)
class ModifiedChunk(DiffChunk):
    """
    A removed line paired with its most similar added line.

    Canonical pairing emits exactly one line per side; multi-line
    sides are allowed but neither side may be empty.
    """
    old_lines: tuple[str, ...]
    new_lines: tuple[str, ...]
    old_start: int
    new_start: int
    chunk_type: DiffLineType = field(default=DiffLineType.MODIFIED, init=False)

    def __post_init__(self):
        object.__setattr__(self, 'old_lines', tuple(self.old_lines))
        object.__setattr__(self, 'new_lines', tuple(self.new_lines))
        if not self.old_lines or not self.new_lines:
            raise ValueError("ModifiedChunk requires lines on both sides")

    @property
    def row_count(self) -> int:
        return max(len(self.old_lines), len(self.new_lines))


# =============================================================================
# Intraline Models
# =============================================================================

@dataclass(frozen=True)
class CharSegment:
    """
    A run of characters within one side of a modified line.

    Concatenating the ``text`` of a side's segments reproduces
    that side's line exactly.
    """
    text: str
    changed: bool


@dataclass(frozen=True)
class SideCell:
    """Render model for one side of one visible row."""
    chunk_type: DiffLineType
    line_number: int
    marker: str             # '-' for the old side, '+' for the new side
    segments: tuple[CharSegment, ...]

    @property
    def text(self) -> str:
        return ''.join(s.text for s in self.segments)


# =============================================================================
# Result Models
# =============================================================================

@dataclass
class DiffStatistics:
    """Statistics about a diff result."""
    total_lines_left: int = 0
    total_lines_right: int = 0
    added_lines: int = 0
    removed_lines: int = 0
    modified_lines: int = 0
    unchanged_lines: int = 0

    @property
    def total_changes(self) -> int:
        """Total number of changed lines."""
        return self.added_lines + self.removed_lines + self.modified_lines

    @property
    def similarity_ratio(self) -> float:
        """
        Calculate similarity ratio (0.0 to 1.0).

        1.0 means identical, 0.0 means completely different.
        """
        total = max(self.total_lines_left, self.total_lines_right)
        if total == 0:
            return 1.0
        return self.unchanged_lines / total

    def __str__(self) -> str:
        return (f"+{self.added_lines} -{self.removed_lines} "
                f"~{self.modified_lines} ={self.unchanged_lines}")


@dataclass(frozen=True)
class DiffResult:
    """
    Complete result of one comparison run.

    The chunk list is read-only for the lifetime of the result; a new
    comparison produces a new result rather than patching this one.
    """
    left_label: str
    right_label: str
    chunks: tuple[DiffChunk, ...]
    hunk_count: int
    statistics: DiffStatistics

    @property
    def is_identical(self) -> bool:
        return not self.chunks

    @property
    def has_differences(self) -> bool:
        return bool(self.chunks)

    @cached_property
    def window(self) -> 'WindowIndexMapper':
        """Row mapper over the chunks, built on first access."""
        from sidediff.core.window import WindowIndexMapper
        return WindowIndexMapper(self.chunks)

    def get_statistics_summary(self) -> str:
        """Get human-readable statistics summary."""
        return str(self.statistics)
