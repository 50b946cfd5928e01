"""
Side-by-side document comparison.

Compares two line-oriented documents and produces an ordered list of
Added/Removed/Modified chunks, plus the row mapping and highlighting
needed to render very large diffs one viewport at a time.
"""

from sidediff.core.diff import (
    TextDiffEngine,
    TextCompareOptions,
    WhitespaceMode,
    calculate_similarity,
    highlight_differences,
)
from sidediff.core.models import (
    AddedChunk,
    CharSegment,
    DiffChunk,
    DiffLineType,
    DiffResult,
    DiffStatistics,
    Hunk,
    ModifiedChunk,
    RemovedChunk,
    SideCell,
)
from sidediff.core.window import RowRef, WindowIndexMapper
from sidediff.core.render import SideBySideFormatter, SideBySideRenderer
from sidediff.core.session import ComparisonSession

__version__ = "1.0.0"

__all__ = [
    'TextDiffEngine',
    'TextCompareOptions',
    'WhitespaceMode',
    'calculate_similarity',
    'highlight_differences',
    'AddedChunk',
    'CharSegment',
    'DiffChunk',
    'DiffLineType',
    'DiffResult',
    'DiffStatistics',
    'Hunk',
    'ModifiedChunk',
    'RemovedChunk',
    'SideCell',
    'RowRef',
    'WindowIndexMapper',
    'SideBySideFormatter',
    'SideBySideRenderer',
    'ComparisonSession',
]
