"""
Diff module for document comparison operations.

Provides:
- Myers shortest edit script (lines or characters)
- Text diff engine producing zero-context hunks and paired chunks
- Similarity pairing of removed/added lines
- Character-level highlighting of modified lines
"""

from sidediff.core.diff.text_diff import (
    TextDiffEngine,
    TextCompareOptions,
    WhitespaceMode,
)
from sidediff.core.diff.pairing import (
    calculate_similarity,
    pair_hunk_lines,
    DEFAULT_SIMILARITY_THRESHOLD,
)
from sidediff.core.diff.highlight import (
    highlight_differences,
)

__all__ = [
    # Text diff
    'TextDiffEngine',
    'TextCompareOptions',
    'WhitespaceMode',
    # Pairing
    'calculate_similarity',
    'pair_hunk_lines',
    'DEFAULT_SIMILARITY_THRESHOLD',
    # Highlighting
    'highlight_differences',
]
