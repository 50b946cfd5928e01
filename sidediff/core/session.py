"""
Comparison session state.

Holds the two loaded documents and the current result. A comparison
starts automatically once both documents are loaded, and every new
comparison replaces the previous result as a whole.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from sidediff.core.diff.text_diff import TextCompareOptions, TextDiffEngine
from sidediff.core.models import DiffResult
from sidediff.core.render import SideBySideRenderer
from sidediff.services.file_io import LineExtractor

if TYPE_CHECKING:
    from sidediff.services.settings import ComparisonSettings

OLD_SLOT = 1
NEW_SLOT = 2


@dataclass(frozen=True)
class LoadedDocument:
    """A document after line extraction."""
    filename: str
    lines: tuple[str, ...]


class ComparisonSession:
    """
    Two-slot document state with automatic comparison.

    Slot 1 holds the old document, slot 2 the new one.
    """

    def __init__(
        self,
        options: Optional[TextCompareOptions] = None,
        extractor: Optional[LineExtractor] = None
    ):
        self.engine = TextDiffEngine(options)
        self.extractor = extractor or LineExtractor()
        self._documents: dict[int, LoadedDocument] = {}
        self.result: Optional[DiffResult] = None
        self.is_comparing = False
        self.has_compared = False

    @classmethod
    def from_settings(cls, settings: ComparisonSettings) -> ComparisonSession:
        """Session comparing and decoding the way ``settings`` say."""
        return cls(settings.to_compare_options(), settings.create_extractor())

    def document(self, slot: int) -> Optional[LoadedDocument]:
        self._check_slot(slot)
        return self._documents.get(slot)

    @property
    def is_ready(self) -> bool:
        """True when both slots hold documents with at least one line."""
        return all(
            slot in self._documents and self._documents[slot].lines
            for slot in (OLD_SLOT, NEW_SLOT)
        )

    def load_document(self, slot: int, data: bytes, filename: str) -> Optional[DiffResult]:
        """
        Extract a document into a slot.

        Returns:
            The new result if this load triggered a comparison, else None
        """
        self._check_slot(slot)
        lines = self.extractor.extract_lines(data, filename)
        return self.load_lines(slot, lines, filename)

    def load_lines(self, slot: int, lines: list[str], filename: str) -> Optional[DiffResult]:
        """Put already extracted lines into a slot."""
        self._check_slot(slot)
        self._documents[slot] = LoadedDocument(filename, tuple(lines))
        logging.debug(f"ComparisonSession - Slot {slot} loaded {filename} ({len(lines)} lines)")

        if self.is_ready and not self.is_comparing and not self.has_compared:
            return self.compare()
        return None

    def compare(self) -> DiffResult:
        """
        Compare the loaded documents, replacing any previous result.

        Raises:
            ValueError: If either slot is empty.
        """
        if not all(slot in self._documents for slot in (OLD_SLOT, NEW_SLOT)):
            raise ValueError("Both documents must be loaded before comparing")

        old_doc = self._documents[OLD_SLOT]
        new_doc = self._documents[NEW_SLOT]

        self.is_comparing = True
        self.has_compared = False
        try:
            result = self.engine.compare(
                old_doc.lines,
                new_doc.lines,
                old_doc.filename,
                new_doc.filename
            )
        finally:
            self.is_comparing = False

        self.result = result
        self.has_compared = True
        logging.info(f"ComparisonSession - {old_doc.filename} vs {new_doc.filename}: {result.statistics}")
        return result

    def renderer(self, cache_size: int = 2048) -> SideBySideRenderer:
        """
        Renderer over the current result, highlighting with this
        session's engine options.

        Raises:
            ValueError: If nothing has been compared yet.
        """
        if self.result is None:
            raise ValueError("No comparison result to render")
        return SideBySideRenderer(
            self.result.window,
            highlighter=self.engine.compute_intraline_diff,
            cache_size=cache_size
        )

    def reset(self) -> None:
        """Discard both documents and the current result."""
        self._documents.clear()
        self.result = None
        self.is_comparing = False
        self.has_compared = False

    @staticmethod
    def _check_slot(slot: int) -> None:
        if slot not in (OLD_SLOT, NEW_SLOT):
            raise ValueError(f"Invalid document slot: {slot}")
