"""
Workers for document comparison operations.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from PyQt6.QtCore import QObject

from sidediff.workers.base_worker import BaseWorker
from sidediff.core.diff.text_diff import TextDiffEngine, TextCompareOptions
from sidediff.core.models import DiffResult
from sidediff.services.file_io import FileIOService


class DocumentCompareWorker(BaseWorker):
    """
    Worker for comparing two raw documents.

    Runs line extraction and the diff engine in a background thread.
    """

    def __init__(
        self,
        left_data: bytes,
        left_name: str,
        right_data: bytes,
        right_name: str,
        options: Optional[TextCompareOptions] = None,
        file_io: Optional[FileIOService] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent=parent)
        self.left_data = left_data
        self.left_name = left_name
        self.right_data = right_data
        self.right_name = right_name
        self.options = options or TextCompareOptions()
        self.file_io = file_io or FileIOService()

    def do_work(self) -> DiffResult:
        """Perform document comparison."""
        self.report_status(f"Comparing {self.left_name}...")

        self.report_progress(0, 100, "Reading left document...")
        left_lines = self._read(self.left_data, self.left_name)

        self.report_progress(50, 100, "Reading right document...")
        right_lines = self._read(self.right_data, self.right_name)

        self.report_status("Computing differences...")
        engine = TextDiffEngine(self.options)
        result = engine.compare(left_lines, right_lines, self.left_name, self.right_name)

        self.report_progress(100, 100, "Complete")
        self.report_status("Complete")
        return result

    def _read(self, data: bytes, name: str) -> list[str]:
        read_result = self.file_io.read_bytes(data, name)
        if not read_result.success:
            logging.error(f"DocumentCompareWorker - Cannot read {name}: {read_result.error}")
            if read_result.is_binary:
                raise IOError(f"File appears to be binary and cannot be compared as text: {name}")
            raise IOError(f"Failed to read {name}: {read_result.error}")
        return read_result.lines


class LineCompareWorker(BaseWorker):
    """
    Worker for comparing already extracted lines.

    Useful when content is already in memory.
    """

    def __init__(
        self,
        left_lines: Sequence[str],
        right_lines: Sequence[str],
        left_label: str = "Left",
        right_label: str = "Right",
        options: Optional[TextCompareOptions] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent=parent)
        self.left_lines = list(left_lines)
        self.right_lines = list(right_lines)
        self.left_label = left_label
        self.right_label = right_label
        self.options = options or TextCompareOptions()

    def do_work(self) -> DiffResult:
        """Perform line comparison."""
        self.report_status("Computing differences...")

        engine = TextDiffEngine(self.options)
        return engine.compare(
            self.left_lines,
            self.right_lines,
            self.left_label,
            self.right_label
        )
