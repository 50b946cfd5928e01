"""
Document I/O service for turning raw bytes into diffable lines.

Handles:
- Encoding detection
- Format-specific line extraction (JSON, CSV, plain text)
- Binary content rejection
- Size limits and permission handling
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Optional

import chardet

DEFAULT_MAX_TEXT_SIZE = 50 * 1024 * 1024  # 50MB


class DocumentFormat(Enum):
    """Line extraction rule selected from a filename or format hint."""
    JSON = auto()       # Pretty-printed, then split into lines
    TEXT = auto()       # Verbatim line split (txt, html, sql)
    CSV = auto()        # Cell-level parse, one record per non-blank line

    @classmethod
    def from_hint(cls, filename: str) -> 'DocumentFormat':
        """Pick a format from the text after the last dot of a filename."""
        ext = filename.rsplit('.', 1)[-1].lower()
        if ext == 'json':
            return cls.JSON
        if ext in ('html', 'txt', 'sql'):
            return cls.TEXT
        return cls.CSV


@dataclass
class ReadResult:
    """Result of a document read operation."""
    success: bool
    lines: list[str] = field(default_factory=list)
    encoding: Optional[str] = None
    error: Optional[str] = None
    is_binary: bool = False


class LineExtractor:
    """
    Converts raw document bytes into an ordered list of lines.

    Malformed input never raises: a JSON document that fails to parse
    is split verbatim like plain text.
    """

    JSON_INDENT = 2
    CELL_SEPARATOR = ', '

    def __init__(
        self,
        default_encoding: str = 'utf-8',
        fallback_encoding: str = 'latin-1'
    ):
        self.default_encoding = default_encoding
        self.fallback_encoding = fallback_encoding

    def extract_lines(self, data: bytes, filename: str) -> list[str]:
        """Decode ``data`` and extract its lines according to ``filename``."""
        text, _ = self.decode(data)
        return self.flatten_rows(self.parse_rows(text, filename))

    def decode(self, data: bytes) -> tuple[str, str]:
        """
        Decode raw bytes to text.

        Returns:
            Tuple of (text, encoding used)
        """
        if data.startswith(b'\xef\xbb\xbf'):
            encoding = 'utf-8-sig'
        elif data.startswith(b'\xff\xfe'):
            encoding = 'utf-16-le'
            data = data[2:]
        elif data.startswith(b'\xfe\xff'):
            encoding = 'utf-16-be'
            data = data[2:]
        else:
            try:
                return data.decode(self.default_encoding), self.default_encoding
            except (UnicodeDecodeError, LookupError):
                encoding = self._detect_encoding(data)

        try:
            return data.decode(encoding), encoding
        except (UnicodeDecodeError, LookupError):
            logging.debug(f"LineExtractor - {encoding} decode failed, using {self.fallback_encoding}")
            return data.decode(self.fallback_encoding, errors='replace'), self.fallback_encoding

    def parse_rows(self, text: str, filename: str) -> list[list[str]]:
        """Split text into row records; text formats yield one cell per row."""
        fmt = DocumentFormat.from_hint(filename)

        if fmt == DocumentFormat.JSON:
            try:
                document = json.loads(text)
            except ValueError as e:
                logging.debug(f"LineExtractor - {filename} is not valid JSON, splitting verbatim: {e}")
                return [[line] for line in text.split('\n')]
            pretty = json.dumps(document, indent=self.JSON_INDENT, ensure_ascii=False)
            return [[line] for line in pretty.split('\n')]

        if fmt == DocumentFormat.TEXT:
            return [[line] for line in text.split('\n')]

        return [self.parse_csv_line(line) for line in text.split('\n') if line.strip()]

    @staticmethod
    def parse_csv_line(line: str) -> list[str]:
        """
        Split one CSV line into trimmed cells.

        A double quote toggles quoting and is dropped; commas inside
        quotes are kept as cell text.
        """
        cells: list[str] = []
        current: list[str] = []
        in_quotes = False

        for char in line:
            if char == '"':
                in_quotes = not in_quotes
            elif char == ',' and not in_quotes:
                cells.append(''.join(current).strip())
                current = []
            else:
                current.append(char)

        cells.append(''.join(current).strip())
        return cells

    def flatten_rows(self, rows: list[list[str]]) -> list[str]:
        """Join each row's cells into a single diffable line."""
        return [self.CELL_SEPARATOR.join(row) for row in rows]

    def _detect_encoding(self, content: bytes) -> str:
        """Detect encoding of content."""
        if not content:
            return self.default_encoding

        result = chardet.detect(content)

        if result['confidence'] > 0.7 and result['encoding']:
            encoding = result['encoding'].lower()
            if encoding == 'ascii':
                return 'utf-8'  # ASCII is subset of UTF-8
            return encoding

        return self.default_encoding


class FileIOService:
    """Service for reading documents from disk."""

    # Binary file signatures (magic bytes)
    BINARY_SIGNATURES = [
        b'\x89PNG',        # PNG
        b'\xff\xd8\xff',   # JPEG
        b'GIF8',           # GIF
        b'PK\x03\x04',     # ZIP
        b'\x1f\x8b',       # GZIP
        b'%PDF',           # PDF
        b'\x7fELF',        # ELF
    ]

    def __init__(
        self,
        extractor: Optional[LineExtractor] = None,
        binary_check_size: int = 8192,
        max_text_size: int = DEFAULT_MAX_TEXT_SIZE
    ):
        self.extractor = extractor or LineExtractor()
        self.binary_check_size = binary_check_size
        self.max_text_size = max_text_size

    def read_document(
        self,
        path: Path | str,
        max_text_size: Optional[int] = None
    ) -> ReadResult:
        """
        Read a document and extract its lines.

        Args:
            path: Path to the file; its name selects the extraction rule
            max_text_size: Maximum file size in bytes to read as text;
                defaults to the service limit

        Returns:
            ReadResult with lines or error information
        """
        path = Path(path)
        if max_text_size is None:
            max_text_size = self.max_text_size

        if not path.exists():
            return ReadResult(success=False, error=f"File not found: {path}")

        if not path.is_file():
            return ReadResult(success=False, error=f"Not a file: {path}")

        try:
            file_size = path.stat().st_size
            if file_size > max_text_size:
                return ReadResult(
                    success=False,
                    error=f"File too large for text comparison ({file_size / 1024 / 1024:.2f} MB). "
                          f"Max size is {max_text_size / 1024 / 1024:.2f} MB."
                )
            data = path.read_bytes()
        except PermissionError:
            logging.warning(f"FileIOService - Permission denied: {path}")
            return ReadResult(success=False, error=f"Permission denied: {path}")
        except OSError as e:
            logging.error(f"FileIOService - Failed to read {path}: {e}")
            return ReadResult(success=False, error=f"OS error: {e}")

        return self.read_bytes(data, path.name)

    def read_bytes(self, data: bytes, filename: str) -> ReadResult:
        """Extract lines from in-memory document bytes."""
        if self.is_binary(data):
            return ReadResult(success=False, is_binary=True,
                              error="File appears to be binary")

        text, encoding = self.extractor.decode(data)
        rows = self.extractor.parse_rows(text, filename)
        return ReadResult(
            success=True,
            lines=self.extractor.flatten_rows(rows),
            encoding=encoding
        )

    def is_binary(self, data: bytes) -> bool:
        """Check if content looks binary."""
        chunk = data[:self.binary_check_size]

        if chunk.startswith((b'\xff\xfe', b'\xfe\xff')):
            return False  # UTF-16 BOM, NUL bytes expected

        for sig in self.BINARY_SIGNATURES:
            if chunk.startswith(sig):
                return True

        if b'\x00' in chunk:
            return True

        # Check ratio of non-text bytes
        non_text = sum(1 for b in chunk if b < 9 or (13 < b < 32))
        return len(chunk) > 0 and non_text / len(chunk) > 0.3
