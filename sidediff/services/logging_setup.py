"""
Logging configuration.

Library modules log through the root logger with a ``"Component - message"``
prefix; this module is the single place that decides where those records go.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO, Union

# Third-party loggers that are only interesting when something goes wrong
NOISY_LOGGERS = ('chardet', 'chardet.charsetprober', 'PyQt6')


class LogFormatter(logging.Formatter):
    """Pipe-separated record layout, colored by level on a terminal."""

    LEVEL_COLORS = {
        logging.DEBUG: '\033[2m',       # Dim
        logging.INFO: '\033[32m',       # Green
        logging.WARNING: '\033[33m',    # Yellow
        logging.ERROR: '\033[31m',      # Red
        logging.CRITICAL: '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True, stream: Optional[TextIO] = None):
        super().__init__(
            fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        target = stream if stream is not None else sys.stdout
        self.use_colors = use_colors and hasattr(target, 'isatty') and target.isatty()

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        if not self.use_colors:
            return text
        return f"{self.LEVEL_COLORS.get(record.levelno, '')}{text}{self.RESET}"


def _resolve_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(
    level: Union[str, int] = "INFO",
    log_file: Optional[Path] = None,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Route log records to the console and, optionally, a UTF-8 log file.

    Any handlers already on the root logger are replaced, so calling this
    twice does not duplicate output.

    Args:
        level: Level name (case-insensitive) or number; unknown names mean INFO
        log_file: Optional file to append records to, without colors
        stream: Console stream, stdout by default

    Returns:
        Root logger instance
    """
    numeric_level = _resolve_level(level)
    console = stream if stream is not None else sys.stdout

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(console)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(LogFormatter(use_colors=True, stream=console))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(LogFormatter(use_colors=False))
        root_logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.debug(f"setup_logging - Level {logging.getLevelName(numeric_level)}"
                  + (f", writing to {log_file}" if log_file else ""))
    return root_logger
