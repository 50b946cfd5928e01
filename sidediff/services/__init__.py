"""
Services shared by the comparison core and the UI layer.

Provides:
- Document reading and line extraction
- Settings persistence
- Logging configuration
"""

from sidediff.services.file_io import (
    DocumentFormat,
    FileIOService,
    LineExtractor,
    ReadResult,
)
from sidediff.services.settings import (
    ApplicationSettings,
    ComparisonSettings,
    SettingsManager,
    ViewSettings,
)
from sidediff.services.logging_setup import (
    LogFormatter,
    setup_logging,
)

__all__ = [
    # File I/O
    'DocumentFormat',
    'FileIOService',
    'LineExtractor',
    'ReadResult',
    # Settings
    'ApplicationSettings',
    'ComparisonSettings',
    'SettingsManager',
    'ViewSettings',
    # Logging
    'LogFormatter',
    'setup_logging',
]
