"""
Background workers for non-blocking operations.

Provides QThread-based workers for document comparison. All workers
use Qt signals for thread-safe communication with the UI thread.
"""

from sidediff.workers.base_worker import (
    BaseWorker,
    WorkerSignals,
    WorkerState,
    WorkerThread,
)
from sidediff.workers.compare_worker import (
    DocumentCompareWorker,
    LineCompareWorker,
)

__all__ = [
    # Base
    'BaseWorker',
    'WorkerSignals',
    'WorkerState',
    'WorkerThread',
    # Compare
    'DocumentCompareWorker',
    'LineCompareWorker',
]
