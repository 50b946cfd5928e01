"""
Worker plumbing for running a comparison off the UI thread.

A comparison is one blocking unit: the worker publishes no partial
results and cannot be interrupted once started. The UI learns about it
only through the signals on ``WorkerSignals``.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import Any, Optional

from PyQt6.QtCore import QObject, QThread, pyqtSignal, pyqtSlot, QMutex, QMutexLocker


class WorkerState(Enum):
    """Lifecycle of a worker; COMPLETED and FAILED are final."""
    PENDING = auto()
    RUNNING = auto()
    COMPLETED = auto()
    FAILED = auto()

    @property
    def is_final(self) -> bool:
        return self in (WorkerState.COMPLETED, WorkerState.FAILED)


class WorkerSignals(QObject):
    """
    Signals a worker emits towards the UI thread.

    Kept on a separate QObject that stays in the creating thread, so
    connections made by the UI are delivered as queued calls.
    """
    started = pyqtSignal()
    status = pyqtSignal(str)
    progress = pyqtSignal(int, int, str)       # (current, total, message)
    finished = pyqtSignal(object)              # DiffResult or other payload
    error = pyqtSignal(str, str)               # (exception type name, message)
    state_changed = pyqtSignal(object)         # WorkerState


class WorkerMeta(type(QObject), type(ABC)):
    pass


class BaseWorker(QObject, ABC, metaclass=WorkerMeta):
    """
    Base class for a single background job.

    Subclasses implement ``do_work`` and return its payload; ``run``
    turns the outcome into ``finished`` or ``error``.
    """

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.signals = WorkerSignals()
        self._mutex = QMutex()
        self._state = WorkerState.PENDING
        self._result: Any = None
        self._error: Optional[tuple[str, str]] = None
        self.elapsed: Optional[float] = None

    @property
    def state(self) -> WorkerState:
        with QMutexLocker(self._mutex):
            return self._state

    def _transition(self, state: WorkerState) -> None:
        with QMutexLocker(self._mutex):
            self._state = state
        self.signals.state_changed.emit(state)

    @property
    def is_pending(self) -> bool:
        """True until the job has either completed or failed."""
        return not self.state.is_final

    @property
    def result(self) -> Any:
        """Payload of a completed job, else None."""
        return self._result

    @property
    def error(self) -> Optional[tuple[str, str]]:
        """``(type name, message)`` of a failed job, else None."""
        return self._error

    @pyqtSlot()
    def run(self) -> None:
        """Execute ``do_work`` once and report the outcome."""
        name = type(self).__name__
        self._transition(WorkerState.RUNNING)
        self.signals.started.emit()
        started = time.perf_counter()

        try:
            payload = self.do_work()
        except Exception as e:
            self.elapsed = time.perf_counter() - started
            self._error = (type(e).__name__, str(e))
            logging.error(f"{name} - Failed after {self.elapsed:.3f}s: {e}")
            self._transition(WorkerState.FAILED)
            self.signals.error.emit(*self._error)
            return

        self.elapsed = time.perf_counter() - started
        self._result = payload
        logging.debug(f"{name} - Completed in {self.elapsed:.3f}s")
        self._transition(WorkerState.COMPLETED)
        self.signals.finished.emit(payload)

    @abstractmethod
    def do_work(self) -> Any:
        """Do the job and return its payload; raise to report failure."""

    def report_progress(self, current: int, total: int, message: str = "") -> None:
        self.signals.progress.emit(current, total, message)

    def report_status(self, message: str) -> None:
        self.signals.status.emit(message)


class WorkerThread(QThread):
    """
    Dedicated thread for one worker.

    The worker is moved into the thread and started with it; the thread
    quits as soon as the worker reports either outcome.

    Usage:
        thread = WorkerThread(DocumentCompareWorker(...))
        thread.worker.signals.finished.connect(show_result)
        thread.start()
    """

    def __init__(self, worker: BaseWorker, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.worker = worker
        worker.moveToThread(self)

        self.started.connect(worker.run)
        worker.signals.finished.connect(self.quit)
        worker.signals.error.connect(self.quit)

    @property
    def result(self) -> Any:
        return self.worker.result

    @property
    def error(self) -> Optional[tuple[str, str]]:
        return self.worker.error
