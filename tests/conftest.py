"""Shared pytest fixtures."""

import logging
import os

import pytest


@pytest.fixture(scope="session")
def qapp():
    """Offscreen QApplication shared by all Qt-dependent tests."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    qt_widgets = pytest.importorskip("PyQt6.QtWidgets")
    app = qt_widgets.QApplication.instance() or qt_widgets.QApplication([])
    yield app


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way it was after a logging test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
