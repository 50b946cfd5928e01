"""
Synchronized vertical scrolling for the two diff panels.
"""

from __future__ import annotations

from typing import Optional, Union

from PyQt6.QtCore import QObject
from PyQt6.QtWidgets import QAbstractScrollArea, QScrollBar

from sidediff.services.settings import ViewSettings

ScrollTarget = Union[QScrollBar, QAbstractScrollArea]


def _vertical_bar(target: ScrollTarget) -> QScrollBar:
    if isinstance(target, QAbstractScrollArea):
        return target.verticalScrollBar()
    return target


class ScrollCoupler(QObject):
    """
    Keeps the vertical offsets of two panels equal.

    Moving either scroll bar moves the other to the same value; the echo
    from the programmatic update is ignored.
    """

    def __init__(
        self,
        left: ScrollTarget,
        right: ScrollTarget,
        enabled: bool = True,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self._left = _vertical_bar(left)
        self._right = _vertical_bar(right)
        self._enabled = enabled
        self._syncing = False
        self._attached = True

        self._left.valueChanged.connect(self._sync_scroll_from_left)
        self._right.valueChanged.connect(self._sync_scroll_from_right)

    @classmethod
    def from_settings(
        cls,
        left: ScrollTarget,
        right: ScrollTarget,
        view: ViewSettings,
        parent: Optional[QObject] = None
    ) -> ScrollCoupler:
        """Coupler that starts enabled only when ``view.sync_scroll`` is set."""
        return cls(left, right, enabled=view.sync_scroll, parent=parent)

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        """Turn coupling on or off; turning it on aligns right to left."""
        self._enabled = enabled
        if enabled and self._attached:
            self._sync_scroll_from_left(self._left.value())

    def detach(self) -> None:
        """Disconnect from both scroll bars."""
        if not self._attached:
            return
        self._left.valueChanged.disconnect(self._sync_scroll_from_left)
        self._right.valueChanged.disconnect(self._sync_scroll_from_right)
        self._attached = False

    def _sync_scroll_from_left(self, value: int) -> None:
        """Sync right scroll to left."""
        self._apply(self._right, value)

    def _sync_scroll_from_right(self, value: int) -> None:
        """Sync left scroll to right."""
        self._apply(self._left, value)

    def _apply(self, target: QScrollBar, value: int) -> None:
        if not self._enabled or self._syncing:
            return
        self._syncing = True
        try:
            target.setValue(value)
        finally:
            self._syncing = False
