"""Unit tests for coupled panel scrolling."""

import pytest

pytest.importorskip("PyQt6")

from PyQt6.QtWidgets import QScrollBar  # noqa: E402

from sidediff.services.settings import ViewSettings  # noqa: E402
from sidediff.ui.scroll_sync import ScrollCoupler  # noqa: E402


@pytest.fixture
def bars(qapp):
    left, right = QScrollBar(), QScrollBar()
    for bar in (left, right):
        bar.setRange(0, 100)
    yield left, right
    left.deleteLater()
    right.deleteLater()


class TestScrollCoupler:
    """Tests for ScrollCoupler."""

    def test_left_moves_right(self, bars):
        """Test scrolling the left panel scrolls the right one."""
        left, right = bars
        coupler = ScrollCoupler(left, right)  # noqa: F841

        left.setValue(40)

        assert right.value() == 40

    def test_right_moves_left(self, bars):
        """Test scrolling the right panel scrolls the left one."""
        left, right = bars
        coupler = ScrollCoupler(left, right)  # noqa: F841

        right.setValue(25)

        assert left.value() == 25

    def test_disabled(self, bars):
        """Test a disabled coupler leaves the other panel alone."""
        left, right = bars
        coupler = ScrollCoupler(left, right, enabled=False)  # noqa: F841

        left.setValue(40)

        assert right.value() == 0

    def test_enable_aligns_right_to_left(self, bars):
        """Test enabling coupling snaps the right panel to the left."""
        left, right = bars
        coupler = ScrollCoupler(left, right, enabled=False)
        left.setValue(60)

        coupler.set_enabled(True)

        assert coupler.enabled
        assert right.value() == 60

    def test_detach(self, bars):
        """Test a detached coupler stops syncing."""
        left, right = bars
        coupler = ScrollCoupler(left, right)
        coupler.detach()
        coupler.detach()

        left.setValue(70)

        assert right.value() == 0

    @pytest.mark.parametrize("sync_scroll, expected", [(True, 30), (False, 0)])
    def test_from_settings(self, bars, sync_scroll, expected):
        """Test the sync_scroll preference decides whether panels move together."""
        left, right = bars
        coupler = ScrollCoupler.from_settings(left, right, ViewSettings(sync_scroll=sync_scroll))

        left.setValue(30)

        assert coupler.enabled is sync_scroll
        assert right.value() == expected
