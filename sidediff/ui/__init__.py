"""
PyQt6 user interface helpers.
"""

from sidediff.ui.scroll_sync import ScrollCoupler

__all__ = [
    'ScrollCoupler',
]
