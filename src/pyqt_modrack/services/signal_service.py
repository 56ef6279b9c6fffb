"""
Signal blocking helpers.

Context managers guaranteeing that signals are unblocked again, used when
widgets are rebuilt from rack state and must not echo events back.
"""

from contextlib import contextmanager
from PyQt6.QtCore import QObject
import logging

logger = logging.getLogger(__name__)


class SignalService:
    """
    Service for blocking Qt signals around programmatic updates.

    Examples:
        # Rebuild a list without emitting reorder/focus signals:
        with SignalService.block_signals(active_list):
            active_list.clear()

        # Multiple objects:
        with SignalService.block_signals(active_list, rack):
            ...
    """

    @staticmethod
    @contextmanager
    def block_signals(*objects: QObject):
        """Context manager for blocking signals; restores each object's previous state."""
        previous = []
        for obj in objects:
            if obj is not None:
                previous.append((obj, obj.blockSignals(True)))
                logger.debug(f"Blocked signals on {type(obj).__name__}")

        try:
            yield
        finally:
            for obj, was_blocked in previous:
                obj.blockSignals(was_blocked)
                logger.debug(f"Restored signals on {type(obj).__name__}")
