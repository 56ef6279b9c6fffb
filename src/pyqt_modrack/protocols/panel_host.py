"""Panel host protocol and ABC for showing per-instance control panels.

The rack does not build control panels itself. Applications subclass
PanelHostABC (or satisfy PanelHostProtocol) and hand it to the rack or
register it globally with register_panel_host().

Example:
    class StackedPanelHost(PanelHostABC):
        def __init__(self, stack):
            self._stack = stack

        def show_panel(self, safe_id: str) -> None:
            self._stack.findChild(QWidget, safe_id).show()

        def hide_panel(self, safe_id: str) -> None:
            self._stack.findChild(QWidget, safe_id).hide()

    register_panel_host(StackedPanelHost(stack))
"""

from abc import ABC, abstractmethod
from typing import Protocol, Optional


class PanelHostProtocol(Protocol):
    """Protocol for hosts that display control panels by safe id.

    Use this for duck-typed checking. For implementation, prefer PanelHostABC.
    """

    def show_panel(self, safe_id: str) -> None:
        """Make the panel for safe_id visible."""
        ...

    def hide_panel(self, safe_id: str) -> None:
        """Hide the panel for safe_id."""
        ...


class PanelHostABC(ABC):
    """Abstract base class for control panel hosts."""

    @abstractmethod
    def show_panel(self, safe_id: str) -> None:
        """Make the panel for safe_id visible.

        Args:
            safe_id: Safe identifier of the module instance (spaces as hyphens)
        """
        ...

    @abstractmethod
    def hide_panel(self, safe_id: str) -> None:
        """Hide the panel for safe_id."""
        ...


_panel_host: Optional[PanelHostProtocol] = None


def register_panel_host(host: Optional[PanelHostProtocol]) -> None:
    """Register a global panel host (None clears it).

    Args:
        host: Object implementing PanelHostProtocol or PanelHostABC
    """
    global _panel_host
    _panel_host = host


def get_panel_host() -> Optional[PanelHostProtocol]:
    """Get the registered panel host."""
    return _panel_host
