"""
Panel visibility controller.

Keeps at most one control panel visible, keyed by instance display name.
Hosts that actually draw panels are told about transitions by safe id.
"""

import logging
from typing import Dict, List, Optional

from pyqt_modrack.core.exceptions import UnknownInstanceError
from pyqt_modrack.core.naming import to_safe_id
from pyqt_modrack.protocols.panel_host import PanelHostProtocol

logger = logging.getLogger(__name__)


class PanelVisibilityController:
    """Enforces the single-visible-panel rule.

    A panel must be registered (normally when its instance is activated)
    before it can be focused.
    """

    def __init__(self, host: Optional[PanelHostProtocol] = None):
        self.host = host
        self._visible: Dict[str, bool] = {}
        self._visible_name: Optional[str] = None

    def register_panel(self, display_name: str) -> None:
        """Register a hidden panel for display_name (re-registering is a no-op)."""
        self._visible.setdefault(display_name, False)
        logger.debug(f"[PANELS] Registered panel '{display_name}'")

    def unregister_panel(self, display_name: str) -> None:
        """Forget a panel; clears the visible state if it was the visible one."""
        if self._visible.pop(display_name, None) is None:
            return
        if self._visible_name == display_name:
            self._visible_name = None
            self._notify_hide(display_name)
        logger.debug(f"[PANELS] Unregistered panel '{display_name}'")

    def rename_panel(self, old_name: str, new_name: str) -> None:
        """Move a panel's registration to a new display name.

        Raises:
            UnknownInstanceError: old_name has no registered panel
        """
        if old_name not in self._visible:
            raise UnknownInstanceError(old_name)
        self._visible[new_name] = self._visible.pop(old_name)
        if self._visible_name == old_name:
            self._visible_name = new_name
            # Hosts key panels by safe id, so the visible one moves too
            self._notify_hide(old_name)
            self._notify_show(new_name)

    def focus(self, display_name: str) -> None:
        """Hide every other panel and show the one for display_name.

        Raises:
            UnknownInstanceError: no panel registered for display_name
        """
        if display_name not in self._visible:
            raise UnknownInstanceError(display_name)

        for name, visible in self._visible.items():
            if name != display_name and visible:
                self._visible[name] = False
                self._notify_hide(name)

        if not self._visible[display_name]:
            self._visible[display_name] = True
            self._notify_show(display_name)
        self._visible_name = display_name
        logger.debug(f"[PANELS] Focused '{display_name}'")

    def blur(self) -> None:
        """Focus left the active list. Panels stay as they are."""
        logger.debug(f"[PANELS] Blur (visible panel unchanged: {self._visible_name!r})")

    @property
    def visible_name(self) -> Optional[str]:
        return self._visible_name

    def is_visible(self, display_name: str) -> bool:
        return self._visible.get(display_name, False)

    def panels(self) -> List[str]:
        return list(self._visible)

    def clear(self) -> None:
        if self._visible_name is not None:
            self._notify_hide(self._visible_name)
        self._visible.clear()
        self._visible_name = None

    def _notify_show(self, display_name: str) -> None:
        if self.host is not None:
            self.host.show_panel(to_safe_id(display_name))

    def _notify_hide(self, display_name: str) -> None:
        if self.host is not None:
            self.host.hide_panel(to_safe_id(display_name))
