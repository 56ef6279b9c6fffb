"""Wiring between the module list widgets and a ModuleRack."""

import logging
from typing import Optional

from PyQt6.QtCore import QObject

from pyqt_modrack.core.exceptions import ModRackError
from pyqt_modrack.services.module_rack import ModuleRack
from pyqt_modrack.widgets.module_lists import ActiveListWidget, GalleryListWidget

logger = logging.getLogger(__name__)


class RackListBinding(QObject):
    """
    Connects list widget events to rack handlers and rack state back to the list.

    Rack errors raised from a slot are logged here; they must not escape into
    the Qt event loop.

    Usage:
        binding = RackListBinding(rack, active_list, gallery)
    """

    def __init__(self, rack: ModuleRack, active_list: ActiveListWidget,
                 gallery: Optional[GalleryListWidget] = None, parent=None):
        super().__init__(parent)
        self.rack = rack
        self.active_list = active_list
        self.gallery = gallery

        active_list.module_dropped.connect(self._on_module_dropped)
        active_list.item_reordered.connect(self._on_item_reordered)
        active_list.module_focused.connect(self._on_module_focused)
        active_list.module_blurred.connect(rack.on_module_blurred)
        active_list.enabled_toggled.connect(self._on_enabled_toggled)
        active_list.module_removed.connect(self._on_module_removed)

        rack.order_changed.connect(self.refresh)
        rack.enabled_changed.connect(active_list.set_item_enabled)
        rack.panel_focused.connect(active_list.select_module)

        if gallery is not None:
            self.refresh_gallery()
        self.refresh()

    def refresh(self, *_args) -> None:
        """Rebuild the active list from the rack's view state."""
        self.active_list.sync_from_views(self.rack.view_state())

    def refresh_gallery(self) -> None:
        self.gallery.set_modules(d.name for d in self.rack.registry.definitions())

    def _on_module_dropped(self, source_name: str, row: int) -> None:
        try:
            self.rack.on_module_dragged_into_active_list(source_name, row)
        except ModRackError as e:
            logger.error(f"[ACTIVE_LIST] Drop of '{source_name}' failed: {e}")

    def _on_item_reordered(self, display_name: str, row: int) -> None:
        try:
            self.rack.on_active_list_reordered(display_name, row)
        except ModRackError as e:
            logger.warning(f"[ACTIVE_LIST] Reorder of '{display_name}' failed: {e}")
            self.refresh()

    def _on_module_focused(self, display_name: str) -> None:
        self.rack.on_module_focused(display_name)

    def _on_enabled_toggled(self, display_name: str, enabled: bool) -> None:
        try:
            self.rack.set_enabled(display_name, enabled)
        except ModRackError as e:
            logger.warning(f"[ACTIVE_LIST] Enable toggle for '{display_name}' failed: {e}")

    def _on_module_removed(self, display_name: str) -> None:
        self.rack.on_module_dragged_out(display_name)
