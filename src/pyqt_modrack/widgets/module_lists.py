"""
Gallery and active-pipeline list widgets.

The gallery is a copy-only drag source of module definition names. The
active list accepts drops from the gallery and reorders its own items.
Neither widget mutates its items on drop: both report what happened via
signals, and the active list is rebuilt from rack state afterwards.
"""

import logging
from typing import Iterable, List, Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import QListWidget, QListWidgetItem

from pyqt_modrack.core.modules import InstanceView
from pyqt_modrack.core.naming import to_safe_id
from pyqt_modrack.services.signal_service import SignalService

logger = logging.getLogger(__name__)

DISPLAY_NAME_ROLE = Qt.ItemDataRole.UserRole
SAFE_ID_ROLE = Qt.ItemDataRole.UserRole + 1


def _make_item(name: str) -> QListWidgetItem:
    item = QListWidgetItem(name)
    item.setData(DISPLAY_NAME_ROLE, name)
    item.setData(SAFE_ID_ROLE, to_safe_id(name))
    return item


class GalleryListWidget(QListWidget):
    """Drag source listing registered module definitions.

    Dragging copies; the gallery itself is never reordered and accepts no drops.
    """

    def __init__(self, module_names: Iterable[str] = (), parent=None):
        super().__init__(parent)
        self.setDragEnabled(True)
        self.setDragDropMode(QListWidget.DragDropMode.DragOnly)
        self.setDefaultDropAction(Qt.DropAction.CopyAction)
        self.setSelectionMode(QListWidget.SelectionMode.SingleSelection)
        self.set_modules(module_names)

    def set_modules(self, module_names: Iterable[str]) -> None:
        """Replace the gallery contents with module_names, in the given order."""
        self.clear()
        for name in module_names:
            self.addItem(_make_item(name))

    def module_names(self) -> List[str]:
        return [self.item(row).data(DISPLAY_NAME_ROLE) for row in range(self.count())]

    def selected_module_names(self) -> List[str]:
        return [item.data(DISPLAY_NAME_ROLE) for item in self.selectedItems()]


class ActiveListWidget(QListWidget):
    """Active pipeline list: drop target for the gallery and reorderable itself.

    Signals:
        module_dropped(str, int): gallery module name, target row
        item_reordered(str, int): display name, final row after the move
        module_focused(str): display name that became current / got focus
        module_blurred(): the list lost keyboard focus
        enabled_toggled(str, bool): display name, new enabled flag from the checkbox
        module_removed(str): display name the user asked to remove (Delete key)
    """

    module_dropped = pyqtSignal(str, int)
    item_reordered = pyqtSignal(str, int)
    module_focused = pyqtSignal(str)
    module_blurred = pyqtSignal()
    enabled_toggled = pyqtSignal(str, bool)
    module_removed = pyqtSignal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setAcceptDrops(True)
        self.setDragEnabled(True)
        self.setDragDropMode(QListWidget.DragDropMode.DragDrop)
        self.setDefaultDropAction(Qt.DropAction.MoveAction)
        self.setSelectionMode(QListWidget.SelectionMode.SingleSelection)

        self.currentItemChanged.connect(self._on_current_item_changed)
        self.itemChanged.connect(self._on_item_changed)

    # ---------- Rebuild from rack state ----------
    def sync_from_order(self, names: Iterable[str]) -> None:
        """Rebuild items from an ordered list of display names."""
        self._rebuild((name, None) for name in names)

    def sync_from_views(self, views: Iterable[InstanceView]) -> None:
        """Rebuild items from instance views, showing enabled flags as checkboxes."""
        self._rebuild((view.display_name, view.enabled) for view in views)

    def _rebuild(self, entries) -> None:
        current = self.current_display_name()
        with SignalService.block_signals(self):
            self.clear()
            for name, enabled in entries:
                item = _make_item(name)
                if enabled is not None:
                    item.setCheckState(Qt.CheckState.Checked if enabled else Qt.CheckState.Unchecked)
                self.addItem(item)
            if current is not None:
                self._select(current)

    def select_module(self, display_name: str) -> None:
        """Make display_name the current item without emitting focus signals."""
        with SignalService.block_signals(self):
            self._select(display_name)

    def set_item_enabled(self, display_name: str, enabled: bool) -> None:
        """Update one item's checkbox in place without emitting enabled_toggled."""
        state = Qt.CheckState.Checked if enabled else Qt.CheckState.Unchecked
        with SignalService.block_signals(self):
            for row in range(self.count()):
                item = self.item(row)
                if item.data(DISPLAY_NAME_ROLE) == display_name:
                    item.setCheckState(state)
                    return

    def is_item_enabled(self, display_name: str) -> Optional[bool]:
        for row in range(self.count()):
            item = self.item(row)
            if item.data(DISPLAY_NAME_ROLE) == display_name:
                return item.checkState() == Qt.CheckState.Checked
        return None

    def display_names(self) -> List[str]:
        return [self.item(row).data(DISPLAY_NAME_ROLE) for row in range(self.count())]

    def current_display_name(self) -> Optional[str]:
        item = self.currentItem()
        return item.data(DISPLAY_NAME_ROLE) if item is not None else None

    def _select(self, display_name: str) -> None:
        for row in range(self.count()):
            if self.item(row).data(DISPLAY_NAME_ROLE) == display_name:
                self.setCurrentRow(row)
                return

    # ---------- Drag and drop ----------
    def dragEnterEvent(self, event):
        if self._accepts_source(event.source()):
            event.accept()
        else:
            event.ignore()

    def dragMoveEvent(self, event):
        if self._accepts_source(event.source()):
            event.accept()
        else:
            event.ignore()

    def dropEvent(self, event):
        """Translate a drop into module_dropped or item_reordered."""
        source = event.source()
        row = self._drop_row(event)

        if isinstance(source, GalleryListWidget):
            names = source.selected_module_names()
            self._accept_as_copy(event)
            for offset, name in enumerate(names):
                self.module_dropped.emit(name, row + offset)
            return

        if source is not self:
            logger.warning(f"[ACTIVE_LIST] Rejected drop from {type(source).__name__}")
            event.ignore()
            return

        source_items = self.selectedItems()
        if not source_items:
            event.ignore()
            return

        display_name = source_items[0].data(DISPLAY_NAME_ROLE)
        source_index = self.row(source_items[0])
        # Final resting index once the item is taken out of its old slot
        target_index = row - 1 if row > source_index else row

        # Copy action stops the view from deleting the dragged row afterwards;
        # the list is rebuilt from the rack's order instead
        self._accept_as_copy(event)
        if target_index != source_index:
            self.item_reordered.emit(display_name, target_index)

    def _drop_row(self, event) -> int:
        pos = event.position().toPoint()
        index = self.indexAt(pos)
        if not index.isValid():
            return self.count()
        row = index.row()
        if pos.y() > self.visualRect(index).center().y():
            row += 1
        return row

    def _accepts_source(self, source) -> bool:
        return source is self or isinstance(source, GalleryListWidget)

    @staticmethod
    def _accept_as_copy(event) -> None:
        event.setDropAction(Qt.DropAction.CopyAction)
        event.accept()

    # ---------- Focus and editing ----------
    def focusInEvent(self, event):
        super().focusInEvent(event)
        name = self.current_display_name()
        if name is not None:
            self.module_focused.emit(name)

    def focusOutEvent(self, event):
        super().focusOutEvent(event)
        self.module_blurred.emit()

    def keyPressEvent(self, event):
        if event.key() in (Qt.Key.Key_Delete, Qt.Key.Key_Backspace):
            name = self.current_display_name()
            if name is not None:
                self.module_removed.emit(name)
                return
        super().keyPressEvent(event)

    def _on_current_item_changed(self, current, previous):
        if current is not None:
            self.module_focused.emit(current.data(DISPLAY_NAME_ROLE))

    def _on_item_changed(self, item):
        if item.data(Qt.ItemDataRole.CheckStateRole) is not None:
            enabled = item.checkState() == Qt.CheckState.Checked
            self.enabled_toggled.emit(item.data(DISPLAY_NAME_ROLE), enabled)
