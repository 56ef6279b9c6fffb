"""
Module rack: the event-facing context object for the active pipeline.

Owns the instance registry, the pipeline order and the panel visibility
controller, and keeps the three in step. UI glue calls the on_* handlers;
the rendering layer listens to the signals and reads view_state().

Mutations are synchronous and run to completion inside one handler call.
A handler that raises has not touched the registry, order or panels.
"""

import logging
from typing import Any, List, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from pyqt_modrack.core.exceptions import ModRackError, UnknownInstanceError
from pyqt_modrack.core.instance_registry import InstanceRegistry
from pyqt_modrack.core.modules import InstanceView, ModuleDefinition, ModuleInstance
from pyqt_modrack.core.naming import to_display_name
from pyqt_modrack.core.panel_visibility import PanelVisibilityController
from pyqt_modrack.core.pipeline_order import PipelineOrder
from pyqt_modrack.protocols.panel_host import PanelHostProtocol, get_panel_host
from pyqt_modrack.protocols.rack_config import RackConfig, get_rack_config

logger = logging.getLogger(__name__)

# Debug flag for verbose rack tracing
DEBUG_RACK = False


class ModuleRack(QObject):
    """
    Active pipeline of module instances.

    Usage:
        rack = ModuleRack(render_context=canvas)
        rack.register_module(ModuleDefinition("Kaleidoscope", controls=[...]))
        rack.order_changed.connect(active_list.sync_from_order)

        rack.on_module_dragged_into_active_list("Kaleidoscope", 0)
        rack.on_module_dragged_into_active_list("Kaleidoscope", 0)
        rack.active_order()    # ["Kaleidoscope (1)", "Kaleidoscope"]

    Signals:
        order_changed(list): new display name order after any mutation
        instance_activated(str) / instance_deactivated(str): display name
        instance_renamed(str, str): old name, new name
        activation_failed(str, str): definition name, error message
        panel_focused(str): display name whose panel is now visible
        enabled_changed(str, bool): display name, enabled flag
    """

    order_changed = pyqtSignal(list)
    instance_activated = pyqtSignal(str)
    instance_deactivated = pyqtSignal(str)
    instance_renamed = pyqtSignal(str, str)
    activation_failed = pyqtSignal(str, str)
    panel_focused = pyqtSignal(str)
    enabled_changed = pyqtSignal(str, bool)

    def __init__(self, config: Optional[RackConfig] = None,
                 panel_host: Optional[PanelHostProtocol] = None,
                 render_context: Any = None, parent=None):
        """
        Args:
            config: Rack configuration; defaults to the global get_rack_config()
            panel_host: Control panel host; defaults to the registered panel host
            render_context: Passed to each clone's init hook
            parent: Parent QObject
        """
        super().__init__(parent)
        self.config = config if config is not None else get_rack_config()
        self.render_context = render_context
        self.registry = InstanceRegistry(
            allow_hyphenated_names=self.config.allow_hyphenated_names,
            duplicate_name_format=self.config.duplicate_name_format,
        )
        self.order = PipelineOrder()
        self.panels = PanelVisibilityController(
            panel_host if panel_host is not None else get_panel_host()
        )

    # ========== DEFINITIONS ==========

    def register_module(self, definition: ModuleDefinition) -> None:
        """Register a module definition so it can be dragged in."""
        self.registry.register(definition)

    # ========== UI EVENT HANDLERS ==========

    def on_module_dragged_into_active_list(self, source_definition_name: str,
                                           target_index: int) -> ModuleInstance:
        """Activate a module dropped from the gallery at target_index.

        source_definition_name may be the canonical name or its safe id.

        Raises:
            UnknownDefinitionError: the source is not a registered module
            CloneInitializationError: the clone's init hook failed
        """
        name = self._resolve_definition_name(source_definition_name)
        try:
            instance = self.registry.activate(
                name,
                render_context=self.render_context,
                enabled=self.config.enable_on_add,
            )
        except ModRackError as e:
            logger.error(f"[RACK] Could not add module '{name}': {e}")
            self.activation_failed.emit(name, str(e))
            raise

        display_name = instance.display_name
        index = self.order.insert_at(display_name, target_index)
        self.panels.register_panel(display_name)
        if DEBUG_RACK:
            logger.info(f"[RACK] Added '{display_name}' at {index} ({instance.origin.value})")

        self.instance_activated.emit(display_name)
        self._emit_order()

        if self.config.focus_on_add:
            self.on_module_focused(display_name)
        return instance

    def on_active_list_reordered(self, display_name: str, new_index: int) -> int:
        """Move an active instance to new_index.

        Returns:
            The index the instance ended up at.

        Raises:
            UnknownInstanceError: display_name is not active
        """
        name = self._resolve_display_name(display_name)
        if name not in self.registry:
            logger.warning(f"[RACK] Reorder ignored for inactive module '{display_name}'")
            raise UnknownInstanceError(display_name)

        index = self.order.move_to(name, new_index)
        if DEBUG_RACK:
            logger.info(f"[RACK] Reordered '{name}' to {index}")
        self._emit_order()
        return index

    def on_module_focused(self, display_name: str) -> bool:
        """Show display_name's control panel and hide every other one.

        Returns:
            False (and logs a warning) when no panel is registered for the name.
        """
        name = self._resolve_display_name(display_name)
        try:
            self.panels.focus(name)
        except UnknownInstanceError:
            logger.warning(f"[RACK] Focus ignored, no panel for '{display_name}'")
            return False
        self.panel_focused.emit(name)
        return True

    def on_module_blurred(self) -> None:
        """Focus left the active list; the visible panel stays visible."""
        self.panels.blur()

    def on_module_dragged_out(self, display_name: str) -> Optional[ModuleInstance]:
        """Remove an instance from the pipeline. Absent names are a no-op."""
        name = self._resolve_display_name(display_name)
        instance = self.registry.deactivate(name)
        if instance is None:
            return None

        self.order.remove_from(name)
        self.panels.unregister_panel(name)
        self.instance_deactivated.emit(name)
        self._emit_order()
        return instance

    # ========== INSTANCE OPERATIONS ==========

    def rename_instance(self, display_name: str, new_display_name: str) -> ModuleInstance:
        """Rename an active instance, keeping its position and panel state.

        Raises:
            UnknownInstanceError: display_name is not active
            ValueError: new_display_name is taken or invalid
        """
        instance = self.registry.rename(display_name, new_display_name)
        if new_display_name != display_name:
            self.order.rename(display_name, new_display_name)
            self.panels.rename_panel(display_name, new_display_name)
            self.instance_renamed.emit(display_name, new_display_name)
            self._emit_order()
        return instance

    def set_enabled(self, display_name: str, enabled: bool) -> None:
        """Turn an active instance on or off.

        Raises:
            UnknownInstanceError: display_name is not active
        """
        instance = self.registry.get(self._resolve_display_name(display_name))
        if instance.enabled == enabled:
            return
        instance.enabled = enabled
        self.enabled_changed.emit(instance.display_name, enabled)

    def reset(self) -> None:
        """Remove every active instance; definitions stay registered."""
        removed = self.registry.clear()
        self.order.clear()
        self.panels.clear()
        for instance in removed:
            self.instance_deactivated.emit(instance.display_name)
        logger.info(f"[RACK] Reset, removed {len(removed)} instances")
        self._emit_order()

    # ========== VIEW STATE ==========

    def active_order(self) -> List[str]:
        return self.order.names()

    def instance(self, display_name: str) -> ModuleInstance:
        return self.registry.get(self._resolve_display_name(display_name))

    def view_state(self) -> List[InstanceView]:
        """Render-facing views of active instances, in pipeline order."""
        return [self.registry.get(name).view() for name in self.order]

    def check_consistency(self) -> bool:
        """True when order, registry and panels agree on the active names."""
        active = self.registry.active_names()
        return self.order.is_permutation_of(active) and set(self.panels.panels()) == set(active)

    # ========== INTERNALS ==========

    def _resolve_definition_name(self, name: str) -> str:
        if self.registry.has_definition(name):
            return name
        candidate = to_display_name(name)
        if self.registry.has_definition(candidate):
            return candidate
        return name

    def _resolve_display_name(self, name: str) -> str:
        if name in self.registry:
            return name
        candidate = to_display_name(name)
        if candidate in self.registry:
            return candidate
        return name

    def _emit_order(self) -> None:
        self.order_changed.emit(self.order.names())
