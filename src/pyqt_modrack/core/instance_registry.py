"""
Instance registry: registered module definitions and active module instances.

Architecture:
- Definitions keyed by canonical name (load-once)
- Active instances keyed by stable handle
- Auxiliary display name -> handle index, rebuilt on rename
- First activation of a free display name uses the definition itself;
  later activations clone it

The registry does not touch the pipeline order. Callers (ModuleRack) update
the order after every successful activate/deactivate.
"""

import logging
from typing import Any, Dict, List, Optional

from pyqt_modrack.core.exceptions import (
    CloneInitializationError,
    DuplicateDefinitionError,
    UnknownDefinitionError,
    UnknownInstanceError,
)
from pyqt_modrack.core.modules import (
    ClonedInstance,
    ModuleDefinition,
    ModuleInstance,
    OriginalInstance,
)
from pyqt_modrack.core.naming import (
    DEFAULT_DUPLICATE_FORMAT,
    disambiguate,
    validate_duplicate_format,
    validate_name,
)

logger = logging.getLogger(__name__)


class InstanceRegistry:
    """Source of truth for which module instances are active.

    Example:
        registry = InstanceRegistry()
        registry.register(ModuleDefinition("Kaleidoscope", controls=[...]))

        first = registry.activate("Kaleidoscope")    # "Kaleidoscope", original
        second = registry.activate("Kaleidoscope")   # "Kaleidoscope (1)", clone
        registry.deactivate(second.display_name)
    """

    def __init__(self, allow_hyphenated_names: bool = False,
                 duplicate_name_format: str = DEFAULT_DUPLICATE_FORMAT):
        self.allow_hyphenated_names = allow_hyphenated_names
        self.duplicate_name_format = validate_duplicate_format(
            duplicate_name_format, allow_hyphenated_names
        )
        self._definitions: Dict[str, ModuleDefinition] = {}
        self._instances: Dict[int, ModuleInstance] = {}
        self._handles_by_name: Dict[str, int] = {}

    # ---------- Definitions ----------
    def register(self, definition: ModuleDefinition) -> None:
        """Register a module definition under its canonical name.

        Raises:
            DuplicateDefinitionError: name already registered
            InvalidModuleNameError: name is empty or contains a hyphen
        """
        validate_name(definition.name, self.allow_hyphenated_names)
        if definition.name in self._definitions:
            raise DuplicateDefinitionError(definition.name)
        self._definitions[definition.name] = definition
        logger.debug(f"[REGISTRY] Registered definition '{definition.name}' "
                     f"({len(definition.controls)} controls)")

    def unregister_definition(self, name: str) -> None:
        """Remove a definition that has no active instances.

        Raises:
            UnknownDefinitionError: name not registered
            ValueError: instances of the definition are still active
        """
        definition = self.definition(name)
        in_use = [i.display_name for i in self._instances.values() if i.definition is definition]
        if in_use:
            raise ValueError(f"Module '{name}' still has active instances: {in_use}")
        del self._definitions[name]
        logger.debug(f"[REGISTRY] Unregistered definition '{name}'")

    def definition(self, name: str) -> ModuleDefinition:
        try:
            return self._definitions[name]
        except KeyError:
            raise UnknownDefinitionError(name) from None

    def definitions(self) -> List[ModuleDefinition]:
        return list(self._definitions.values())

    def has_definition(self, name: str) -> bool:
        return name in self._definitions

    # ---------- Activation ----------
    def activate(self, name: str, requested_display_name: Optional[str] = None,
                 render_context: Any = None, enabled: bool = True) -> ModuleInstance:
        """Create an active instance of the named definition.

        If requested_display_name (default: the definition name) is not in use
        and the definition is not already active as an original, the definition
        itself becomes the instance. Otherwise a clone is built:
        controls rebuilt from snapshots, state deep-copied, init hook run with
        render_context, and a disambiguated display name assigned.

        Raises:
            UnknownDefinitionError: name not registered
            InvalidModuleNameError: requested or generated display name is invalid
            CloneInitializationError: the clone's init hook raised; nothing is inserted
        """
        definition = self.definition(name)
        base_name = requested_display_name or definition.name
        validate_name(base_name, self.allow_hyphenated_names)

        if base_name not in self._handles_by_name and not self._original_active(definition):
            instance = OriginalInstance(definition, base_name, enabled)
        else:
            display_name = disambiguate(base_name, self._handles_by_name, self.duplicate_name_format)
            validate_name(display_name, self.allow_hyphenated_names)
            instance = ClonedInstance(definition, display_name, enabled)
            if definition.init is not None:
                try:
                    definition.init(instance, render_context)
                except Exception as e:
                    logger.error(f"[REGISTRY] Init hook failed for clone '{display_name}': {e}")
                    raise CloneInitializationError(definition.name, display_name, e) from e

        self._instances[instance.handle] = instance
        self._handles_by_name[instance.display_name] = instance.handle
        logger.info(f"[REGISTRY] Activated {instance.origin.value} '{instance.display_name}' "
                    f"(handle={instance.handle})")
        return instance

    def deactivate(self, display_name: str) -> Optional[ModuleInstance]:
        """Remove an active instance. Absent names are a no-op (returns None)."""
        handle = self._handles_by_name.pop(display_name, None)
        if handle is None:
            logger.debug(f"[REGISTRY] Deactivate ignored, not active: '{display_name}'")
            return None
        instance = self._instances.pop(handle)
        logger.info(f"[REGISTRY] Deactivated '{display_name}' (handle={handle})")
        return instance

    def rename(self, display_name: str, new_display_name: str) -> ModuleInstance:
        """Change an instance's display name; its handle is unchanged.

        Raises:
            UnknownInstanceError: display_name not active
            ValueError: new_display_name already used by another instance
        """
        instance = self.get(display_name)
        if new_display_name == display_name:
            return instance
        validate_name(new_display_name, self.allow_hyphenated_names)
        if new_display_name in self._handles_by_name:
            raise ValueError(f"Display name '{new_display_name}' is already active")

        instance.display_name = new_display_name
        self._rebuild_name_index()
        logger.debug(f"[REGISTRY] Renamed '{display_name}' -> '{new_display_name}'")
        return instance

    def clear(self) -> List[ModuleInstance]:
        """Deactivate every instance; definitions stay registered."""
        removed = list(self._instances.values())
        self._instances.clear()
        self._handles_by_name.clear()
        logger.debug(f"[REGISTRY] Cleared {len(removed)} active instances")
        return removed

    # ---------- Lookup ----------
    def get(self, display_name: str) -> ModuleInstance:
        handle = self._handles_by_name.get(display_name)
        if handle is None:
            raise UnknownInstanceError(display_name)
        return self._instances[handle]

    def get_by_handle(self, handle: int) -> Optional[ModuleInstance]:
        return self._instances.get(handle)

    def active_names(self) -> List[str]:
        """Display names of active instances in activation order."""
        return [instance.display_name for instance in self._instances.values()]

    def instances(self) -> List[ModuleInstance]:
        return list(self._instances.values())

    def _original_active(self, definition: ModuleDefinition) -> bool:
        # A renamed original still owns the definition's controls
        return any(
            instance.definition is definition and not instance.is_clone
            for instance in self._instances.values()
        )

    def _rebuild_name_index(self) -> None:
        self._handles_by_name = {
            instance.display_name: handle for handle, instance in self._instances.items()
        }

    def __contains__(self, display_name: str) -> bool:
        return display_name in self._handles_by_name

    def __len__(self) -> int:
        return len(self._instances)
