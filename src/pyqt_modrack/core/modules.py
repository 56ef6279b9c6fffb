"""
Module definitions and running module instances.

A ModuleDefinition is the shared template registered once per name. Each
drag into the active pipeline produces a ModuleInstance:

- OriginalInstance: the first use; controls and state ARE the definition's
- ClonedInstance: later uses; owns private copies of controls and state

Instances carry a stable opaque handle assigned at creation. The display
name is a plain attribute that the registry may rename.
"""

from __future__ import annotations

import copy
import itertools
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from pyqt_modrack.core.naming import to_safe_id
from pyqt_modrack.protocols.control_protocols import ControlDescriptor

InitHook = Callable[["ModuleInstance", Any], None]

_handle_counter = itertools.count(1)


def _next_handle() -> int:
    return next(_handle_counter)


@dataclass
class ModuleDefinition:
    """Shared, reusable template for an effect module.

    Attributes:
        name: Canonical name, unique across registered definitions
        controls: Control descriptor templates, in panel order
        init: Optional hook run on each clone with (instance, render_context)
        state: Arbitrary module data, deep-copied into clones
    """

    name: str
    controls: List[ControlDescriptor] = field(default_factory=list)
    init: Optional[InitHook] = None
    state: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        seen = set()
        for control in self.controls:
            if control.variable in seen:
                raise ValueError(
                    f"Module '{self.name}' declares control '{control.variable}' more than once"
                )
            seen.add(control.variable)

    @property
    def has_controls(self) -> bool:
        return bool(self.controls)


class InstanceOrigin(Enum):
    """Whether an instance is the definition itself or a private clone."""
    ORIGINAL = "original"
    CLONE = "clone"


class ModuleInstance(ABC):
    """A running, uniquely named module in the active pipeline."""

    origin: InstanceOrigin

    def __init__(self, definition: ModuleDefinition, display_name: str, enabled: bool = True):
        self.handle = _next_handle()
        self.definition = definition
        self.display_name = display_name
        self.enabled = enabled

    @property
    def safe_id(self) -> str:
        return to_safe_id(self.display_name)

    @property
    @abstractmethod
    def controls(self) -> List[ControlDescriptor]:
        """Controls shown in this instance's panel."""

    @property
    @abstractmethod
    def state(self) -> Dict[str, Any]:
        """Module data the renderer reads for this instance."""

    @property
    def is_clone(self) -> bool:
        return self.origin is InstanceOrigin.CLONE

    def control(self, variable: str) -> ControlDescriptor:
        """Look up a control by its variable name.

        Raises:
            KeyError: no control with that variable
        """
        for control in self.controls:
            if control.variable == variable:
                return control
        raise KeyError(f"Module instance '{self.display_name}' has no control '{variable}'")

    def view(self) -> InstanceView:
        """Immutable snapshot for the rendering layer."""
        return InstanceView(
            display_name=self.display_name,
            safe_id=self.safe_id,
            enabled=self.enabled,
            origin=self.origin,
            controls=tuple((c.kind, c.get_settings()) for c in self.controls),
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(handle={self.handle}, name={self.display_name!r}, "
            f"enabled={self.enabled})"
        )


class OriginalInstance(ModuleInstance):
    """First use of a definition; shares the definition's controls and state."""

    origin = InstanceOrigin.ORIGINAL

    @property
    def controls(self) -> List[ControlDescriptor]:
        return self.definition.controls

    @property
    def state(self) -> Dict[str, Any]:
        return self.definition.state


class ClonedInstance(ModuleInstance):
    """Duplicate use of a definition; owns private controls and state."""

    origin = InstanceOrigin.CLONE

    def __init__(self, definition: ModuleDefinition, display_name: str, enabled: bool = True):
        super().__init__(definition, display_name, enabled)
        # Rebuild from snapshots so no descriptor is shared with the definition
        self._controls = [control.clone() for control in definition.controls]
        self._state = copy.deepcopy(definition.state)

    @property
    def controls(self) -> List[ControlDescriptor]:
        return self._controls

    @property
    def state(self) -> Dict[str, Any]:
        return self._state


@dataclass(frozen=True)
class InstanceView:
    """Render-facing view of one active instance."""
    display_name: str
    safe_id: str
    enabled: bool
    origin: InstanceOrigin
    controls: Tuple[Tuple[str, Dict[str, Any]], ...] = ()
