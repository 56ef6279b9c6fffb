"""
pyqt-modrack: module instance registry and active pipeline ordering for PyQt6.

The engine behind a live visual-effects mixer: module definitions are
dragged from a gallery into an active pipeline, where each drag-in becomes
an independently stateful, uniquely named instance with its own controls.

Architecture:
- Core: definitions, instances, registry, pipeline order, panel visibility (no Qt)
- Protocols: control descriptor ABC, panel host ABC, rack configuration
- Services: ModuleRack context object emitting Qt signals
- Widgets: gallery / active list drag sources and the rack binding

Key Features:
- First use shares the definition; duplicates get private cloned controls
- Duplicate naming "Name (1)", "Name (2)" with guaranteed uniqueness
- Single visible control panel
- Failed clone initialization leaves rack state untouched
"""

__version__ = "0.1.0"

from pyqt_modrack.core import (
    ModuleDefinition,
    ModuleInstance,
    InstanceRegistry,
    PipelineOrder,
    PanelVisibilityController,
    ModRackError,
    DuplicateDefinitionError,
    CloneInitializationError,
    UnknownInstanceError,
)
from pyqt_modrack.protocols import ControlDescriptor, RackConfig, set_rack_config, get_rack_config

__all__ = [
    "__version__",
    "ModuleDefinition",
    "ModuleInstance",
    "InstanceRegistry",
    "PipelineOrder",
    "PanelVisibilityController",
    "ModRackError",
    "DuplicateDefinitionError",
    "CloneInitializationError",
    "UnknownInstanceError",
    "ControlDescriptor",
    "RackConfig",
    "set_rack_config",
    "get_rack_config",
]
