"""
Core rack engine.

Module definitions and instances, the instance registry, the active
pipeline order and the panel visibility controller. Pure Python with no
Qt dependency; the services layer wires these to Qt signals.
"""

from .exceptions import (
    ModRackError,
    DuplicateDefinitionError,
    UnknownDefinitionError,
    UnknownInstanceError,
    InvalidModuleNameError,
    CloneInitializationError,
)
from .naming import (
    to_safe_id,
    to_display_name,
    validate_name,
    validate_duplicate_format,
    count_duplicates,
    disambiguate,
)
from .controls import RangeControl, CheckboxControl, SelectControl, ColorControl, control_from_settings
from .modules import (
    ModuleDefinition,
    ModuleInstance,
    OriginalInstance,
    ClonedInstance,
    InstanceOrigin,
    InstanceView,
)
from .instance_registry import InstanceRegistry
from .pipeline_order import PipelineOrder
from .panel_visibility import PanelVisibilityController

__all__ = [
    "ModRackError",
    "DuplicateDefinitionError",
    "UnknownDefinitionError",
    "UnknownInstanceError",
    "InvalidModuleNameError",
    "CloneInitializationError",
    "to_safe_id",
    "to_display_name",
    "validate_name",
    "validate_duplicate_format",
    "count_duplicates",
    "disambiguate",
    "RangeControl",
    "CheckboxControl",
    "SelectControl",
    "ColorControl",
    "control_from_settings",
    "ModuleDefinition",
    "ModuleInstance",
    "OriginalInstance",
    "ClonedInstance",
    "InstanceOrigin",
    "InstanceView",
    "InstanceRegistry",
    "PipelineOrder",
    "PanelVisibilityController",
]
