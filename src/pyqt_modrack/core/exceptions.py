"""Rack exceptions."""

from typing import Optional


class ModRackError(Exception):
    """Base class for all module rack errors."""


class DuplicateDefinitionError(ModRackError, ValueError):
    """Raised when a module definition name is registered twice."""

    def __init__(self, name: str):
        super().__init__(f"Module definition '{name}' is already registered")
        self.name = name


class UnknownDefinitionError(ModRackError, KeyError):
    """Raised when activating a module that was never registered."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"No module definition registered as '{self.name}'"


class UnknownInstanceError(ModRackError, KeyError):
    """Raised when a display name has no active instance or registered panel."""

    def __init__(self, display_name: str):
        super().__init__(display_name)
        self.display_name = display_name

    def __str__(self) -> str:
        return f"No active module instance named '{self.display_name}'"


class InvalidModuleNameError(ModRackError, ValueError):
    """Raised for empty names or names that cannot round-trip through a safe id."""

    def __init__(self, name: str, reason: str):
        super().__init__(f"Invalid module name '{name}': {reason}")
        self.name = name
        self.reason = reason


class CloneInitializationError(ModRackError):
    """Raised when a cloned module's init hook fails.

    The partially built clone is discarded; the original exception is
    available as ``__cause__``.
    """

    def __init__(self, definition_name: str, display_name: str, cause: Optional[BaseException] = None):
        detail = f": {cause}" if cause is not None else ""
        super().__init__(
            f"Failed to initialize clone '{display_name}' of module '{definition_name}'{detail}"
        )
        self.definition_name = definition_name
        self.display_name = display_name
