"""Base configuration for module rack behavior.

Provides hooks for applications to customize how dragged-in modules are
named, enabled and focused.
"""

from typing import Optional
from dataclasses import dataclass

from pyqt_modrack.core.naming import DEFAULT_DUPLICATE_FORMAT, validate_duplicate_format


@dataclass
class RackConfig:
    """Configuration for module rack behavior.

    Applications can subclass this to provide custom configuration.

    Attributes:
        enable_on_add: Whether newly added instances start enabled
        focus_on_add: Whether the new instance's panel is shown after a drag-in
        allow_hyphenated_names: Accept hyphens in module names (safe ids become ambiguous)
        duplicate_name_format: Format for duplicate display names; receives base and count
    """

    enable_on_add: bool = True
    focus_on_add: bool = True
    allow_hyphenated_names: bool = False
    duplicate_name_format: str = DEFAULT_DUPLICATE_FORMAT

    def __post_init__(self):
        validate_duplicate_format(self.duplicate_name_format, self.allow_hyphenated_names)


# Global config instance (set by application)
_rack_config: Optional[RackConfig] = None


def set_rack_config(config: Optional[RackConfig]) -> None:
    """Set the global rack configuration (None restores defaults).

    Args:
        config: RackConfig instance
    """
    global _rack_config
    _rack_config = config


def get_rack_config() -> RackConfig:
    """Get the current rack configuration.

    Returns:
        Current RackConfig or default if not set
    """
    if _rack_config is None:
        return RackConfig()
    return _rack_config
