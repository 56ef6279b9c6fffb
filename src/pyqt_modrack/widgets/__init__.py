"""
Module list widgets.

Gallery and active-pipeline lists acting as the drag/drop event source,
and the binding that connects them to a ModuleRack.
"""

from .module_lists import ActiveListWidget, GalleryListWidget, DISPLAY_NAME_ROLE, SAFE_ID_ROLE
from .rack_binding import RackListBinding

__all__ = [
    "ActiveListWidget",
    "GalleryListWidget",
    "DISPLAY_NAME_ROLE",
    "SAFE_ID_ROLE",
    "RackListBinding",
]
