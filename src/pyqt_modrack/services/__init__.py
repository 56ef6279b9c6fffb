"""
Service layer for the module rack.

The ModuleRack context object translating UI events into registry, order
and panel mutations, and signal helpers shared with the widgets.
"""

from .signal_service import SignalService
from .module_rack import ModuleRack

__all__ = [
    "SignalService",
    "ModuleRack",
]
