"""
Rack protocol definitions.

ABC contracts for control descriptors and panel hosts, plus the global
rack configuration hook.
"""

from .control_protocols import ControlDescriptor, ControlMeta, CONTROL_KINDS
from .panel_host import PanelHostProtocol, PanelHostABC, register_panel_host, get_panel_host
from .rack_config import RackConfig, set_rack_config, get_rack_config

__all__ = [
    "ControlDescriptor",
    "ControlMeta",
    "CONTROL_KINDS",
    "PanelHostProtocol",
    "PanelHostABC",
    "register_panel_host",
    "get_panel_host",
    "RackConfig",
    "set_rack_config",
    "get_rack_config",
]
