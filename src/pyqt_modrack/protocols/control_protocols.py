"""
Control descriptor ABC contract.

A control descriptor is one adjustable parameter of a module instance
(a slider, a checkbox, a colour). Descriptors must be able to snapshot
their settings and be rebuilt from that snapshot, which is how cloned
module instances get private controls.

Concrete kinds auto-register through ControlMeta when their class is
defined, mirroring the widget registry:
- CONTROL_KINDS maps kind tag -> class
- Abstract or tag-less classes are skipped
"""

from abc import ABC, ABCMeta, abstractmethod
from typing import Any, Dict, Type
import logging

logger = logging.getLogger(__name__)

# Maps control kind tag -> concrete ControlDescriptor class
CONTROL_KINDS: Dict[str, Type["ControlDescriptor"]] = {}


class ControlMeta(ABCMeta):
    """Metaclass registering concrete control kinds in CONTROL_KINDS."""

    def __new__(cls, name, bases, attrs):
        new_class = super().__new__(cls, name, bases, attrs)

        if getattr(new_class, '__abstractmethods__', None):
            return new_class

        kind = getattr(new_class, 'kind', None)
        if kind is None:
            logger.debug(f"Skipping control registration for {name} - no kind attribute")
            return new_class

        if kind in CONTROL_KINDS and CONTROL_KINDS[kind] is not new_class:
            logger.warning(
                f"Control kind '{kind}' already registered to {CONTROL_KINDS[kind].__name__}. "
                f"Overwriting with {name}."
            )
        CONTROL_KINDS[kind] = new_class
        return new_class


class ControlDescriptor(ABC, metaclass=ControlMeta):
    """
    ABC for a single adjustable module parameter.

    Subclasses set a class-level ``kind`` tag and implement get_settings().
    The default from_settings() passes the snapshot to the constructor as
    keyword arguments, so snapshot keys must match constructor parameters.
    """

    kind: str = None

    def __init__(self, variable: str, label: str = ""):
        self.variable = variable
        self.label = label or variable

    @property
    @abstractmethod
    def value(self) -> Any:
        """Current value of the parameter."""

    @value.setter
    @abstractmethod
    def value(self, new_value: Any) -> None:
        pass

    @abstractmethod
    def get_settings(self) -> Dict[str, Any]:
        """
        Snapshot the descriptor's settings.

        Returns:
            A fresh dict (containers copied) that from_settings() accepts.
        """
        pass

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> "ControlDescriptor":
        """Build a new descriptor of this kind from a snapshot."""
        return cls(**settings)

    def clone(self) -> "ControlDescriptor":
        """Return an unaliased copy built from this descriptor's snapshot."""
        return type(self).from_settings(self.get_settings())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.variable!r}, value={self.value!r})"
