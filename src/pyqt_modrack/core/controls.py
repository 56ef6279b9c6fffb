"""
Concrete control descriptor kinds.

Each kind snapshots to a plain dict whose keys match its constructor, so
ControlDescriptor.from_settings() rebuilds an equivalent, unaliased copy.
"""

import re
from typing import Any, Dict, List, Sequence, Tuple

from pyqt_modrack.protocols.control_protocols import CONTROL_KINDS, ControlDescriptor

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


class RangeControl(ControlDescriptor):
    """Numeric slider clamped to [minimum, maximum]."""

    kind = "range"

    def __init__(self, variable: str, label: str = "", value: float = 0.0,
                 minimum: float = 0.0, maximum: float = 1.0, step: float = 0.01):
        super().__init__(variable, label)
        if minimum > maximum:
            raise ValueError(f"RangeControl '{variable}': minimum {minimum} > maximum {maximum}")
        self.minimum = minimum
        self.maximum = maximum
        self.step = step
        self._value = minimum
        self.value = value

    @property
    def value(self) -> float:
        return self._value

    @value.setter
    def value(self, new_value: float) -> None:
        self._value = min(max(new_value, self.minimum), self.maximum)

    def get_settings(self) -> Dict[str, Any]:
        return {
            "variable": self.variable,
            "label": self.label,
            "value": self._value,
            "minimum": self.minimum,
            "maximum": self.maximum,
            "step": self.step,
        }


class CheckboxControl(ControlDescriptor):
    """Boolean toggle."""

    kind = "checkbox"

    def __init__(self, variable: str, label: str = "", checked: bool = False):
        super().__init__(variable, label)
        self._checked = bool(checked)

    @property
    def value(self) -> bool:
        return self._checked

    @value.setter
    def value(self, new_value: bool) -> None:
        self._checked = bool(new_value)

    def get_settings(self) -> Dict[str, Any]:
        return {"variable": self.variable, "label": self.label, "checked": self._checked}


class SelectControl(ControlDescriptor):
    """Dropdown over (label, value) options; value must be one of the option values."""

    kind = "select"

    def __init__(self, variable: str, label: str = "",
                 options: Sequence[Tuple[str, Any]] = (), value: Any = None):
        super().__init__(variable, label)
        self.options: List[Tuple[str, Any]] = [tuple(option) for option in options]
        if not self.options:
            raise ValueError(f"SelectControl '{variable}' needs at least one option")
        self._value = self.options[0][1]
        if value is not None:
            self.value = value

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, new_value: Any) -> None:
        allowed = [option_value for _, option_value in self.options]
        if new_value not in allowed:
            raise ValueError(
                f"SelectControl '{self.variable}': {new_value!r} not in {allowed}"
            )
        self._value = new_value

    def get_settings(self) -> Dict[str, Any]:
        return {
            "variable": self.variable,
            "label": self.label,
            "options": [tuple(option) for option in self.options],
            "value": self._value,
        }


class ColorControl(ControlDescriptor):
    """Colour picker holding a lower-case ``#rrggbb`` string."""

    kind = "color"

    def __init__(self, variable: str, label: str = "", value: str = "#ffffff"):
        super().__init__(variable, label)
        self._value = "#ffffff"
        self.value = value

    @property
    def value(self) -> str:
        return self._value

    @value.setter
    def value(self, new_value: str) -> None:
        if not isinstance(new_value, str) or not _HEX_COLOR.match(new_value):
            raise ValueError(f"ColorControl '{self.variable}': expected #rrggbb, got {new_value!r}")
        self._value = new_value.lower()

    def get_settings(self) -> Dict[str, Any]:
        return {"variable": self.variable, "label": self.label, "value": self._value}


def control_from_settings(kind: str, settings: Dict[str, Any]) -> ControlDescriptor:
    """Build a control of a registered kind from a snapshot.

    Raises:
        KeyError: kind is not registered
    """
    try:
        control_class = CONTROL_KINDS[kind]
    except KeyError:
        raise KeyError(f"Unknown control kind '{kind}'. Known: {sorted(CONTROL_KINDS)}") from None
    return control_class.from_settings(settings)
