"""Tests for control descriptors."""

import pytest


def test_range_control_clamps():
    """Values outside the range are clamped."""
    from pyqt_modrack.core import RangeControl

    control = RangeControl("amount", value=5.0, minimum=0.0, maximum=2.0)
    assert control.value == 2.0
    control.value = -1.0
    assert control.value == 0.0


def test_range_control_rejects_inverted_bounds():
    from pyqt_modrack.core import RangeControl

    with pytest.raises(ValueError):
        RangeControl("amount", minimum=2.0, maximum=1.0)


def test_select_control_validates_value():
    """Select values must be one of the option values."""
    from pyqt_modrack.core import SelectControl

    control = SelectControl("blend", options=[("Normal", "normal"), ("Add", "add")])
    assert control.value == "normal"
    control.value = "add"
    assert control.value == "add"
    with pytest.raises(ValueError):
        control.value = "multiply"


def test_color_control_normalizes_hex():
    from pyqt_modrack.core import ColorControl

    control = ColorControl("tint", value="#FF8800")
    assert control.value == "#ff8800"
    with pytest.raises(ValueError):
        control.value = "orange"


def test_label_defaults_to_variable():
    from pyqt_modrack.core import CheckboxControl

    assert CheckboxControl("mirror").label == "mirror"


def test_clone_matches_snapshot_without_aliasing(make_definition):
    """A rebuilt descriptor has the same snapshot but independent state."""
    definition = make_definition()
    for original in definition.controls:
        copy = original.clone()
        assert type(copy) is type(original)
        assert copy is not original
        assert copy.get_settings() == original.get_settings()

    segments = definition.controls[0]
    copy = segments.clone()
    copy.value = 12
    assert segments.value == 6


def test_select_options_not_shared_after_clone():
    """Snapshots copy containers, so option lists are not shared."""
    from pyqt_modrack.core import SelectControl

    original = SelectControl("blend", options=[("Normal", "normal")])
    copy = original.clone()
    copy.options.append(("Add", "add"))
    assert original.options == [("Normal", "normal")]


def test_control_kinds_registered_by_metaclass():
    """Concrete kinds auto-register; control_from_settings dispatches on kind."""
    from pyqt_modrack.core import RangeControl, control_from_settings
    from pyqt_modrack.protocols import CONTROL_KINDS

    assert CONTROL_KINDS["range"] is RangeControl
    assert {"range", "checkbox", "select", "color"} <= set(CONTROL_KINDS)

    settings = RangeControl("speed", value=0.25).get_settings()
    rebuilt = control_from_settings("range", settings)
    assert isinstance(rebuilt, RangeControl)
    assert rebuilt.value == 0.25

    with pytest.raises(KeyError):
        control_from_settings("knob", settings)


def test_custom_control_kind_roundtrip():
    """Third-party kinds only implement value and get_settings."""
    from pyqt_modrack.protocols import ControlDescriptor, CONTROL_KINDS

    class TextControl(ControlDescriptor):
        kind = "test_text"

        def __init__(self, variable, label="", text=""):
            super().__init__(variable, label)
            self.text = text

        @property
        def value(self):
            return self.text

        @value.setter
        def value(self, new_value):
            self.text = str(new_value)

        def get_settings(self):
            return {"variable": self.variable, "label": self.label, "text": self.text}

    assert CONTROL_KINDS["test_text"] is TextControl
    original = TextControl("caption", text="hello")
    assert original.clone().get_settings() == original.get_settings()


def test_abstract_descriptor_cannot_be_instantiated():
    from pyqt_modrack.protocols import ControlDescriptor

    with pytest.raises(TypeError):
        ControlDescriptor("x")
