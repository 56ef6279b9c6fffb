"""pytest configuration and fixtures for pyqt-modrack tests."""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtWidgets import QApplication


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


class RecordingPanelHost:
    """Panel host that records show/hide calls by safe id."""

    def __init__(self):
        self.calls = []

    def show_panel(self, safe_id):
        self.calls.append(("show", safe_id))

    def hide_panel(self, safe_id):
        self.calls.append(("hide", safe_id))


@pytest.fixture
def panel_host():
    return RecordingPanelHost()


@pytest.fixture
def make_definition():
    """Factory for a Kaleidoscope-like definition with one control of each kind."""
    from pyqt_modrack.core import (
        ModuleDefinition, RangeControl, CheckboxControl, SelectControl, ColorControl,
    )

    def factory(name="Kaleidoscope", init=None, state=None):
        return ModuleDefinition(
            name=name,
            controls=[
                RangeControl("segments", "Segments", value=6, minimum=1, maximum=24, step=1),
                CheckboxControl("mirror", "Mirror", checked=True),
                SelectControl("blend", "Blend", options=[("Normal", "normal"), ("Add", "add")]),
                ColorControl("tint", "Tint", value="#FF8800"),
            ],
            init=init,
            state=state if state is not None else {"angles": [0.0, 0.5]},
        )

    return factory
