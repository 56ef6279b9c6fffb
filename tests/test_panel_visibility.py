"""Tests for the panel visibility controller."""

import pytest

from pyqt_modrack.core import PanelVisibilityController, UnknownInstanceError


@pytest.fixture
def panels(panel_host):
    controller = PanelVisibilityController(panel_host)
    for name in ("Wave", "Grid Fill"):
        controller.register_panel(name)
    return controller


def test_focus_shows_only_one_panel(panels, panel_host):
    """focus(A) then focus(B) leaves only B visible; A transitions to hidden."""
    panels.focus("Wave")
    panels.focus("Grid Fill")

    assert panels.visible_name == "Grid Fill"
    assert panels.is_visible("Grid Fill")
    assert not panels.is_visible("Wave")
    assert panel_host.calls == [
        ("show", "Wave"),
        ("hide", "Wave"),
        ("show", "Grid-Fill"),
    ]


def test_focus_unknown_panel_keeps_state(panels):
    panels.focus("Wave")
    with pytest.raises(UnknownInstanceError):
        panels.focus("Bloom")
    assert panels.visible_name == "Wave"
    assert panels.is_visible("Wave")


def test_refocus_same_panel_is_quiet(panels, panel_host):
    panels.focus("Wave")
    panels.focus("Wave")
    assert panel_host.calls == [("show", "Wave")]


def test_blur_changes_nothing(panels, panel_host):
    panels.focus("Wave")
    panels.blur()
    assert panels.visible_name == "Wave"
    assert panel_host.calls == [("show", "Wave")]


def test_unregister_visible_panel_clears_visibility(panels, panel_host):
    panels.focus("Grid Fill")
    panels.unregister_panel("Grid Fill")
    assert panels.visible_name is None
    assert panels.panels() == ["Wave"]
    assert panel_host.calls[-1] == ("hide", "Grid-Fill")
    panels.unregister_panel("Grid Fill")


def test_rename_panel_follows_visibility(panels):
    panels.focus("Wave")
    panels.rename_panel("Wave", "Wave (main)")
    assert panels.visible_name == "Wave (main)"
    assert panels.is_visible("Wave (main)")
    with pytest.raises(UnknownInstanceError):
        panels.rename_panel("Wave", "Other")


def test_rename_visible_panel_moves_host_panel(panels, panel_host):
    """Host hears about the new safe id, so a later focus hides the right panel."""
    panels.focus("Wave")
    panels.rename_panel("Wave", "Main Wave")
    panels.focus("Grid Fill")

    assert panel_host.calls == [
        ("show", "Wave"),
        ("hide", "Wave"),
        ("show", "Main-Wave"),
        ("hide", "Main-Wave"),
        ("show", "Grid-Fill"),
    ]
    shown = set()
    for action, safe_id in panel_host.calls:
        if action == "show":
            shown.add(safe_id)
        else:
            shown.discard(safe_id)
    assert shown == {"Grid-Fill"}


def test_rename_hidden_panel_is_quiet(panels, panel_host):
    panels.focus("Wave")
    panels.rename_panel("Grid Fill", "Grid")
    assert panel_host.calls == [("show", "Wave")]
    assert panels.panels() == ["Wave", "Grid"]


def test_works_without_host():
    controller = PanelVisibilityController()
    controller.register_panel("Wave")
    controller.focus("Wave")
    assert controller.is_visible("Wave")
