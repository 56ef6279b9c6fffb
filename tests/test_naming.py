"""Tests for display name and safe id helpers."""

import pytest


def test_safe_id_replaces_every_space():
    """Every space becomes a hyphen, not just the first."""
    from pyqt_modrack.core import to_safe_id

    assert to_safe_id("Kaleidoscope (1)") == "Kaleidoscope-(1)"
    assert to_safe_id("Grid Fill Mirror") == "Grid-Fill-Mirror"


@pytest.mark.parametrize("name", ["Kaleidoscope", "Grid Fill Mirror", "Wave (12)", " lead space"])
def test_display_name_roundtrip(name):
    """to_display_name inverts to_safe_id for hyphen-free names."""
    from pyqt_modrack.core import to_display_name, to_safe_id

    assert to_display_name(to_safe_id(name)) == name


def test_validate_name_rejects_hyphens_and_empty():
    """Hyphens are reserved unless explicitly allowed."""
    from pyqt_modrack.core import validate_name, InvalidModuleNameError

    assert validate_name("Wave") == "Wave"
    with pytest.raises(InvalidModuleNameError):
        validate_name("Half-Wave")
    with pytest.raises(InvalidModuleNameError):
        validate_name("   ")
    assert validate_name("Half-Wave", allow_hyphens=True) == "Half-Wave"


def test_count_duplicates_matches_prefix_family():
    """Exact base and base followed by the separator both count."""
    from pyqt_modrack.core import count_duplicates

    active = ["Kaleidoscope", "Kaleidoscope (1)", "Kaleidoscopes", "Wave"]
    assert count_duplicates("Kaleidoscope", active) == 2
    assert count_duplicates("Wave", active) == 1
    assert count_duplicates("Grid", active) == 0


def test_disambiguate_sequence():
    """First duplicate is (1), second is (2)."""
    from pyqt_modrack.core import disambiguate

    assert disambiguate("Kaleidoscope", []) == "Kaleidoscope"
    assert disambiguate("Kaleidoscope", ["Kaleidoscope"]) == "Kaleidoscope (1)"
    assert disambiguate("Kaleidoscope", ["Kaleidoscope", "Kaleidoscope (1)"]) == "Kaleidoscope (2)"


def test_disambiguate_skips_taken_suffix():
    """Removing a middle duplicate must not produce a colliding name."""
    from pyqt_modrack.core import disambiguate

    active = ["Kaleidoscope", "Kaleidoscope (2)"]
    assert disambiguate("Kaleidoscope", active) == "Kaleidoscope (3)"


def test_disambiguate_custom_format():
    from pyqt_modrack.core import disambiguate

    assert disambiguate("Wave", ["Wave"], fmt="{base} #{count}") == "Wave #1"


def test_duplicate_format_requires_count():
    """A format without {count} would repeat one candidate forever."""
    from pyqt_modrack.core import validate_duplicate_format

    assert validate_duplicate_format("{base} ({count})") == "{base} ({count})"
    with pytest.raises(ValueError, match="count"):
        validate_duplicate_format("{base} copy")
    with pytest.raises(ValueError, match="unknown fields"):
        validate_duplicate_format("{base} {count} {index}")


def test_duplicate_format_rejects_separator_unless_allowed():
    """A hyphenated suffix would not survive the safe id round trip."""
    from pyqt_modrack.core import to_display_name, to_safe_id, validate_duplicate_format

    with pytest.raises(ValueError, match="separator"):
        validate_duplicate_format("{base}-{count}")
    assert validate_duplicate_format("{base}-{count}", allow_hyphens=True) == "{base}-{count}"

    name = "{base} #{count}".format(base="Wave", count=2)
    assert to_display_name(to_safe_id(name)) == name
