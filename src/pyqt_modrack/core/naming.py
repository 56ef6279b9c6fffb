"""
Display name and safe identifier helpers.

Display names are what users see ("Kaleidoscope (1)"). Safe identifiers
replace spaces with hyphens so they can be used as widget object names and
event correlation keys ("Kaleidoscope-(1)").
"""

from string import Formatter
from typing import Iterable

from pyqt_modrack.core.exceptions import InvalidModuleNameError

SAFE_ID_SEPARATOR = "-"
DEFAULT_DUPLICATE_FORMAT = "{base} ({count})"


def to_safe_id(display_name: str) -> str:
    """Replace every space in a display name with a hyphen."""
    return display_name.replace(" ", SAFE_ID_SEPARATOR)


def to_display_name(safe_id: str) -> str:
    """Inverse of to_safe_id: hyphens back to spaces."""
    return safe_id.replace(SAFE_ID_SEPARATOR, " ")


def validate_name(name: str, allow_hyphens: bool = False) -> str:
    """Return name unchanged if it is usable as a module or display name.

    Raises:
        InvalidModuleNameError: name is empty/whitespace, or contains a
            hyphen while hyphens are not allowed.
    """
    if not name or not name.strip():
        raise InvalidModuleNameError(name, "name must not be empty")
    if not allow_hyphens and SAFE_ID_SEPARATOR in name:
        raise InvalidModuleNameError(
            name, "hyphens are reserved as the safe identifier separator"
        )
    return name


def count_duplicates(base_name: str, active_names: Iterable[str]) -> int:
    """Count active display names sharing base_name's safe id prefix.

    A name matches when its safe id equals the base safe id, or starts with
    the base safe id followed by the separator.
    """
    base_id = to_safe_id(base_name)
    prefix = base_id + SAFE_ID_SEPARATOR
    count = 0
    for name in active_names:
        safe_id = to_safe_id(name)
        if safe_id == base_id or safe_id.startswith(prefix):
            count += 1
    return count


def validate_duplicate_format(fmt: str, allow_hyphens: bool = False) -> str:
    """Return fmt unchanged if it can number duplicate display names.

    Raises:
        ValueError: fmt lacks a {count} field, uses fields other than
            {base} and {count}, or adds a hyphen while hyphens are not allowed.
    """
    fields = set()
    literal = []
    for text, field_name, _, _ in Formatter().parse(fmt):
        literal.append(text)
        if field_name is not None:
            fields.add(field_name)
    if "count" not in fields:
        raise ValueError(f"Duplicate name format {fmt!r} must contain a {{count}} field")
    unknown = fields - {"base", "count"}
    if unknown:
        raise ValueError(f"Duplicate name format {fmt!r} has unknown fields {sorted(unknown)}")
    if not allow_hyphens and SAFE_ID_SEPARATOR in "".join(literal):
        raise ValueError(
            f"Duplicate name format {fmt!r} contains the safe identifier separator"
        )
    return fmt


def disambiguate(base_name: str, active_names: Iterable[str],
                 fmt: str = DEFAULT_DUPLICATE_FORMAT) -> str:
    """Compute a display name for a new instance of base_name.

    Returns base_name when no active instance uses it. Otherwise the suffix
    starts at the current duplicate count and is bumped until unused.
    """
    taken = set(active_names)
    if base_name not in taken:
        return base_name

    count = max(count_duplicates(base_name, taken), 1)
    candidate = fmt.format(base=base_name, count=count)
    while candidate in taken:
        count += 1
        candidate = fmt.format(base=base_name, count=count)
    return candidate
