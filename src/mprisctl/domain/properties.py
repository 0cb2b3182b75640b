"""
Human-readable rendering of model properties.

Field names are the wire property names ("Volume", "CanSeek",
"xesam:title", ...) so output can be scripted against.
"""

from typing import Any, Mapping, Optional

from .variant import Field


def property_values(target: Any, fields: Mapping[str, Field]) -> dict[str, Any]:
    """Snapshot target's fields keyed by wire name, in table order."""
    return {key: getattr(target, entry.attribute) for key, entry in fields.items()}


def format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return str(value)


def format_properties(
    values: Mapping[str, Any], field: Optional[str] = None
) -> list[str]:
    """Render properties as output lines.

    Args:
        values: Wire name -> value mapping (see property_values)
        field: Single wire name to show, or None for all of them

    Returns:
        Without a field, one "Name: value" line per property, skipping
        empty lists. With a field, just its value; list items go on
        separate lines. Unknown field names produce no lines.
    """
    if field:
        if field not in values:
            return []
        value = values[field]
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value]
        return [format_value(value)]

    lines = []
    for key, value in values.items():
        if isinstance(value, (list, tuple)) and not value:
            continue
        lines.append(f"{key}: {format_value(value)}")
    return lines
