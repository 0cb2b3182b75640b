"""
Variant decoding for MPRIS property dictionaries.

Players publish their state as a dictionary of dynamically typed values
(a{sv} on the wire). The decoders here turn one such value into the Python
type a model field expects, and decode_properties() applies a whole
dictionary against a static key -> field table.

dbus-python hands variants over already unwrapped, as subclasses of the
native types (dbus.Boolean is an int, dbus.ObjectPath is a str, dbus.Array
is a list), so matching on the native types covers both real bus replies
and plain Python values in tests.
"""

from typing import Any, Callable, Mapping, NamedTuple, Sequence, TypeVar, Union

from loguru import logger

from .exceptions import DecodeError

RemoteValue = Union[bool, int, float, str, Sequence[str], Mapping[str, Any]]

T = TypeVar("T")


def decode_bool(value: RemoteValue, field: str = "") -> bool:
    """Normalize a wire boolean to True/False."""
    match value:
        case bool():
            return value
        case int():
            # dbus.Boolean subclasses int, not bool
            return value != 0
        case _:
            raise DecodeError(field, "boolean", value)


def decode_int(value: RemoteValue, field: str = "") -> int:
    match value:
        case bool():
            raise DecodeError(field, "integer", value)
        case int():
            return int(value)
        case _:
            raise DecodeError(field, "integer", value)


def decode_float(value: RemoteValue, field: str = "") -> float:
    match value:
        case bool():
            raise DecodeError(field, "double", value)
        case int() | float():
            return float(value)
        case _:
            raise DecodeError(field, "double", value)


def decode_str(value: RemoteValue, field: str = "") -> str:
    """Decode a string or object path."""
    match value:
        case str():
            return str(value)
        case _:
            raise DecodeError(field, "string", value)


def decode_str_list(value: RemoteValue, field: str = "") -> list[str]:
    """Decode an array of strings.

    A bare string is promoted to a one-element list. Some players send
    xesam:artist and friends as a plain string even though the field is
    defined as a list.
    """
    match value:
        case str():
            return [str(value)]
        case [*items] if all(isinstance(item, str) for item in items):
            return [str(item) for item in items]
        case _:
            raise DecodeError(field, "string or array of strings", value)


def decode_dict(value: RemoteValue, field: str = "") -> dict[str, Any]:
    match value:
        case {**entries}:
            return {str(key): item for key, item in entries.items()}
        case _:
            raise DecodeError(field, "dictionary", value)


class Field(NamedTuple):
    """Destination of one wire key: model attribute plus its decoder."""

    attribute: str
    decoder: Callable[[RemoteValue, str], Any]


def decode_properties(
    target: T, properties: Mapping[str, RemoteValue], fields: Mapping[str, Field]
) -> T:
    """Apply a remote property dictionary to target in a single pass.

    Unknown keys are ignored. A value with the wrong shape leaves its field
    untouched and decoding carries on with the remaining keys.

    Args:
        target: Model instance to populate (mutated in place)
        properties: Remote key/value dictionary
        fields: Static table mapping wire key names to fields

    Returns:
        The populated target
    """
    for key, value in properties.items():
        entry = fields.get(str(key))
        if entry is None:
            continue
        try:
            setattr(target, entry.attribute, entry.decoder(value, str(key)))
        except DecodeError as e:
            logger.debug(f"Skipping property: {e}")
    return target
