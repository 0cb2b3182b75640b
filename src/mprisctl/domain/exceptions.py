"""MPRIS-specific exceptions for error handling."""

from typing import Optional


class MprisError(Exception):
    """Base exception for MPRIS operations."""

    pass


class TransportError(MprisError):
    """Raised when the session bus is unreachable or misconfigured."""

    pass


class NoPlayersFoundError(MprisError):
    """Raised when no MPRIS player is registered on the bus."""

    def __init__(self, message: str = "No MPRIS players found"):
        super().__init__(message)


class RemoteCallError(MprisError):
    """Raised when a method call or property access on a player fails.

    Carries the message reported by the bus and, when available, the
    D-Bus error name (e.g. org.freedesktop.DBus.Error.ServiceUnknown).
    """

    def __init__(self, message: str, name: Optional[str] = None):
        self.message = message
        self.name = name
        super().__init__(message)


class DecodeError(MprisError):
    """Raised when a single property does not have the expected wire shape."""

    def __init__(self, field: str, expected: str, value: object = None):
        self.field = field
        self.expected = expected
        self.value = value
        super().__init__(
            f"Cannot decode '{field}': expected {expected}, got {type(value).__name__}"
        )
