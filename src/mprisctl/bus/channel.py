"""
Session bus channel backed by dbus-python.

Thin synchronous wrapper: one blocking method call per operation, no main
loop, no signal handling. D-Bus errors are translated into the MPRIS
exception hierarchy at this boundary.
"""

from typing import Any, Optional

import dbus
from dbus.exceptions import DBusException
from loguru import logger

from mprisctl.domain.exceptions import RemoteCallError, TransportError

from .constants import MPRIS_PATH, PROPERTIES_INTERFACE


def _remote_error(error: DBusException) -> RemoteCallError:
    message = error.get_dbus_message() or str(error)
    return RemoteCallError(message, name=error.get_dbus_name())


class BusChannel:
    """RPC channel over a private session bus connection.

    The channel owns its connection; close() releases it and is safe to
    call more than once.
    """

    def __init__(self, bus: Any):
        self._bus = bus
        self._closed = False

    @classmethod
    def session(cls) -> "BusChannel":
        """Connect to the session bus.

        Raises:
            TransportError: If the session bus cannot be reached
        """
        try:
            bus = dbus.SessionBus(private=True)
        except DBusException as e:
            raise TransportError(e.get_dbus_message() or str(e)) from e
        logger.debug(f"Connected to session bus as {bus.get_unique_name()}")
        return cls(bus)

    def list_names(self) -> list[str]:
        """List every name currently registered on the bus."""
        try:
            names = self._bus.list_names()
        except DBusException as e:
            raise TransportError(e.get_dbus_message() or str(e)) from e
        return [str(name) for name in names]

    def call(
        self,
        target: str,
        interface: str,
        method: str,
        *args: Any,
        signature: Optional[str] = None,
        path: str = MPRIS_PATH,
    ) -> Any:
        """Call a method and block until it returns.

        Args:
            target: Bus name of the remote object
            interface: Interface the method belongs to
            method: Method name
            *args: Method arguments
            signature: D-Bus signature for args; needed for object paths and
                64-bit integers, which cannot be guessed from Python values
            path: Object path (the MPRIS path by default)

        Raises:
            RemoteCallError: If the call fails or the remote returns an error
        """
        logger.debug(f"Calling {interface}.{method} on {target} {args!r}")
        try:
            proxy = self._bus.get_object(target, path, introspect=False)
            method_proxy = proxy.get_dbus_method(method, dbus_interface=interface)
            return method_proxy(*args, signature=signature)
        except DBusException as e:
            raise _remote_error(e) from e

    def get_all(self, target: str, interface: str) -> dict[str, Any]:
        """Fetch all properties of an interface."""
        reply = self.call(target, PROPERTIES_INTERFACE, "GetAll", interface, signature="s")
        return {str(key): value for key, value in reply.items()}

    def set_property(self, target: str, interface: str, name: str, value: Any) -> None:
        """Write one property; the variant type is inferred from value."""
        self.call(target, PROPERTIES_INTERFACE, "Set", interface, name, value, signature="ssv")

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._bus.close()
        logger.debug("Closed session bus connection")
