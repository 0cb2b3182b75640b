"""Interface the models use to talk to players over the bus."""

from typing import Any, Optional, Protocol

from .constants import MPRIS_PATH


class ChannelProtocol(Protocol):
    """Synchronous RPC channel to the session bus.

    Every call blocks until the reply arrives. Failures are raised as
    RemoteCallError.
    """

    def list_names(self) -> list[str]: ...

    def call(
        self,
        target: str,
        interface: str,
        method: str,
        *args: Any,
        signature: Optional[str] = None,
        path: str = MPRIS_PATH,
    ) -> Any: ...

    def get_all(self, target: str, interface: str) -> dict[str, Any]: ...

    def set_property(self, target: str, interface: str, name: str, value: Any) -> None: ...

    def close(self) -> None: ...
