"""Session bus access.

The dbus-python backed BusChannel lives in mprisctl.bus.channel and is
imported on demand, so the models can be used without libdbus loaded.
"""

from .constants import (
    MPRIS_PATH,
    MPRIS_PREFIX,
    NO_TRACK,
    PLAYER_INTERFACE,
    ROOT_INTERFACE,
    TRACK_LIST_INTERFACE,
)
from .protocol import ChannelProtocol

__all__ = [
    "ChannelProtocol",
    "MPRIS_PATH",
    "MPRIS_PREFIX",
    "NO_TRACK",
    "PLAYER_INTERFACE",
    "ROOT_INTERFACE",
    "TRACK_LIST_INTERFACE",
]
