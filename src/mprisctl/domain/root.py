"""
Root aggregator for the org.mpris.MediaPlayer2 interface.

Mpris enumerates the players on the bus once, keeps one of them selected,
and owns the Player (and, when the player has one, the TrackList) for that
selection. Switching players rebinds those models instead of rebuilding the
whole aggregator.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from loguru import logger

from mprisctl.bus.constants import MPRIS_PREFIX, ROOT_INTERFACE
from mprisctl.bus.protocol import ChannelProtocol

from .exceptions import NoPlayersFoundError
from .player import Player
from .properties import format_properties, property_values
from .track_list import TrackList
from .variant import Field, decode_bool, decode_properties, decode_str, decode_str_list


@dataclass
class RootProperties:
    identity: str = ""
    desktop_entry: str = ""
    fullscreen: bool = False
    has_track_list: bool = False
    supported_uri_schemes: list[str] = field(default_factory=list)
    supported_mime_types: list[str] = field(default_factory=list)
    can_set_fullscreen: bool = False
    can_quit: bool = False
    can_raise: bool = False


ROOT_FIELDS: dict[str, Field] = {
    "Identity": Field("identity", decode_str),
    "DesktopEntry": Field("desktop_entry", decode_str),
    "Fullscreen": Field("fullscreen", decode_bool),
    "HasTrackList": Field("has_track_list", decode_bool),
    "SupportedUriSchemes": Field("supported_uri_schemes", decode_str_list),
    "SupportedMimeTypes": Field("supported_mime_types", decode_str_list),
    "CanSetFullscreen": Field("can_set_fullscreen", decode_bool),
    "CanQuit": Field("can_quit", decode_bool),
    "CanRaise": Field("can_raise", decode_bool),
}


def find_players(channel: ChannelProtocol) -> list[str]:
    """List MPRIS player names on the bus, sorted."""
    return sorted(name for name in channel.list_names() if name.startswith(MPRIS_PREFIX))


class Mpris:
    """Selected-player state machine over a snapshot of the bus.

    The player list is taken once, at construction. Players that appear or
    vanish afterwards are not noticed.

    Mpris owns the channel it is given and closes it in close(); Player and
    TrackList only borrow it.
    """

    def __init__(self, channel: ChannelProtocol, player_name: str = ""):
        """Enumerate players and select one.

        Args:
            channel: Bus channel, owned from here on
            player_name: Player to select; falls back to the first player
                when empty or no longer on the bus

        Raises:
            NoPlayersFoundError: If no player is registered
        """
        self._channel = channel
        self._closed = False
        self._players: list[str] = []
        self.current_index = 0
        self.properties = RootProperties()
        self._track_list: Optional[TrackList] = None
        try:
            self._load(player_name)
        except Exception:
            self.close()
            raise

    def _load(self, player_name: str) -> None:
        self._players = find_players(self._channel)
        if not self._players:
            raise NoPlayersFoundError()

        if player_name in self._players:
            self.current_index = self._players.index(player_name)
        elif player_name:
            logger.info(f"Player {player_name} not found, using {self._players[0]}")

        self._player = Player(self._channel, self.current_name)
        self._fetch_properties()
        self._sync_track_list()

    def __enter__(self) -> "Mpris":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def players(self) -> list[str]:
        return list(self._players)

    @property
    def current_name(self) -> str:
        return self._players[self.current_index]

    @property
    def player(self) -> Player:
        return self._player

    @property
    def track_list(self) -> Optional[TrackList]:
        """Track list of the selected player, None if it has none."""
        return self._track_list

    def next(self) -> None:
        """Select the next player, wrapping around."""
        self.current_index = (self.current_index + 1) % len(self._players)
        self.reload()

    def previous(self) -> None:
        self.current_index = (self.current_index - 1) % len(self._players)
        self.reload()

    def set_player(self, name: str) -> bool:
        """Select a player by bus name.

        Returns:
            False if the name is not in the player list (nothing changes)
        """
        if name not in self._players:
            logger.debug(f"Player {name} not found, keeping {self.current_name}")
            return False
        self.current_index = self._players.index(name)
        self.reload()
        return True

    def reload(self) -> None:
        """Re-fetch everything for the currently selected player.

        On failure the track list is dropped along with the root
        properties, so nothing of the previous player survives.
        """
        name = self.current_name
        logger.debug(f"Loading player {name}")
        self.properties = RootProperties()
        try:
            self._player.set_name(name)
            self._fetch_properties()
            self._sync_track_list()
        except Exception:
            self._track_list = None
            raise

    def _fetch_properties(self) -> None:
        remote = self._channel.get_all(self.current_name, ROOT_INTERFACE)
        decode_properties(self.properties, remote, ROOT_FIELDS)

    def _sync_track_list(self) -> None:
        if not self.properties.has_track_list:
            self._track_list = None
        elif self._track_list is None:
            self._track_list = TrackList(self._channel, self.current_name)
        else:
            self._track_list.set_name(self.current_name)

    def _call(self, method: str) -> None:
        self._channel.call(self.current_name, ROOT_INTERFACE, method)

    def raise_(self) -> bool:
        """Bring the player's window to the front."""
        if not self.properties.can_raise:
            logger.debug(f"Skipping Raise on {self.current_name}: CanRaise is false")
            return False
        self._call("Raise")
        return True

    def quit(self) -> bool:
        if not self.properties.can_quit:
            logger.debug(f"Skipping Quit on {self.current_name}: CanQuit is false")
            return False
        self._call("Quit")
        return True

    def set_fullscreen(self, enabled: bool) -> bool:
        if not self.properties.can_set_fullscreen:
            logger.debug(
                f"Skipping Fullscreen on {self.current_name}: CanSetFullscreen is false"
            )
            return False
        self._channel.set_property(
            self.current_name, ROOT_INTERFACE, "Fullscreen", bool(enabled)
        )
        self.properties.fullscreen = bool(enabled)
        return True

    def format_properties(self, field: Optional[str] = None) -> list[str]:
        values = property_values(self.properties, ROOT_FIELDS)
        values["Player"] = self.current_name
        values["Players"] = self.players
        return format_properties(values, field)

    def close(self) -> None:
        """Release the bus channel. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._channel.close()
