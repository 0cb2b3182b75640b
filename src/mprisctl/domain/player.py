"""
Player model for the org.mpris.MediaPlayer2.Player interface.

Holds a typed snapshot of the player's properties and issues playback
commands. Every command checks the matching capability flag first and does
nothing when the player says the command is unavailable, so no call the
player would reject is ever sent.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Optional

from loguru import logger

from mprisctl.bus.constants import LOOP_STATUSES, PLAYER_INTERFACE
from mprisctl.bus.protocol import ChannelProtocol

from .metadata import Metadata, decode_metadata
from .properties import format_properties, property_values
from .variant import Field, decode_bool, decode_float, decode_int, decode_properties, decode_str


@dataclass
class PlayerProperties:
    """Properties of one player, all defaults until fetched."""

    playback_status: str = ""
    loop_status: str = ""
    volume: float = 0.0  # Not clamped on read
    position: int = 0  # Microseconds
    shuffle: bool = False
    rate: float = 0.0
    minimum_rate: float = 0.0
    maximum_rate: float = 0.0

    can_go_next: bool = False
    can_go_previous: bool = False
    can_play: bool = False
    can_pause: bool = False
    can_seek: bool = False
    can_control: bool = False

    metadata: Metadata = field(default_factory=Metadata)


PLAYER_FIELDS: dict[str, Field] = {
    "PlaybackStatus": Field("playback_status", decode_str),
    "LoopStatus": Field("loop_status", decode_str),
    "Volume": Field("volume", decode_float),
    "Position": Field("position", decode_int),
    "Shuffle": Field("shuffle", decode_bool),
    "Rate": Field("rate", decode_float),
    "MinimumRate": Field("minimum_rate", decode_float),
    "MaximumRate": Field("maximum_rate", decode_float),
    "CanGoNext": Field("can_go_next", decode_bool),
    "CanGoPrevious": Field("can_go_previous", decode_bool),
    "CanPlay": Field("can_play", decode_bool),
    "CanPause": Field("can_pause", decode_bool),
    "CanSeek": Field("can_seek", decode_bool),
    "CanControl": Field("can_control", decode_bool),
}

_DECODE_FIELDS: dict[str, Field] = {
    **PLAYER_FIELDS,
    "Metadata": Field("metadata", decode_metadata),
}


def clamp(value: float, lower: float, upper: float) -> float:
    return float(min(max(value, lower), upper))


def to_percent(value: float) -> int:
    """Whole percent, halves rounded away from zero."""
    return int(math.copysign(math.floor(abs(value) * 100 + 0.5), value))


class Player:
    """One MPRIS player, bound to a bus name.

    The channel is borrowed from the owner (see Mpris) and never closed here.
    Properties are fetched on construction and on set_name(); commands do
    not refresh them except where noted.
    """

    def __init__(self, channel: ChannelProtocol, name: str):
        self._channel = channel
        self._name = name
        self.properties = PlayerProperties()
        self.refresh()

    @property
    def name(self) -> str:
        return self._name

    def set_name(self, name: str) -> None:
        """Rebind to another player and fetch its properties."""
        self._name = name
        self.refresh()

    def refresh(self) -> None:
        """Reset all properties, then fetch them from the player.

        If the fetch fails the properties stay at their defaults; the
        previous player's values are never kept.
        """
        self.properties = PlayerProperties()
        remote = self._channel.get_all(self._name, PLAYER_INTERFACE)
        decode_properties(self.properties, remote, _DECODE_FIELDS)
        logger.debug(
            f"Fetched player properties for {self._name}: "
            f"status={self.properties.playback_status!r}"
        )

    def _call(self, method: str, *args: Any, signature: Optional[str] = None) -> None:
        self._channel.call(self._name, PLAYER_INTERFACE, method, *args, signature=signature)

    def _skip(self, command: str, capability: str) -> bool:
        logger.debug(f"Skipping {command} on {self._name}: {capability} is false")
        return False

    def next(self) -> bool:
        """Skip to the next track.

        Returns:
            True if the call was sent, False if the player can't go next
        """
        if not self.properties.can_go_next:
            return self._skip("Next", "CanGoNext")
        self._call("Next")
        return True

    def previous(self) -> bool:
        if not self.properties.can_go_previous:
            return self._skip("Previous", "CanGoPrevious")
        self._call("Previous")
        return True

    def pause(self) -> bool:
        if not self.properties.can_pause:
            return self._skip("Pause", "CanPause")
        self._call("Pause")
        return True

    def play(self) -> bool:
        if not self.properties.can_play:
            return self._skip("Play", "CanPlay")
        self._call("Play")
        return True

    def play_pause(self) -> bool:
        if not self.properties.can_pause:
            return self._skip("PlayPause", "CanPause")
        self._call("PlayPause")
        return True

    def stop(self) -> bool:
        if not self.properties.can_control:
            return self._skip("Stop", "CanControl")
        self._call("Stop")
        return True

    def seek(self, offset: int) -> bool:
        """Seek relative to the current position.

        Args:
            offset: Microseconds, negative to seek backwards
        """
        if not self.properties.can_seek:
            return self._skip("Seek", "CanSeek")
        self._call("Seek", int(offset), signature="x")
        return True

    def set_position(self, position: int) -> bool:
        """Jump to an absolute position in the current track.

        The cached track id is sent along with the position. If the track
        changed since the last refresh, the player ignores the request, so
        callers should refresh() first when that matters.

        Args:
            position: Microseconds from the start of the track
        """
        if not self.properties.can_seek:
            return self._skip("SetPosition", "CanSeek")
        track_id = self.properties.metadata.track_id
        if not track_id:
            logger.debug(f"Skipping SetPosition on {self._name}: no current track id")
            return False
        self._call("SetPosition", track_id, int(position), signature="ox")
        return True

    def open_uri(self, uri: str) -> bool:
        if not self.properties.can_control:
            return self._skip("OpenUri", "CanControl")
        self._call("OpenUri", uri, signature="s")
        return True

    def get_volume(self) -> float:
        """Last known volume; no call is made."""
        return self.properties.volume

    def set_volume(self, volume: float) -> bool:
        """Set the volume, clamped to 0.0 - 1.0.

        The cached volume is updated to the value sent without reading it
        back, so any rounding the player applies is not reflected until the
        next refresh.
        """
        if not self.properties.can_control:
            return self._skip("Volume", "CanControl")
        volume = clamp(volume, 0.0, 1.0)
        self._channel.set_property(self._name, PLAYER_INTERFACE, "Volume", volume)
        self.properties.volume = volume
        return True

    def adjust_volume(self, delta: float) -> bool:
        """Change the volume by delta, in whole percent steps."""
        percent = to_percent(self.get_volume()) + to_percent(delta)
        percent = min(max(percent, 0), 100)
        return self.set_volume(percent / 100)

    def set_shuffle(self, enabled: bool) -> bool:
        if not self.properties.can_control:
            return self._skip("Shuffle", "CanControl")
        self._channel.set_property(self._name, PLAYER_INTERFACE, "Shuffle", bool(enabled))
        self.properties.shuffle = bool(enabled)
        return True

    def set_loop_status(self, status: str) -> bool:
        """Set the loop status to one of None, Track or Playlist.

        Raises:
            ValueError: If status is not a valid loop status
        """
        if status not in LOOP_STATUSES:
            raise ValueError(
                f"Invalid loop status: {status!r}. Valid values are: {', '.join(LOOP_STATUSES)}"
            )
        if not self.properties.can_control:
            return self._skip("LoopStatus", "CanControl")
        self._channel.set_property(self._name, PLAYER_INTERFACE, "LoopStatus", status)
        self.properties.loop_status = status
        return True

    def set_rate(self, rate: float) -> bool:
        """Set the playback rate.

        The rate is clamped into [MinimumRate, MaximumRate] when the player
        advertises a usable range.
        """
        if not self.properties.can_control:
            return self._skip("Rate", "CanControl")
        lower = self.properties.minimum_rate
        upper = self.properties.maximum_rate
        rate = clamp(rate, lower, upper) if 0 < lower <= upper else float(rate)
        self._channel.set_property(self._name, PLAYER_INTERFACE, "Rate", rate)
        self.properties.rate = rate
        return True

    def get_metadata(self) -> Metadata:
        return self.properties.metadata

    def format_properties(self, field: Optional[str] = None) -> list[str]:
        return format_properties(property_values(self.properties, PLAYER_FIELDS), field)
