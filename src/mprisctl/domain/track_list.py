"""
TrackList model for the org.mpris.MediaPlayer2.TrackList interface.

Queue edits are only sent when the player allows editing and every track id
involved is present in the local copy of the list.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from loguru import logger

from mprisctl.bus.constants import NO_TRACK, TRACK_LIST_INTERFACE
from mprisctl.bus.protocol import ChannelProtocol

from .exceptions import DecodeError
from .metadata import Metadata, decode_metadata
from .properties import format_properties, property_values
from .variant import Field, decode_bool, decode_properties, decode_str_list


@dataclass
class TrackListProperties:
    tracks: list[str] = field(default_factory=list)  # Track ids, remote order
    can_edit_tracks: bool = False


TRACK_LIST_FIELDS: dict[str, Field] = {
    "Tracks": Field("tracks", decode_str_list),
    "CanEditTracks": Field("can_edit_tracks", decode_bool),
}


class TrackList:
    """Track list of one player, bound to a bus name.

    Like Player, it borrows the channel and fetches its properties on
    construction and on set_name().
    """

    def __init__(self, channel: ChannelProtocol, name: str):
        self._channel = channel
        self._name = name
        self.properties = TrackListProperties()
        self.refresh()

    @property
    def name(self) -> str:
        return self._name

    @property
    def tracks(self) -> list[str]:
        return self.properties.tracks

    def set_name(self, name: str) -> None:
        self._name = name
        self.refresh()

    def refresh(self) -> None:
        """Reset, then fetch the track list from the player."""
        self.properties = TrackListProperties()
        remote = self._channel.get_all(self._name, TRACK_LIST_INTERFACE)
        decode_properties(self.properties, remote, TRACK_LIST_FIELDS)
        logger.debug(f"Fetched {len(self.properties.tracks)} tracks for {self._name}")

    def _editable(self, command: str, track_id: Optional[str]) -> bool:
        if not self.properties.can_edit_tracks:
            logger.debug(f"Skipping {command} on {self._name}: CanEditTracks is false")
            return False
        if track_id is not None and track_id not in self.properties.tracks:
            logger.debug(f"Skipping {command} on {self._name}: unknown track {track_id}")
            return False
        return True

    def add_track(
        self, uri: str, after_track_id: str = NO_TRACK, set_as_current: bool = False
    ) -> bool:
        """Insert a track after after_track_id (or first, with NO_TRACK).

        The list is fetched again afterwards since where the new track
        lands is up to the player.

        Returns:
            True if the call was sent
        """
        anchor = None if after_track_id == NO_TRACK else after_track_id
        if not self._editable("AddTrack", anchor):
            return False

        self._channel.call(
            self._name,
            TRACK_LIST_INTERFACE,
            "AddTrack",
            uri,
            after_track_id,
            bool(set_as_current),
            signature="sob",
        )
        self.refresh()
        return True

    def remove_track(self, track_id: str) -> bool:
        """Remove a track.

        The local list is updated in place (first occurrence only) rather
        than fetched again.
        """
        if not self._editable("RemoveTrack", track_id):
            return False
        self._channel.call(
            self._name, TRACK_LIST_INTERFACE, "RemoveTrack", track_id, signature="o"
        )
        self.properties.tracks.remove(track_id)
        return True

    def go_to(self, track_id: str) -> bool:
        if not self._editable("GoTo", track_id):
            return False
        self._channel.call(self._name, TRACK_LIST_INTERFACE, "GoTo", track_id, signature="o")
        return True

    def get_metadata(self, track_ids: Iterable[str]) -> list[Metadata]:
        """Fetch metadata for the given tracks in one call.

        Ids not in the local list are dropped. Results come back in the
        order the player returns them, which need not match track_ids.
        """
        known = [track_id for track_id in track_ids if track_id in self.properties.tracks]
        if not known:
            return []

        reply = self._channel.call(
            self._name,
            TRACK_LIST_INTERFACE,
            "GetTracksMetadata",
            known,
            signature="ao",
        )

        result = []
        for entry in reply:
            try:
                result.append(decode_metadata(entry))
            except DecodeError as e:
                logger.debug(f"Skipping track metadata entry: {e}")
        return result

    def format_properties(self, field: Optional[str] = None) -> list[str]:
        return format_properties(
            property_values(self.properties, TRACK_LIST_FIELDS), field
        )
