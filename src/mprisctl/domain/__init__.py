"""MPRIS domain - typed player models and command gating.

This domain handles:
- Decoding player property dictionaries into typed models
- Player selection and switching (Mpris)
- Playback commands (Player) and queue edits (TrackList)
"""

from .exceptions import (
    DecodeError,
    MprisError,
    NoPlayersFoundError,
    RemoteCallError,
    TransportError,
)
from .metadata import Metadata, decode_metadata, format_metadata
from .player import Player, PlayerProperties
from .root import Mpris, RootProperties, find_players
from .track_list import TrackList, TrackListProperties

__all__ = [
    # Exceptions
    "DecodeError",
    "MprisError",
    "NoPlayersFoundError",
    "RemoteCallError",
    "TransportError",
    # Metadata
    "Metadata",
    "decode_metadata",
    "format_metadata",
    # Models
    "Mpris",
    "Player",
    "PlayerProperties",
    "RootProperties",
    "TrackList",
    "TrackListProperties",
    "find_players",
]
