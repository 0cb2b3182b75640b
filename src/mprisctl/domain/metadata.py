"""
Track metadata model.

Decodes the a{sv} Metadata dictionary of the MPRIS Player interface (and
each entry returned by TrackList.GetTracksMetadata) into a typed Metadata.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from .properties import format_properties, property_values
from .variant import (
    Field,
    RemoteValue,
    decode_dict,
    decode_float,
    decode_int,
    decode_properties,
    decode_str,
    decode_str_list,
)


@dataclass
class Metadata:
    """Metadata of one track.

    Every decode starts from a fresh instance, so fields missing from the
    remote dictionary always hold these defaults.
    """

    track_id: str = ""  # Object path, empty when unset
    length_microseconds: int = 0
    art_url: str = ""

    title: str = ""
    album: str = ""
    artist: list[str] = field(default_factory=list)
    album_artist: list[str] = field(default_factory=list)
    disc_number: int = 0
    track_number: int = 0

    url: str = ""
    genre: list[str] = field(default_factory=list)
    composer: list[str] = field(default_factory=list)
    lyricist: list[str] = field(default_factory=list)
    comment: list[str] = field(default_factory=list)
    as_text: str = ""

    content_created: str = ""  # ISO 8601, kept opaque
    first_used: str = ""
    last_used: str = ""
    user_count: int = 0

    auto_rating: float = 0.0  # 0.0 - 1.0 by convention
    user_rating: float = 0.0

    audio_bpm: int = 0


METADATA_FIELDS: dict[str, Field] = {
    "mpris:trackid": Field("track_id", decode_str),
    "mpris:length": Field("length_microseconds", decode_int),
    "mpris:artUrl": Field("art_url", decode_str),
    "xesam:title": Field("title", decode_str),
    "xesam:album": Field("album", decode_str),
    "xesam:artist": Field("artist", decode_str_list),
    "xesam:albumArtist": Field("album_artist", decode_str_list),
    "xesam:discNumber": Field("disc_number", decode_int),
    "xesam:trackNumber": Field("track_number", decode_int),
    "xesam:url": Field("url", decode_str),
    "xesam:genre": Field("genre", decode_str_list),
    "xesam:composer": Field("composer", decode_str_list),
    "xesam:lyricist": Field("lyricist", decode_str_list),
    "xesam:comment": Field("comment", decode_str_list),
    "xesam:asText": Field("as_text", decode_str),
    "xesam:contentCreated": Field("content_created", decode_str),
    "xesam:firstUsed": Field("first_used", decode_str),
    "xesam:lastUsed": Field("last_used", decode_str),
    "xesam:userCount": Field("user_count", decode_int),
    "xesam:autoRating": Field("auto_rating", decode_float),
    "xesam:userRating": Field("user_rating", decode_float),
    "xesam:audioBPM": Field("audio_bpm", decode_int),
}

# MPRIS spells it useCount; players in the wild send either
METADATA_ALIASES: dict[str, str] = {
    "xesam:useCount": "xesam:userCount",
}

_DECODE_FIELDS: dict[str, Field] = {
    **METADATA_FIELDS,
    **{alias: METADATA_FIELDS[key] for alias, key in METADATA_ALIASES.items()},
}


def decode_metadata(value: RemoteValue, field: str = "Metadata") -> Metadata:
    """Decode a remote metadata dictionary into a new Metadata.

    Raises:
        DecodeError: If value is not a dictionary
    """
    entries = decode_dict(value, field)
    return decode_properties(Metadata(), entries, _DECODE_FIELDS)


def format_metadata(metadata: Metadata, name: Optional[str] = None) -> list[str]:
    """Render metadata for display, optionally a single field."""
    if name:
        name = METADATA_ALIASES.get(name, name)
    values: dict[str, Any] = property_values(metadata, METADATA_FIELDS)
    return format_properties(values, name)
