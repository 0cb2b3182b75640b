"""Shared fixtures: an in-memory bus channel with two canned players."""

from typing import Any, NamedTuple, Optional

import pytest

from mprisctl.bus.constants import (
    MPRIS_PATH,
    PLAYER_INTERFACE,
    ROOT_INTERFACE,
    TRACK_LIST_INTERFACE,
)
from mprisctl.domain.exceptions import RemoteCallError

MPV = "org.mpris.MediaPlayer2.mpv"
VLC = "org.mpris.MediaPlayer2.vlc"


class Call(NamedTuple):
    target: str
    interface: str
    method: str
    args: tuple
    signature: Optional[str]


class FakeChannel:
    """Records every call and serves canned property dictionaries.

    Property dictionaries are keyed by (bus name, interface). Replies to
    method calls are keyed by method name.
    """

    def __init__(self) -> None:
        self.names: list[str] = []
        self.properties: dict[tuple[str, str], dict[str, Any]] = {}
        self.replies: dict[str, Any] = {}
        self.errors: dict[str, Exception] = {}
        self.failing: set[tuple[str, str]] = set()
        self.calls: list[Call] = []
        self.fetches: list[tuple[str, str]] = []
        self.writes: list[tuple[str, str, str, Any]] = []
        self.close_count = 0

    def add_player(
        self,
        name: str,
        root: Optional[dict[str, Any]] = None,
        player: Optional[dict[str, Any]] = None,
        track_list: Optional[dict[str, Any]] = None,
    ) -> None:
        self.names.append(name)
        self.properties[(name, ROOT_INTERFACE)] = root or {}
        self.properties[(name, PLAYER_INTERFACE)] = player or {}
        if track_list is not None:
            self.properties[(name, TRACK_LIST_INTERFACE)] = track_list

    def list_names(self) -> list[str]:
        return list(self.names)

    def call(
        self,
        target: str,
        interface: str,
        method: str,
        *args: Any,
        signature: Optional[str] = None,
        path: str = MPRIS_PATH,
    ) -> Any:
        self.calls.append(Call(target, interface, method, args, signature))
        if method in self.errors:
            raise self.errors[method]
        return self.replies.get(method)

    def get_all(self, target: str, interface: str) -> dict[str, Any]:
        self.fetches.append((target, interface))
        if (target, interface) in self.failing:
            raise RemoteCallError(
                "The name is not activatable",
                name="org.freedesktop.DBus.Error.ServiceUnknown",
            )
        return dict(self.properties.get((target, interface), {}))

    def set_property(self, target: str, interface: str, name: str, value: Any) -> None:
        self.writes.append((target, interface, name, value))

    def close(self) -> None:
        self.close_count += 1

    def methods(self) -> list[str]:
        return [call.method for call in self.calls]


def make_player_properties(**overrides: Any) -> dict[str, Any]:
    """Player interface dictionary for a fully capable, playing player."""
    properties = {
        "PlaybackStatus": "Playing",
        "LoopStatus": "None",
        "Volume": 0.5,
        "Position": 1_000_000,
        "Shuffle": False,
        "Rate": 1.0,
        "MinimumRate": 0.5,
        "MaximumRate": 2.0,
        "CanGoNext": True,
        "CanGoPrevious": True,
        "CanPlay": True,
        "CanPause": True,
        "CanSeek": True,
        "CanControl": True,
        "Metadata": {
            "mpris:trackid": "/org/mpv/track/1",
            "mpris:length": 240_000_000,
            "xesam:title": "Song",
            "xesam:artist": ["Artist"],
        },
    }
    properties.update(overrides)
    return properties


@pytest.fixture
def fake_channel() -> FakeChannel:
    """Channel with no players registered."""
    return FakeChannel()


@pytest.fixture
def channel() -> FakeChannel:
    """Channel with mpv (no track list) and vlc (editable track list)."""
    channel = FakeChannel()
    channel.names.append("org.freedesktop.Notifications")
    channel.add_player(
        VLC,
        root={
            "Identity": "VLC media player",
            "DesktopEntry": "vlc",
            "HasTrackList": True,
            "CanQuit": True,
            "CanRaise": True,
            "CanSetFullscreen": True,
            "Fullscreen": False,
            "SupportedUriSchemes": ["file", "http"],
        },
        player=make_player_properties(
            Volume=0.8,
            Metadata={"mpris:trackid": "/org/vlc/track/2", "xesam:title": "Other"},
        ),
        track_list={
            "Tracks": ["/org/vlc/track/1", "/org/vlc/track/2", "/org/vlc/track/3"],
            "CanEditTracks": True,
        },
    )
    channel.add_player(
        MPV,
        root={
            "Identity": "mpv",
            "HasTrackList": False,
            "CanQuit": True,
            "CanRaise": False,
        },
        player=make_player_properties(),
    )
    return channel


@pytest.fixture
def player_properties():
    """Factory for player interface dictionaries (see make_player_properties)."""
    return make_player_properties
