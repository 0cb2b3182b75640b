"""Tests for the dbus-python backed channel."""

from unittest.mock import MagicMock

import pytest

dbus = pytest.importorskip("dbus")

from dbus.exceptions import DBusException  # noqa: E402

from mprisctl.bus import channel as channel_module  # noqa: E402
from mprisctl.bus.channel import BusChannel  # noqa: E402
from mprisctl.bus.constants import (  # noqa: E402
    MPRIS_PATH,
    PLAYER_INTERFACE,
    PROPERTIES_INTERFACE,
)
from mprisctl.domain.exceptions import RemoteCallError, TransportError  # noqa: E402

VLC = "org.mpris.MediaPlayer2.vlc"


@pytest.fixture
def bus() -> MagicMock:
    return MagicMock()


@pytest.fixture
def method(bus: MagicMock) -> MagicMock:
    """The bound method proxy every call ends up in."""
    return bus.get_object.return_value.get_dbus_method.return_value


class TestCall:
    """Tests for BusChannel.call."""

    def test_call(self, bus: MagicMock, method: MagicMock) -> None:
        method.return_value = "reply"
        result = BusChannel(bus).call(VLC, PLAYER_INTERFACE, "Seek", 10, signature="x")

        assert result == "reply"
        bus.get_object.assert_called_once_with(VLC, MPRIS_PATH, introspect=False)
        bus.get_object.return_value.get_dbus_method.assert_called_once_with(
            "Seek", dbus_interface=PLAYER_INTERFACE
        )
        method.assert_called_once_with(10, signature="x")

    def test_remote_error(self, bus: MagicMock, method: MagicMock) -> None:
        method.side_effect = DBusException(
            "No such player", name="org.freedesktop.DBus.Error.ServiceUnknown"
        )
        with pytest.raises(RemoteCallError) as exc_info:
            BusChannel(bus).call(VLC, PLAYER_INTERFACE, "Play")
        assert exc_info.value.message == "No such player"
        assert exc_info.value.name == "org.freedesktop.DBus.Error.ServiceUnknown"


class TestProperties:
    """Tests for GetAll and Set."""

    def test_get_all(self, bus: MagicMock, method: MagicMock) -> None:
        method.return_value = dbus.Dictionary(
            {dbus.String("Volume"): dbus.Double(0.5)}, signature="sv"
        )
        result = BusChannel(bus).get_all(VLC, PLAYER_INTERFACE)

        assert result == {"Volume": 0.5}
        bus.get_object.return_value.get_dbus_method.assert_called_once_with(
            "GetAll", dbus_interface=PROPERTIES_INTERFACE
        )
        method.assert_called_once_with(PLAYER_INTERFACE, signature="s")

    def test_set_property(self, bus: MagicMock, method: MagicMock) -> None:
        BusChannel(bus).set_property(VLC, PLAYER_INTERFACE, "Volume", 0.3)
        method.assert_called_once_with(PLAYER_INTERFACE, "Volume", 0.3, signature="ssv")


class TestConnection:
    """Tests for connecting, listing names and closing."""

    def test_list_names(self, bus: MagicMock) -> None:
        bus.list_names.return_value = [dbus.String(VLC), dbus.String(":1.7")]
        assert BusChannel(bus).list_names() == [VLC, ":1.7"]

    def test_list_names_failure(self, bus: MagicMock) -> None:
        bus.list_names.side_effect = DBusException("Disconnected")
        with pytest.raises(TransportError):
            BusChannel(bus).list_names()

    def test_session_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        session_bus = MagicMock(side_effect=DBusException("No session bus"))
        monkeypatch.setattr(channel_module.dbus, "SessionBus", session_bus)
        with pytest.raises(TransportError, match="No session bus"):
            BusChannel.session()

    def test_session_is_private(self, monkeypatch: pytest.MonkeyPatch) -> None:
        session_bus = MagicMock()
        monkeypatch.setattr(channel_module.dbus, "SessionBus", session_bus)
        BusChannel.session()
        session_bus.assert_called_once_with(private=True)

    def test_close_once(self, bus: MagicMock) -> None:
        channel = BusChannel(bus)
        channel.close()
        channel.close()
        bus.close.assert_called_once_with()
