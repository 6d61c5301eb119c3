"""
Test: SocketIOConnector wiring around a mocked socketio.Client.
"""

import threading
from unittest.mock import MagicMock

import pytest
from socketio.exceptions import BadNamespaceError, ConnectionError as SioConnectionError

from sio_gui.core.emit_gui_exception_log import EVT_GUI_EXCEPTION
from sio_gui.core.event_bus import gui_bus
from sio_gui.core.session_controller import SessionController
from sio_gui.modules.event_log.event_log import Origin
from sio_gui.modules.net.connector.sio.socketio_connector import SocketIOConnector
from sio_gui.modules.session.events import EVT_CHANNEL_STATUS, EVT_INBOUND_RAW


@pytest.fixture
def client():
    mock = MagicMock()
    mock.connected = False
    mock.get_sid.return_value = "abc123"
    return mock


@pytest.fixture
def connector(client):
    return SocketIOConnector(client=client, timeout=2)


def _handlers(client):
    return {c.args[0]: c.kwargs["handler"] for c in client.on.call_args_list}


def _record(connector):
    statuses, inbound = [], []
    connector.bus.on(EVT_CHANNEL_STATUS, lambda status, sid=None: statuses.append((status, sid)))
    connector.bus.on(EVT_INBOUND_RAW, lambda event_name, args: inbound.append((event_name, args)))
    return statuses, inbound


def _wait_for_connect(connector):
    connector._connect_thread.join(2)
    assert not connector._connect_thread.is_alive()


class TestWiring:

    def test_registers_lifecycle_and_catch_all_handlers(self, connector, client):
        assert set(_handlers(client)) == {"connect", "disconnect", "connect_error", "*"}

    def test_starts_disconnected(self, connector):
        assert connector.connected is False
        assert connector.sid is None
        assert connector.get_status() == "disconnected"


class TestConnect:

    def test_connect_runs_in_background(self, connector, client):
        connector.connect("ws://host:1")
        _wait_for_connect(connector)
        client.connect.assert_called_once_with("ws://host:1", wait_timeout=2)

    def test_failed_connect_reports_disconnected(self, connector, client):
        client.connect.side_effect = SioConnectionError("refused")
        statuses, _ = _record(connector)
        connector.connect("ws://host:1")
        _wait_for_connect(connector)
        assert statuses == [("disconnected", None)]

    def test_malformed_target_reports_disconnected(self, connector, client):
        client.connect.side_effect = ValueError("bad url")
        statuses, _ = _record(connector)
        reports = []
        gui_bus.on(EVT_GUI_EXCEPTION, reports.append)
        try:
            connector.connect("::::")
            _wait_for_connect(connector)
        finally:
            gui_bus.off(EVT_GUI_EXCEPTION, reports.append)
        assert statuses == [("disconnected", None)]
        assert reports and reports[0]["exception_type"] == "ValueError"

    def test_connect_when_already_connected_is_ignored(self, connector, client):
        client.connected = True
        connector.connect("ws://host:1")
        assert connector._connect_thread is None
        client.connect.assert_not_called()

    def test_second_connect_while_in_flight_is_ignored(self, connector, client):
        release = threading.Event()
        client.connect.side_effect = lambda *a, **kw: release.wait(2)
        connector.connect("ws://host:1")
        connector.connect("ws://host:1")
        release.set()
        _wait_for_connect(connector)
        assert client.connect.call_count == 1

    def test_on_connect_publishes_sid(self, connector, client):
        # python-socketio runs the connect handler before setting client.connected
        statuses, _ = _record(connector)
        assert client.connected is False
        _handlers(client)["connect"]()
        assert statuses == [("connected", "abc123")]
        client.get_sid.assert_called_with("/")

    def test_on_disconnect_accepts_reason(self, connector, client):
        statuses, _ = _record(connector)
        _handlers(client)["disconnect"]("transport close")
        _handlers(client)["disconnect"]()
        assert statuses == [("disconnected", None), ("disconnected", None)]


class TestInbound:

    def test_catch_all_republishes_every_event(self, connector, client):
        _, inbound = _record(connector)
        catch_all = _handlers(client)["*"]
        catch_all("ping")
        catch_all("data", {"a": 1}, [2, 3])
        catch_all("exception", "boom")
        assert inbound == [
            ("ping", []),
            ("data", [{"a": 1}, [2, 3]]),
            ("exception", ["boom"]),
        ]


class TestEmit:

    def test_emit_sends_args_as_tuple(self, connector, client):
        connector.emit("pong", {"n": 1})
        client.emit.assert_called_once_with("pong", ({"n": 1},))

    def test_emit_without_args(self, connector, client):
        connector.emit("tick")
        client.emit.assert_called_once_with("tick", ())

    def test_emit_when_not_connected_is_swallowed(self, connector, client):
        client.emit.side_effect = BadNamespaceError("/ is not a connected namespace.")
        connector.emit("pong", 1)


class TestDisconnectAndClose:

    def test_disconnect_reports_once(self, connector, client):
        statuses, _ = _record(connector)
        _handlers(client)["connect"]()
        client.connected = True
        connector.disconnect()
        client.disconnect.assert_called_once()
        assert statuses == [("connected", "abc123"), ("disconnected", None)]

    def test_close_is_final(self, connector, client):
        statuses, inbound = _record(connector)
        connector.close()
        connector.close()

        assert statuses == [("closed", None)]
        assert client.disconnect.call_count == 1

        handlers = _handlers(client)
        handlers["*"]("late")
        handlers["connect"]()
        assert inbound == []

        connector.connect("ws://host:1")
        client.connect.assert_not_called()

    def test_close_during_handshake_drops_the_link(self, connector, client):
        entered, release = threading.Event(), threading.Event()

        def slow_connect(*args, **kwargs):
            entered.set()
            release.wait(2)

        client.connect.side_effect = slow_connect
        connector.connect("ws://host:1")
        assert entered.wait(2)

        connector.close()
        release.set()
        _wait_for_connect(connector)

        assert client.disconnect.call_count == 2


class TestThroughController:
    """SessionController driving a real SocketIOConnector over a mocked client."""

    @pytest.fixture
    def controller(self, client):
        def handshake(target, **kwargs):
            # the library fires the connect handler before flipping client.connected
            _handlers(client)["connect"]()
            client.connected = True

        client.connect.side_effect = handshake
        controller = SessionController(connector_factory=lambda: SocketIOConnector(client=client, timeout=2))
        controller.change_target("ws://host:1")
        _wait_for_connect(controller.sessions._connector)
        return controller

    def test_connect_sets_peer_session_id(self, controller):
        assert controller.session.connected
        assert controller.session.peer_session_id == "abc123"

    def test_ping_pong(self, controller, client):
        _handlers(client)["*"]("ping", {"back": 1})
        controller.edit_event_name("pong")
        controller.edit_body_text('{"n":1}')
        controller.submit()

        client.emit.assert_called_once_with("pong", ({"n": 1},))
        assert [(e.event_name, e.args, e.origin) for e in controller.entries] == [
            ("ping", ({"back": 1},), Origin.PEER),
            ("pong", ({"n": 1},), Origin.OPERATOR),
        ]

    def test_reconnect_after_toggle_keeps_sid(self, controller, client):
        controller.toggle_connection()
        assert not controller.session.connected
        assert controller.session.peer_session_id is None

        client.connected = False
        client.get_sid.return_value = "def456"
        controller.toggle_connection()
        _wait_for_connect(controller.sessions._connector)
        assert controller.session.peer_session_id == "def456"
