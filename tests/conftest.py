import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from sio_gui.modules.net.connector.interfaces.connector_base import BaseConnector
from sio_gui.modules.session.events import (
    STATUS_CLOSED,
    STATUS_CONNECTED,
    STATUS_DISCONNECTED,
)


class FakeConnector(BaseConnector):
    """In-memory transport; tests play the peer through the peer_* helpers."""

    def __init__(self, channel_name="fake"):
        super().__init__(channel_name)
        self.connect_calls = []
        self.disconnect_calls = 0
        self.emitted = []
        self.closed = False
        self._connected = False
        self._sid = None

    # --- BaseConnector -------------------------------------------------
    def connect(self, target):
        self.connect_calls.append(target)

    def disconnect(self):
        self.disconnect_calls += 1
        self._connected = False
        self._sid = None
        self._emit_status(STATUS_DISCONNECTED)

    def emit(self, event_name, *args):
        self.emitted.append((event_name, args))

    def close(self):
        self.closed = True
        self._connected = False
        self._emit_status(STATUS_CLOSED)

    @property
    def connected(self):
        return self._connected

    @property
    def sid(self):
        return self._sid

    # --- peer side -----------------------------------------------------
    def peer_accept(self, sid="abc123"):
        self._connected = True
        self._sid = sid
        self._emit_status(STATUS_CONNECTED, sid=sid)

    def peer_drop(self):
        self._connected = False
        self._sid = None
        self._emit_status(STATUS_DISCONNECTED)

    def peer_event(self, event_name, *args):
        self._emit_inbound(event_name, args)


class ConnectorFactory:
    """Hands out a new FakeConnector per session and remembers all of them."""

    def __init__(self):
        self.created = []

    def __call__(self):
        connector = FakeConnector(channel_name=f"fake-{len(self.created)}")
        self.created.append(connector)
        return connector

    @property
    def current(self):
        return self.created[-1]


class QueuedDispatch:
    """Collects dispatched callbacks so a test decides when they run."""

    def __init__(self):
        self.pending = []

    def __call__(self, fn):
        self.pending.append(fn)

    def flush(self):
        while self.pending:
            self.pending.pop(0)()


@pytest.fixture
def connector_factory():
    return ConnectorFactory()


@pytest.fixture
def queued_dispatch():
    return QueuedDispatch()
