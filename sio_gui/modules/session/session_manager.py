from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from sio_gui.core.event_bus import EventBus
from sio_gui.modules.session.events import (
    EVT_CHANNEL_STATUS,
    EVT_CONN_STATUS,
    EVT_INBOUND_MESSAGE,
    EVT_INBOUND_RAW,
    STATUS_CONNECTED,
)

log = logging.getLogger("session_manager")


class ConnectivityState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


@dataclass(frozen=True)
class SessionState:
    target: Optional[str] = None
    connectivity: ConnectivityState = ConnectivityState.DISCONNECTED
    peer_session_id: Optional[str] = None

    @property
    def connected(self) -> bool:
        return self.connectivity is ConnectivityState.CONNECTED


def _call_now(fn):
    fn()


def _default_connector_factory():
    from sio_gui.modules.net.connector.sio.socketio_connector import SocketIOConnector
    return SocketIOConnector()


class SessionManager:
    """
    Owns the one live connector and the connect/disconnect state machine.

    Connector callbacks arrive on transport threads; each one is handed to
    ``dispatch`` so state changes and inbound events are processed on the
    caller's thread, one at a time. Every attachment to a connector gets a
    generation number; callbacks from an older generation are dropped, so a
    superseded session can never feed events into the current one.

    Observers:
      - ``subscribe(handler)``   handler(event_name=..., args=[...])
      - ``on_status(handler)``   handler(state=SessionState)
    """

    def __init__(self, connector_factory: Callable = None, dispatch: Callable = None):
        self._connector_factory = connector_factory or _default_connector_factory
        self._dispatch = dispatch or _call_now
        self.bus = EventBus("session")

        self._connector = None
        self._bus_refs = []  # (event_name, proxy) bound on the current connector
        self._generation = 0

        self._state = SessionState()

    # ------------------------------------------------------------------
    # read side
    # ------------------------------------------------------------------
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def target(self) -> Optional[str]:
        return self._state.target

    @property
    def connected(self) -> bool:
        return self._state.connected

    @property
    def peer_session_id(self) -> Optional[str]:
        return self._state.peer_session_id

    @property
    def has_session(self) -> bool:
        return self._connector is not None

    # ------------------------------------------------------------------
    # observers
    # ------------------------------------------------------------------
    def subscribe(self, handler):
        self.bus.on(EVT_INBOUND_MESSAGE, handler)

    def unsubscribe(self, handler):
        self.bus.off(EVT_INBOUND_MESSAGE, handler)

    def on_status(self, handler):
        self.bus.on(EVT_CONN_STATUS, handler)

    def off_status(self, handler):
        self.bus.off(EVT_CONN_STATUS, handler)

    # ------------------------------------------------------------------
    # operations
    # ------------------------------------------------------------------
    def set_target(self, target: str):
        """Tear down whatever session exists and open a fresh one against ``target``."""
        log.info(f"[SESSION] target -> {target}")
        self._teardown()
        self._set_state(SessionState(target=target))

        self._connector = self._connector_factory()
        self._attach()
        self._connector.connect(target)

    def toggle(self):
        if self._connector is None:
            log.debug("[SESSION] toggle ignored, no session")
            return

        if self._state.connected:
            log.info(f"[SESSION] closing {self._state.target}")
            self._detach()
            self._set_state(SessionState(target=self._state.target))
            self._connector.disconnect()
        else:
            log.info(f"[SESSION] reconnecting {self._state.target}")
            self._detach()
            self._attach()
            self._connector.connect(self._state.target)

    def send(self, event_name: str, payload):
        if self._connector is None:
            log.warning(f"[SESSION] send '{event_name}' with no session, dropped")
            return
        if not self._state.connected:
            log.warning(f"[SESSION] send '{event_name}' while disconnected, delivery not guaranteed")
        try:
            self._connector.emit(event_name, payload)
        except Exception as e:
            log.warning(f"[SESSION] send '{event_name}' failed: {e}")

    def close(self):
        """Release the connector for good (component teardown)."""
        self._teardown()
        self._set_state(SessionState(target=self._state.target))

    # ------------------------------------------------------------------
    # connector wiring
    # ------------------------------------------------------------------
    def _attach(self):
        self._generation += 1
        generation = self._generation
        dispatch = self._dispatch

        def inbound_proxy(event_name=None, args=None, **_):
            dispatch(lambda: self._handle_inbound(generation, event_name, args))

        def status_proxy(status=None, sid=None, **_):
            dispatch(lambda: self._handle_status(generation, status, sid))

        bus = self._connector.bus
        bus.on(EVT_INBOUND_RAW, inbound_proxy)
        bus.on(EVT_CHANNEL_STATUS, status_proxy)
        self._bus_refs = [
            (EVT_INBOUND_RAW, inbound_proxy),
            (EVT_CHANNEL_STATUS, status_proxy),
        ]

    def _detach(self):
        # anything already queued by the old proxies is dropped by the generation check
        self._generation += 1
        if self._connector is not None:
            for event_name, handler in self._bus_refs:
                self._connector.bus.off(event_name, handler)
        self._bus_refs = []

    def _teardown(self):
        if self._connector is None:
            return
        connector = self._connector
        self._detach()
        self._connector = None
        try:
            connector.close()
        except Exception as e:
            log.warning(f"[SESSION] error closing connector: {e}")

    def _handle_inbound(self, generation, event_name, args):
        if generation != self._generation:
            log.debug(f"[SESSION] stale inbound '{event_name}' dropped")
            return
        self.bus.emit(EVT_INBOUND_MESSAGE, event_name=event_name, args=list(args or []))

    def _handle_status(self, generation, status, sid):
        if generation != self._generation:
            log.debug(f"[SESSION] stale status '{status}' dropped")
            return
        if status == STATUS_CONNECTED:
            self._set_state(SessionState(
                target=self._state.target,
                connectivity=ConnectivityState.CONNECTED,
                peer_session_id=sid,
            ))
        else:
            self._set_state(SessionState(target=self._state.target))

    def _set_state(self, state: SessionState):
        if state == self._state:
            return
        self._state = state
        log.info(f"[SESSION] {state.connectivity.value} target={state.target} sid={state.peer_session_id}")
        self.bus.emit(EVT_CONN_STATUS, state=state)
