from __future__ import annotations

import logging
from typing import Callable, Tuple

from sio_gui.config import defaults
from sio_gui.core.dispatcher.inbound_dispatcher import InboundDispatcher
from sio_gui.core.dispatcher.outbound_dispatcher import OutboundDispatcher
from sio_gui.modules.draft.draft_composer import DraftComposer, DraftEvent
from sio_gui.modules.event_log.event_log import EventLog, LogEntry
from sio_gui.modules.session.session_manager import SessionManager, SessionState

log = logging.getLogger("session_controller")


class SessionController:
    """
    The single owner of one SessionManager, EventLog and DraftComposer.

    The window talks to this object only: it reads ``entries``, ``session``
    and ``draft`` and sends back operator intents. Observers hook the
    component buses (``sessions.bus``, ``event_log.bus``, ``composer.bus``).
    """

    def __init__(self, connector_factory: Callable = None, dispatch: Callable = None, event_log: EventLog = None):
        self.sessions = SessionManager(connector_factory=connector_factory, dispatch=dispatch)
        self.event_log = event_log or EventLog()
        self.composer = DraftComposer()

        self.inbound = InboundDispatcher(self.sessions, self.event_log)
        self.outbound = OutboundDispatcher(self.sessions, self.event_log, self.composer)

    # --- read side -----------------------------------------------------
    @property
    def entries(self) -> Tuple[LogEntry, ...]:
        return self.event_log.entries

    @property
    def session(self) -> SessionState:
        return self.sessions.state

    @property
    def draft(self) -> DraftEvent:
        return self.composer.draft

    # --- operator intents ----------------------------------------------
    def start(self, target: str = None):
        self.change_target(target or defaults.DEFAULT_TARGET)

    def change_target(self, target: str):
        if target == self.sessions.target and self.sessions.has_session:
            return
        self.sessions.set_target(target)

    def toggle_connection(self):
        self.sessions.toggle()

    def edit_event_name(self, name: str):
        self.composer.set_event_name(name)

    def edit_body_text(self, text: str):
        self.composer.set_body_text(text)

    def submit(self) -> LogEntry:
        return self.outbound.submit()

    def clear_log(self):
        self.event_log.clear()

    def reuse_event_name(self, name: str):
        self.composer.reuse_event_name(name)

    def shutdown(self):
        log.info("[CONTROLLER] shutting down")
        self.inbound.detach()
        self.sessions.close()
