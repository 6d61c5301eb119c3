from sio_gui.core.emit_gui_exception_log import emit_gui_exception_log


class InboundDispatcher:
    """Feeds every event the session reports into the event log, no filtering by name."""

    def __init__(self, sessions, event_log):
        self.sessions = sessions
        self.event_log = event_log
        sessions.subscribe(self._handle_inbound)

    def _handle_inbound(self, event_name=None, args=None, **_):
        try:
            self.event_log.append_inbound(event_name, args)
        except Exception as e:
            emit_gui_exception_log("InboundDispatcher._handle_inbound", e)

    def detach(self):
        self.sessions.unsubscribe(self._handle_inbound)
