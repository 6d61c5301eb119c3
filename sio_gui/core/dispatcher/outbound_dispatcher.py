import logging

from sio_gui.core.payload import coerce_payload

log = logging.getLogger("outbound_dispatcher")


class OutboundDispatcher:
    """
    Turns the operator's draft into an emitted event and a log entry.

    The order is fixed: coerce the body, send it, record exactly what was
    sent, then reset the draft. Submitting while disconnected still records
    the attempt and resets the draft.
    """
    def __init__(self, sessions, event_log, composer):
        """
        Args:
            sessions: SessionManager that owns the live connector.
            event_log: EventLog receiving the operator entry.
            composer: DraftComposer holding the draft being submitted.
        """
        self.sessions = sessions
        self.event_log = event_log
        self.composer = composer

    def submit(self):
        draft = self.composer.draft
        payload = coerce_payload(draft.body_text)

        self.sessions.send(draft.event_name, payload)
        entry = self.event_log.append_outbound(draft.event_name, payload)
        self.composer.reset()

        log.info(f"[OUTBOUND] '{draft.event_name}' sent ({type(payload).__name__} payload)")
        return entry
