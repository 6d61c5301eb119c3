from __future__ import annotations

from dataclasses import dataclass, replace

from sio_gui.core.event_bus import EventBus
from sio_gui.modules.session.events import EVT_DRAFT_CHANGED


@dataclass(frozen=True)
class DraftEvent:
    event_name: str = ""
    body_text: str = ""


class DraftComposer:
    """Holds the outbound event the operator is typing. No validation, last write wins."""

    def __init__(self):
        self._draft = DraftEvent()
        self.bus = EventBus("draft")

    @property
    def draft(self) -> DraftEvent:
        return self._draft

    def set_event_name(self, name: str):
        self._update(replace(self._draft, event_name=name))

    def set_body_text(self, text: str):
        self._update(replace(self._draft, body_text=text))

    def reuse_event_name(self, name: str):
        # click-to-reuse from a log row; the body the operator typed stays
        self._update(replace(self._draft, event_name=name or ""))

    def reset(self):
        self._update(DraftEvent())

    def _update(self, draft: DraftEvent):
        if draft == self._draft:
            return
        self._draft = draft
        self.bus.emit(EVT_DRAFT_CHANGED, draft=draft)
