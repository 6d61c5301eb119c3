from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

from sio_gui.core.event_bus import EventBus
from sio_gui.core.identity import new_entry_id
from sio_gui.modules.session.events import EVT_LOG_APPENDED, EVT_LOG_CLEARED

log = logging.getLogger("event_log")


class Origin(str, Enum):
    PEER = "peer"
    OPERATOR = "operator"


@dataclass(frozen=True)
class LogEntry:
    id: str
    event_name: str
    args: Tuple[Any, ...]
    origin: Origin
    ts: float = field(default_factory=time.time, compare=False)


def is_absent(payload) -> bool:
    """
    True for payloads that produce no outbound argument: None, False, 0, NaN
    and the empty string. Empty containers still count as a payload.
    """
    if payload is None or isinstance(payload, bool):
        return not payload
    if isinstance(payload, (int, float)):
        return payload == 0 or payload != payload
    if isinstance(payload, str):
        return payload == ""
    return False


class EventLog:
    """
    Append-only record of every event seen or sent during the process lifetime.

    Insertion order is display order. Entries are never edited, reordered or
    removed one by one; ``clear()`` drops all of them at once. Ids come from
    ``id_factory`` and are never handed out twice, clear or not.
    """

    def __init__(self, id_factory: Callable[[], str] = new_entry_id):
        self._id_factory = id_factory
        self._entries: List[LogEntry] = []
        self._snapshot: Optional[Tuple[LogEntry, ...]] = ()
        self.bus = EventBus("log")

    @property
    def entries(self) -> Tuple[LogEntry, ...]:
        if self._snapshot is None:
            self._snapshot = tuple(self._entries)
        return self._snapshot

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self.entries)

    def append_inbound(self, event_name: str, args) -> LogEntry:
        return self._append(LogEntry(
            id=self._id_factory(),
            event_name=event_name if event_name is not None else "",
            args=tuple(args or ()),
            origin=Origin.PEER,
        ))

    def append_outbound(self, event_name: str, payload=None) -> LogEntry:
        args = () if is_absent(payload) else (payload,)
        return self._append(LogEntry(
            id=self._id_factory(),
            event_name=event_name,
            args=args,
            origin=Origin.OPERATOR,
        ))

    def clear(self):
        dropped = len(self._entries)
        self._entries = []
        self._snapshot = ()
        log.info(f"[LOG] cleared {dropped} entries")
        self.bus.emit(EVT_LOG_CLEARED)

    def _append(self, entry: LogEntry) -> LogEntry:
        self._entries.append(entry)
        self._snapshot = None
        log.debug(f"[LOG] {entry.origin.value} '{entry.event_name}' args={len(entry.args)}")
        self.bus.emit(EVT_LOG_APPENDED, entry=entry)
        return entry
