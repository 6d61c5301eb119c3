import logging
from threading import RLock

log = logging.getLogger("event_bus")


class EventBus:
    """
    A small isolated event bus.

    Each connector, session manager, log and draft owns its own instance so
    listeners never bleed across components. Listener exceptions are logged
    and never reach the emitter.
    """
    def __init__(self, name):
        self.name = name
        self._listeners = {}
        self._lock = RLock()

    def on(self, event_name, handler):
        """Register a callback for an event."""
        with self._lock:
            self._listeners.setdefault(event_name, []).append(handler)

    def off(self, event_name, callback=None):
        """Remove one listener, or every listener of the event if callback is None."""
        with self._lock:
            if event_name not in self._listeners:
                return
            if callback is None:
                self._listeners.pop(event_name, None)
                return
            try:
                self._listeners[event_name].remove(callback)
                if not self._listeners[event_name]:
                    self._listeners.pop(event_name)
                log.debug(f"[BUS[{self.name}]] OFF {event_name} -> {getattr(callback, '__name__', callback)}")
            except ValueError:
                pass

    def emit(self, event_name, /, *args, **kwargs):
        # payload kwargs may include event_name=
        with self._lock:
            listeners = list(self._listeners.get(event_name, []))
        for cb in listeners:
            try:
                cb(*args, **kwargs)
            except Exception:
                log.exception(f"[BUS[{self.name}]] handler error on {event_name}")

    def listener_count(self, event_name):
        with self._lock:
            return len(self._listeners.get(event_name, []))

    def clear(self):
        """Completely clear this bus."""
        with self._lock:
            self._listeners.clear()


# GUI-wide notifications (exception reports); never carries connection traffic
gui_bus = EventBus("gui")
