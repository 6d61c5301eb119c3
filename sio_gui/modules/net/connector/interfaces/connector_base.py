from abc import ABC, abstractmethod

from sio_gui.core.event_bus import EventBus
from sio_gui.modules.session.events import (
    EVT_CHANNEL_STATUS,
    EVT_INBOUND_RAW,
    STATUS_DISCONNECTED,
)


class BaseConnector(ABC):
    """
    Standard interface for a transport the SessionManager can own.

    A connector is a single network handle. It publishes everything it
    learns on its own bus:

      - ``inbound.raw``     event_name=..., args=[...] for every peer event
      - ``channel.status``  status=..., sid=... on connect / disconnect

    Subclasses must override:
      - connect() / disconnect()   → start or stop the link, never blocking
      - emit()                     → fire-and-forget send
      - close()                    → release the handle for good
      - connected / sid            → live link state
    """

    def __init__(self, channel_name="transport"):
        self.bus = EventBus(channel_name)
        self._status = STATUS_DISCONNECTED
        self._channel_name = channel_name

    # ------------------------------------------------------------------
    # Abstracts for communication primitives
    # ------------------------------------------------------------------
    @abstractmethod
    def connect(self, target: str):
        """
        Start connecting to ``target`` without blocking the caller.

        Args:
            target (str): Endpoint address, e.g. ``ws://localhost:3000``.
        """

    @abstractmethod
    def disconnect(self):
        """Drop the link; the connector may be connected again later."""

    @abstractmethod
    def emit(self, event_name: str, *args):
        """
        Send one event with its arguments. Delivery is not guaranteed.

        Args:
            event_name (str): Event label.
            *args: Each positional argument travels as one event argument.
        """

    @abstractmethod
    def close(self):
        """Disconnect and release every resource; the connector is dead afterwards."""

    @property
    @abstractmethod
    def connected(self) -> bool:
        """True while the link is up."""

    @property
    @abstractmethod
    def sid(self):
        """Identifier the peer assigned to this link, or None."""

    # ------------------------------------------------------------------
    # Utility
    # ------------------------------------------------------------------
    def get_status(self) -> str:
        return self._status

    def get_channel_name(self) -> str:
        return self._channel_name

    def _set_status(self, status: str):
        self._status = status

    def _emit_status(self, status, sid=None):
        """Publish a channel.status event and update the internal status."""
        self._set_status(status)
        self.bus.emit(EVT_CHANNEL_STATUS, status=status, sid=sid)

    def _emit_inbound(self, event_name, args):
        self.bus.emit(EVT_INBOUND_RAW, event_name=event_name, args=list(args))
