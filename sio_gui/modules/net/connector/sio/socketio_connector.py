import logging
import threading

import socketio
from socketio.exceptions import ConnectionError as SioConnectionError, SocketIOError

from sio_gui.config import defaults
from sio_gui.core.emit_gui_exception_log import emit_gui_exception_log
from sio_gui.modules.net.connector.interfaces.connector_base import BaseConnector
from sio_gui.modules.session.events import (
    STATUS_CLOSED,
    STATUS_CONNECTED,
    STATUS_DISCONNECTED,
)

log = logging.getLogger("socketio_connector")


class SocketIOConnector(BaseConnector):
    """
    Socket.IO transport backed by ``socketio.Client``.

    python-socketio delivers handlers on its own background threads and
    ``Client.connect`` blocks until the namespace handshake finishes, so the
    handshake is pushed onto a daemon thread. Every peer event that reaches
    the catch-all handler is republished on ``self.bus`` untouched.
    """

    def __init__(self, channel_name="sio", client=None, reconnection=None, timeout=None):
        super().__init__(channel_name)
        if reconnection is None:
            reconnection = defaults.RECONNECTION
        self.timeout = defaults.CONNECT_TIMEOUT if timeout is None else timeout

        self.client = client or socketio.Client(reconnection=reconnection, logger=False, engineio_logger=False)
        self.client.on("connect", handler=self._on_connect)
        self.client.on("disconnect", handler=self._on_disconnect)
        self.client.on("connect_error", handler=self._on_connect_error)
        self.client.on("*", handler=self._on_any)

        self._target = None
        self._closed = False
        self._connect_thread = None
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # BaseConnector
    # ------------------------------------------------------------------
    @property
    def connected(self) -> bool:
        return bool(self.client.connected)

    @property
    def sid(self):
        if not self.client.connected:
            return None
        return self.client.get_sid("/")

    def connect(self, target: str):
        with self._lock:
            if self._closed:
                log.warning(f"[SIO][{self._channel_name}] connect on a closed connector ignored")
                return
            if self._connect_thread and self._connect_thread.is_alive():
                log.info(f"[SIO][{self._channel_name}] connect already in flight for {self._target}")
                return
            if self.client.connected:
                log.info(f"[SIO][{self._channel_name}] already connected to {self._target}")
                return

            self._target = target
            self._connect_thread = threading.Thread(
                target=self._connect_worker,
                args=(target,),
                daemon=True,
                name=f"{self._channel_name}-connect",
            )
            self._connect_thread.start()

    def _connect_worker(self, target):
        log.info(f"[SIO][{self._channel_name}] connecting to {target}")
        try:
            self.client.connect(target, wait_timeout=self.timeout)
        except SioConnectionError as e:
            log.warning(f"[SIO][{self._channel_name}] connect to {target} failed: {e}")
            if not self._closed:
                self._emit_status(STATUS_DISCONNECTED)
            return
        except Exception as e:
            # malformed targets surface as ValueError and friends from engineio
            emit_gui_exception_log("SocketIOConnector._connect_worker", e)
            if not self._closed:
                self._emit_status(STATUS_DISCONNECTED)
            return

        if self._closed:
            # closed while the handshake was in flight
            log.info(f"[SIO][{self._channel_name}] connected after close, dropping link to {target}")
            self._safe_disconnect()

    def disconnect(self):
        log.info(f"[SIO][{self._channel_name}] disconnect requested")
        self._safe_disconnect()
        if self._status != STATUS_DISCONNECTED and not self._closed:
            self._emit_status(STATUS_DISCONNECTED)

    def emit(self, event_name: str, *args):
        try:
            self.client.emit(event_name, tuple(args))
        except SocketIOError as e:
            log.warning(f"[SIO][{self._channel_name}] send '{event_name}' not delivered: {e}")
        except Exception as e:
            emit_gui_exception_log("SocketIOConnector.emit", e)

    def close(self):
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._safe_disconnect()
        self._emit_status(STATUS_CLOSED)
        self.bus.clear()
        log.info(f"[SIO][{self._channel_name}] closed")

    # ------------------------------------------------------------------
    # socketio.Client handlers (client threads)
    # ------------------------------------------------------------------
    def _on_connect(self):
        if self._closed:
            return
        # client.connected is still False here; the namespace sid is already set
        sid = self.client.get_sid("/")
        log.info(f"[SIO][{self._channel_name}] connected to {self._target} sid={sid}")
        self._emit_status(STATUS_CONNECTED, sid=sid)

    def _on_disconnect(self, *reason):
        if self._closed:
            return
        log.info(f"[SIO][{self._channel_name}] disconnected from {self._target} {reason[0] if reason else ''}".rstrip())
        self._emit_status(STATUS_DISCONNECTED)

    def _on_connect_error(self, data=None):
        log.warning(f"[SIO][{self._channel_name}] connect_error from {self._target}: {data}")

    def _on_any(self, event_name, *args):
        if self._closed:
            return
        self._emit_inbound(event_name, args)

    # ------------------------------------------------------------------

    def _safe_disconnect(self):
        try:
            self.client.disconnect()
        except Exception as e:
            log.warning(f"[SIO][{self._channel_name}] disconnect error: {e}")
