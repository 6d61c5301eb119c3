import os

DEFAULT_TARGET = os.getenv("SIO_TOOLS_TARGET", "ws://localhost:3000")

# seconds to wait for the namespace handshake before giving up
CONNECT_TIMEOUT = float(os.getenv("SIO_TOOLS_CONNECT_TIMEOUT", "5"))

RECONNECTION = os.getenv("SIO_TOOLS_RECONNECT", "1").strip().lower() not in ("0", "false", "no", "off")

LOG_LEVEL = os.getenv("SIO_TOOLS_LOG_LEVEL", "INFO").upper()
