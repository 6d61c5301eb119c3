import argparse
import logging
import sys
from pathlib import Path

from sio_gui.config import defaults

log = logging.getLogger("sio_tools")

THEME_PATH = Path(__file__).resolve().parent / "theme" / "sio_theme.qss"


def parse_args(argv=None):
    p = argparse.ArgumentParser(prog="sio-tools", description="Interactive Socket.IO event console")
    p.add_argument("--target", "-t", default=defaults.DEFAULT_TARGET, help="Endpoint to connect to on launch, e.g. ws://localhost:3000")
    p.add_argument("--timeout", type=float, default=defaults.CONNECT_TIMEOUT, help="Seconds to wait for the connection handshake")
    p.add_argument("--no-reconnect", action="store_true", help="Disable transport reconnection after a dropped connection")
    p.add_argument("--log-level", default=defaults.LOG_LEVEL, choices=["DEBUG", "INFO", "WARNING", "ERROR"], type=str.upper, help="Console log level")
    return p.parse_args(argv)


def load_theme(app, theme_path=THEME_PATH):
    try:
        if theme_path.exists():
            with open(theme_path, "r", encoding="utf-8") as f:
                app.setStyleSheet(f.read())
            log.info(f"[STYLE] Loaded theme from {theme_path}")
        else:
            log.warning(f"[STYLE] Theme file not found at {theme_path}")
    except Exception as e:
        log.error(f"[STYLE] Failed to load stylesheet: {e}")


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from PyQt6.QtWidgets import QApplication
    from sio_gui.core.session_controller import SessionController
    from sio_gui.core.session_window import SessionWindow
    from sio_gui.core.utils.gui_invoker import MainThreadInvoker
    from sio_gui.modules.net.connector.sio.socketio_connector import SocketIOConnector

    app = QApplication(sys.argv if argv is None else [sys.argv[0], *argv])
    load_theme(app)

    def connector_factory():
        return SocketIOConnector(reconnection=not args.no_reconnect, timeout=args.timeout)

    invoker = MainThreadInvoker()
    controller = SessionController(connector_factory=connector_factory, dispatch=invoker)
    window = SessionWindow(controller)
    controller.start(args.target)
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
