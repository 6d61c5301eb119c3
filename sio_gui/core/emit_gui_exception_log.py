import logging
import sys
import traceback

from sio_gui.core.event_bus import gui_bus

log = logging.getLogger("gui_exception")

EVT_GUI_EXCEPTION = "gui.log.exception"


def emit_gui_exception_log(label: str, exception: Exception, show_safe_message=False):
    try:
        exception_message = str(exception).strip() or "Unhandled GUI error (no message)"
        exc_type, exc_value, exc_tb = sys.exc_info()
        trace = traceback.extract_tb(exc_tb) if exc_tb else []

        if not trace:
            trace_info = "[NO TRACEBACK AVAILABLE]"
            file = "unknown"
            line = -1
            function = "unknown"
        else:
            last = trace[-1]
            file = last.filename
            line = last.lineno
            function = last.name
            trace_info = traceback.format_exc()

        payload = {
            "label": label,
            "exception_type": type(exception).__name__,
            "exception_message": exception_message,
            "file": file,
            "line": line,
            "function": function,
            "traceback": trace_info
        }

        log.error(f"[EXCEPTION][{label}] {payload['exception_type']}: {exception_message} ({file}:{line} in {function})")
        log.debug("Traceback:\n" + trace_info)

        gui_bus.emit(EVT_GUI_EXCEPTION, payload)

        if bool(show_safe_message):
            _safe_show_gui_error(label, exception_message)

    except Exception as fallback:
        log.critical(f"[LOGGING ERROR] Failed to log GUI exception: {fallback}")


def _safe_show_gui_error(title: str, message: str):
    try:
        if not message.strip():
            return
        from PyQt6.QtWidgets import QMessageBox
        QMessageBox.critical(None, f"SIO Tools :: {title}", message)
    except Exception as inner:
        log.critical(f"[FATAL GUI] Could not display message box: {inner}")
