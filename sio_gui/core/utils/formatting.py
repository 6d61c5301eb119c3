import json

from sio_gui.modules.event_log.event_log import Origin

EMPTY_ARGS_MARKER = "[empty]"

# row backgrounds for the Event column
COLOR_OPERATOR = "#f3f2f1"
COLOR_EXCEPTION = "#71afe5"
COLOR_PEER = "#c7e0f4"


def format_args(args) -> str:
    if not args:
        return EMPTY_ARGS_MARKER
    return json.dumps(list(args), indent=2, ensure_ascii=False, default=str)


def row_color(entry) -> str:
    if entry.origin is Origin.OPERATOR:
        return COLOR_OPERATOR
    if entry.event_name == "exception":
        return COLOR_EXCEPTION
    return COLOR_PEER


def status_text(state) -> str:
    return "🟢 Connected" if state.connected else "🔴 Disconnected"


def sid_text(state) -> str:
    return f"ID: {state.peer_session_id}" if state.peer_session_id else ""
