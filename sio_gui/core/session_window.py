from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor, QFont
from PyQt6.QtWidgets import (
    QAbstractItemView, QHBoxLayout, QLabel, QLineEdit, QMainWindow,
    QPushButton, QTableWidget, QTableWidgetItem, QVBoxLayout, QWidget,
)

from sio_gui.core.emit_gui_exception_log import EVT_GUI_EXCEPTION, emit_gui_exception_log
from sio_gui.core.event_bus import gui_bus
from sio_gui.core.utils.formatting import format_args, row_color, sid_text, status_text
from sio_gui.core.utils.gui_invoker import MainThreadInvoker
from sio_gui.modules.session.events import EVT_DRAFT_CHANGED, EVT_LOG_APPENDED, EVT_LOG_CLEARED
from sio_gui.theme.utils.sio_ui import StatusLabel

COL_EVENT = 0
COL_ARGS = 1


class SessionWindow(QMainWindow):
    """Header (target / status / peer id), the event table and the send form."""

    def __init__(self, controller, parent=None):
        super().__init__(parent)
        try:
            self.controller = controller
            self._invoke = MainThreadInvoker(self)

            self.setWindowTitle("Socket.IO Tools")
            self.resize(800, 600)
            self.setMinimumHeight(500)

            central = QWidget()
            layout = QVBoxLayout(central)
            layout.setContentsMargins(8, 8, 8, 8)
            layout.setSpacing(5)
            self.setCentralWidget(central)

            title = QLabel("Socket.IO Tools")
            title.setObjectName("title")
            layout.addWidget(title)

            layout.addWidget(self._build_header())
            layout.addWidget(self._build_table(), 1)

            self.clear_button = QPushButton("Clear")
            self.clear_button.setObjectName("clear")
            self.clear_button.setFlat(True)
            self.clear_button.setCursor(Qt.CursorShape.PointingHandCursor)
            self.clear_button.clicked.connect(self._on_clear_clicked)
            layout.addWidget(self.clear_button, 0, Qt.AlignmentFlag.AlignLeft)

            layout.addWidget(self._build_form())

            # Events
            controller.sessions.on_status(self._on_session_state)
            controller.event_log.bus.on(EVT_LOG_APPENDED, self._on_entry_appended)
            controller.event_log.bus.on(EVT_LOG_CLEARED, self._on_log_cleared)
            controller.composer.bus.on(EVT_DRAFT_CHANGED, self._on_draft_changed)
            gui_bus.on(EVT_GUI_EXCEPTION, self._on_gui_exception)

            self._render_session(controller.session)
            for entry in controller.entries:
                self._add_row(entry)
            self._render_draft(controller.draft)

        except Exception as e:
            emit_gui_exception_log("SessionWindow.__init__", e)

    # ------------------------------------------------------------------
    # builders
    # ------------------------------------------------------------------
    def _build_header(self):
        header = QWidget()
        header.setObjectName("header")
        row = QHBoxLayout(header)
        row.setContentsMargins(5, 5, 5, 5)
        row.setSpacing(5)

        self.target_edit = QLineEdit()
        self.target_edit.setFixedWidth(200)
        self.target_edit.editingFinished.connect(self._on_target_edited)

        self.status_label = StatusLabel()
        self.status_label.clicked.connect(self._on_status_clicked)

        self.sid_label = QLabel()
        self.sid_label.setObjectName("sid")

        row.addWidget(self.target_edit)
        row.addWidget(self.status_label, 1)
        row.addWidget(self.sid_label)
        return header

    def _build_table(self):
        self.table = QTableWidget(0, 2)
        self.table.setHorizontalHeaderLabels(["Event", "Args"])
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.setColumnWidth(COL_EVENT, 120)
        self.table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table.setWordWrap(True)
        self.table.cellClicked.connect(self._on_cell_clicked)
        return self.table

    def _build_form(self):
        form = QWidget()
        row = QHBoxLayout(form)
        row.setContentsMargins(0, 0, 0, 0)
        row.setSpacing(5)

        self.event_name_edit = QLineEdit()
        self.event_name_edit.setPlaceholderText("Event Name")
        self.event_name_edit.textEdited.connect(self.controller.edit_event_name)
        self.event_name_edit.returnPressed.connect(self._on_submit)

        self.body_edit = QLineEdit()
        self.body_edit.setPlaceholderText("Message Body")
        self.body_edit.textEdited.connect(self.controller.edit_body_text)
        self.body_edit.returnPressed.connect(self._on_submit)

        self.send_button = QPushButton("Send")
        self.send_button.setObjectName("send")
        self.send_button.clicked.connect(self._on_submit)

        row.addWidget(self.event_name_edit)
        row.addWidget(self.body_edit, 1)
        row.addWidget(self.send_button)
        return form

    # ------------------------------------------------------------------
    # operator intents
    # ------------------------------------------------------------------
    def _on_target_edited(self):
        try:
            self.controller.change_target(self.target_edit.text())
        except Exception as e:
            emit_gui_exception_log("SessionWindow._on_target_edited", e)

    def _on_status_clicked(self):
        try:
            self.controller.toggle_connection()
        except Exception as e:
            emit_gui_exception_log("SessionWindow._on_status_clicked", e)

    def _on_cell_clicked(self, row, column):
        if column != COL_EVENT:
            return
        item = self.table.item(row, COL_EVENT)
        if item is not None:
            self.controller.reuse_event_name(item.text())

    def _on_clear_clicked(self):
        self.controller.clear_log()

    def _on_submit(self):
        try:
            self.controller.submit()
            self.event_name_edit.setFocus()
        except Exception as e:
            emit_gui_exception_log("SessionWindow._on_submit", e, show_safe_message=True)

    # ------------------------------------------------------------------
    # model → view
    # ------------------------------------------------------------------
    def _on_session_state(self, state=None, **_):
        self._render_session(state)

    def _render_session(self, state):
        self.status_label.setText(status_text(state))
        self.sid_label.setText(sid_text(state))
        self.sid_label.setVisible(bool(state.peer_session_id))
        if not self.target_edit.hasFocus() and self.target_edit.text() != (state.target or ""):
            self.target_edit.setText(state.target or "")

    def _on_entry_appended(self, entry=None, **_):
        self._add_row(entry)

    def _add_row(self, entry):
        row = self.table.rowCount()
        self.table.insertRow(row)

        name_item = QTableWidgetItem(entry.event_name)
        font = QFont()
        font.setBold(True)
        font.setItalic(True)
        name_item.setFont(font)
        name_item.setTextAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignTop)
        name_item.setBackground(QColor(row_color(entry)))
        name_item.setData(Qt.ItemDataRole.UserRole, entry.id)
        name_item.setToolTip("Click to reuse this event name")

        args_item = QTableWidgetItem(format_args(entry.args))
        if not entry.args:
            empty_font = QFont()
            empty_font.setItalic(True)
            args_item.setFont(empty_font)

        self.table.setItem(row, COL_EVENT, name_item)
        self.table.setItem(row, COL_ARGS, args_item)
        self.table.resizeRowToContents(row)
        self.table.scrollToBottom()

    def _on_log_cleared(self, **_):
        self.table.setRowCount(0)

    def _on_draft_changed(self, draft=None, **_):
        self._render_draft(draft)

    def _render_draft(self, draft):
        if self.event_name_edit.text() != draft.event_name:
            self.event_name_edit.setText(draft.event_name)
        if self.body_edit.text() != draft.body_text:
            self.body_edit.setText(draft.body_text)

    def _on_gui_exception(self, payload):
        # may arrive from a transport thread
        message = f"{payload.get('label')}: {payload.get('exception_message')}"
        self._invoke(lambda: self.statusBar().showMessage(message, 10000))

    # ------------------------------------------------------------------

    def closeEvent(self, event):
        try:
            gui_bus.off(EVT_GUI_EXCEPTION, self._on_gui_exception)
            self.controller.sessions.off_status(self._on_session_state)
            self.controller.event_log.bus.off(EVT_LOG_APPENDED, self._on_entry_appended)
            self.controller.event_log.bus.off(EVT_LOG_CLEARED, self._on_log_cleared)
            self.controller.composer.bus.off(EVT_DRAFT_CHANGED, self._on_draft_changed)
            self.controller.shutdown()
        except Exception as e:
            emit_gui_exception_log("SessionWindow.closeEvent", e)
        super().closeEvent(event)
