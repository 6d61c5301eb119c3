from PyQt6.QtCore import QObject, pyqtSignal

from sio_gui.core.emit_gui_exception_log import emit_gui_exception_log


class MainThreadInvoker(QObject):
    """
    Runs callables on the thread this object lives in (the GUI thread).

    Emitting from a transport thread queues the call; emitting from the GUI
    thread runs it immediately. Calls run in emission order.
    """
    call = pyqtSignal(object)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.call.connect(self._run)

    def __call__(self, fn):
        self.call.emit(fn)

    def _run(self, fn):
        try:
            fn()
        except Exception as e:
            emit_gui_exception_log("MainThreadInvoker._run", e)
