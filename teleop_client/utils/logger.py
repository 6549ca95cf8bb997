import logging

from PyQt6.QtCore import QObject, pyqtSignal


class GuiLogEmitter(QObject):
    log_signal = pyqtSignal(str)


class GuiLogHandler(logging.Handler):
    """Formats records and hands them to the GUI thread through a Qt signal."""

    def __init__(self):
        super().__init__()
        self.emitter = GuiLogEmitter()

    def emit(self, record: logging.LogRecord):
        try:
            msg = self.format(record)
        except Exception:
            self.handleError(record)
            return
        self.emitter.log_signal.emit(msg)


def attach_gui_handler(sink, level=logging.INFO) -> GuiLogHandler:
    """
    Route root-logger records to *sink* (e.g. LoggingPanel.append_log).

    Returns:
        GuiLogHandler: The installed handler, for later removal.
    """
    handler = GuiLogHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
    handler.emitter.log_signal.connect(sink)
    logging.getLogger().addHandler(handler)
    return handler
