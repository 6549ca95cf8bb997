"""
logging_panel.py

Implements the LoggingPanel: the pipeline status line and a scrolling log of
client events (stream start/stop, transport warnings, pipeline transitions).
"""

from PyQt6.QtWidgets import QGroupBox, QLabel, QTextEdit, QVBoxLayout


class LoggingPanel(QGroupBox):
    """
    Status line plus a bounded, auto-scrolling log view.

    - set_status() shows the latest message from the video pipeline.
    - append_log() adds a line and trims the view to max_lines.
    """

    def __init__(self, parent=None, max_lines: int = 500):
        super().__init__("Status", parent)
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.status_label = QLabel("Video: idle")
        layout.addWidget(self.status_label)

        self.log_box = QTextEdit()
        self.log_box.setReadOnly(True)
        self.log_box.setLineWrapMode(QTextEdit.LineWrapMode.WidgetWidth)
        layout.addWidget(self.log_box)

        self.max_lines = max_lines
        self.log_lines: list[str] = []

    def set_status(self, message: str):
        self.status_label.setText(f"Video: {message}")

    def append_log(self, message: str):
        self.log_lines.append(message)
        if len(self.log_lines) > self.max_lines:
            self.log_lines = self.log_lines[-self.max_lines:]

        self.log_box.setPlainText("\n".join(self.log_lines))
        scrollbar = self.log_box.verticalScrollBar()
        if scrollbar is not None:
            scrollbar.setValue(scrollbar.maximum())
