"""
app_window.py

Defines the main window of the teleoperation client: rover address fields,
speed multiplier, the start/stop stream toggle, the gamepad switch, and slots
for the video, stick and status panels.
"""

from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QSizePolicy,
    QSpacerItem,
    QVBoxLayout,
    QWidget,
)

from teleop_client.input.control_state import MAX_SPEED_MULTIPLIER, MIN_SPEED_MULTIPLIER

START_LABEL = "START STREAM"
RUNNING_LABEL = "STREAM RUNNING"


class AppWindow(QMainWindow):
    """
    Main application window.

    - Exposes the operator's inputs (ip_input, port_input, speed_multiplier,
      start_button, gamepad_checkbox) for wiring in main.py.
    - Video and stick panels are swapped in with set_video_widget() and
      set_stick_widget().
    """

    def __init__(self, rover_host: str = "", rover_port: int = 5005, speed_multiplier: int = 1):
        super().__init__()
        self.setWindowTitle("Rover Control")
        self.setMinimumSize(1024, 768)

        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)

        self._layout = QVBoxLayout()
        self.central_widget.setLayout(self._layout)

        self.top_row_layout = QHBoxLayout()
        self._layout.addLayout(self.top_row_layout)

        self.video_placeholder = QWidget()
        self.stick_placeholder = QWidget()
        self.top_row_layout.addWidget(self.video_placeholder)
        self.top_row_layout.addWidget(self.stick_placeholder)

        # Connection row
        self.connection_layout = QHBoxLayout()
        self.ip_input = QLineEdit(rover_host)
        self.ip_input.setPlaceholderText("Rover IP address")
        self.port_input = QLineEdit(str(rover_port))
        self.port_input.setPlaceholderText("Port")
        self.port_input.setMaximumWidth(80)

        self.speed_multiplier = QComboBox()
        self.speed_multiplier.addItems(
            [str(i) for i in range(MIN_SPEED_MULTIPLIER, MAX_SPEED_MULTIPLIER + 1)]
        )
        self.speed_multiplier.setCurrentIndex(speed_multiplier - MIN_SPEED_MULTIPLIER)

        self.start_button = QPushButton(START_LABEL)

        self.connection_layout.addWidget(QLabel("Rover"))
        self.connection_layout.addWidget(self.ip_input)
        self.connection_layout.addWidget(self.port_input)
        self.connection_layout.addWidget(QLabel("Speed"))
        self.connection_layout.addWidget(self.speed_multiplier)
        self.connection_layout.addWidget(self.start_button)
        self.connection_layout.addItem(
            QSpacerItem(
                40, 20, QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Minimum
            )
        )
        self._layout.addLayout(self.connection_layout)

        self.gamepad_checkbox = QCheckBox("Use Gamepad")
        self.gamepad_checkbox.setChecked(False)
        self._layout.addWidget(self.gamepad_checkbox)

    def set_video_widget(self, widget):
        self.top_row_layout.replaceWidget(self.video_placeholder, widget)
        self.video_placeholder.deleteLater()
        self.video_placeholder = widget

    def set_stick_widget(self, widget):
        self.top_row_layout.replaceWidget(self.stick_placeholder, widget)
        self.stick_placeholder.deleteLater()
        self.stick_placeholder = widget

    def set_streaming(self, running: bool):
        """Reflect the stream state on the toggle and lock the address fields."""
        self.start_button.setText(RUNNING_LABEL if running else START_LABEL)
        self.port_input.setEnabled(not running)

    def selected_multiplier(self) -> int:
        return self.speed_multiplier.currentIndex() + MIN_SPEED_MULTIPLIER

    def layout(self):
        """Return the main QVBoxLayout for adding additional panels."""
        return self._layout

    def is_gamepad_enabled(self) -> bool:
        return self.gamepad_checkbox.isChecked()
