"""
stick_panel.py

Defines the StickPanel: two on-screen vertical sticks for tank-style driving.
Each stick reports -100 (full reverse) .. 100 (full forward) and springs back
to centre when released, like a thumb joystick.
"""

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QGroupBox, QHBoxLayout, QLabel, QSlider, QVBoxLayout

STICK_MIN = -100
STICK_MAX = 100


class StickPanel(QGroupBox):
    """
    Virtual left/right sticks publishing into a ControlState.

    - Every movement is written straight to the shared state; the control
      dispatcher picks it up on its next tick.
    - Releasing a stick returns it to 0.
    """

    def __init__(self, state, parent=None):
        """
        Args:
            state (ControlState): Shared control inputs to publish into.
            parent: Parent QWidget (optional).
        """
        super().__init__("Drive", parent)
        self.state = state

        layout = QHBoxLayout()
        self.setLayout(layout)

        self.left_stick = self._make_stick(layout, "Left", state.set_left)
        self.right_stick = self._make_stick(layout, "Right", state.set_right)

    def _make_stick(self, layout, title, publish):
        column = QVBoxLayout()
        slider = QSlider(Qt.Orientation.Vertical)
        slider.setRange(STICK_MIN, STICK_MAX)
        slider.setValue(0)
        slider.setFixedHeight(200)
        value_label = QLabel("0")

        def on_change(value):
            value_label.setText(str(value))
            publish(value)

        slider.valueChanged.connect(on_change)
        slider.sliderReleased.connect(lambda: slider.setValue(0))

        column.addWidget(QLabel(title))
        column.addWidget(slider, alignment=Qt.AlignmentFlag.AlignHCenter)
        column.addWidget(value_label)
        layout.addLayout(column)
        return slider

    def set_enabled_sticks(self, enabled: bool):
        """Grey out the sticks while a gamepad drives the rover."""
        for slider in (self.left_stick, self.right_stick):
            slider.setValue(0)
            slider.setEnabled(enabled)
