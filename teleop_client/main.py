"""
main.py

Entry point for the rover teleoperation client.
Builds the main window, wires the start/stop toggle to the control stream,
feeds application and surface lifecycle events to the video pipeline
coordinator, and tears everything down on exit.

Usage:
    python -m teleop_client.main
"""

from PyQt6.QtWidgets import QApplication, QMessageBox
from PyQt6.QtCore import Qt, QTimer
import sys
import logging

from config import load_config
from logging_setup import setup_logging
from teleop_client.control.stream_controller import StreamController
from teleop_client.errors import MalformedConfiguration, PortUnavailable
from teleop_client.input.control_state import ControlState
from teleop_client.input.input_controller import InputController
from teleop_client.panels.app_window import AppWindow
from teleop_client.panels.logging_panel import LoggingPanel
from teleop_client.panels.stick_panel import StickPanel
from teleop_client.panels.video_panel import MJPEGPipeline, VideoPanel
from teleop_client.pipeline.lifecycle import PipelineCoordinator
from teleop_client.utils.logger import attach_gui_handler

logger = logging.getLogger(__name__)


def main():
    """
    Launch the teleoperation client.

    - Loads configuration and sets up logging.
    - Publishes the operator's address, port and speed edits into ControlState.
    - Start/stop button opens or closes the UDP stream; failures are shown to
      the operator and streaming stays off.
    - Window visibility and the video surface drive the pipeline coordinator.
    """
    config = load_config()
    setup_logging(logfile=config.log_file_path)
    app = QApplication(sys.argv)

    state = ControlState(
        host=config.rover_host,
        port=config.rover_port,
        multiplier=config.default_speed_multiplier,
    )
    stream = StreamController(
        state,
        bind_port=config.bind_port,
        bind_host=config.bind_host,
        interval=config.control_interval_ms / 1000.0,
        send_timeout=config.send_timeout,
    )
    input_controller = InputController(state, config)

    window = AppWindow(
        rover_host=config.rover_host,
        rover_port=config.rover_port,
        speed_multiplier=config.default_speed_multiplier,
    )
    logging_panel = LoggingPanel(max_lines=config.logging_max_lines)
    stick_panel = StickPanel(state)
    video_panel = VideoPanel(camera_resolution=config.camera_resolution)
    window.set_video_widget(video_panel)
    window.set_stick_widget(stick_panel)
    window.layout().addWidget(logging_panel)

    attach_gui_handler(logging_panel.append_log)

    pipeline = MJPEGPipeline(config.camera_stream_url, config.stream_reconnect_delay)
    coordinator = PipelineCoordinator(pipeline, status_sink=logging_panel.set_status)
    pipeline.listener = coordinator

    # Operator edits go straight into the shared snapshot
    window.ip_input.textChanged.connect(state.set_host)
    window.port_input.textChanged.connect(state.set_port)
    window.speed_multiplier.currentIndexChanged.connect(
        lambda _: state.set_multiplier(window.selected_multiplier())
    )

    def handle_toggle():
        if stream.running:
            stream.stop()
            window.set_streaming(False)
            return
        try:
            stream.start()
        except MalformedConfiguration as e:
            logger.error(f"Cannot start stream: {e}")
            QMessageBox.warning(window, "Invalid address", str(e))
        except PortUnavailable as e:
            logger.error(f"Cannot start stream: {e}")
            QMessageBox.warning(window, "Port unavailable", str(e))
        window.set_streaming(stream.running)

    window.start_button.clicked.connect(handle_toggle)

    # Gamepad takes over from the on-screen sticks while enabled
    window.gamepad_checkbox.setEnabled(input_controller.available)

    def handle_gamepad_toggled(checked):
        stick_panel.set_enabled_sticks(not checked)
        if not checked:
            input_controller.release()

    window.gamepad_checkbox.toggled.connect(handle_gamepad_toggled)

    window.input_timer = QTimer()
    window.input_timer.setInterval(10)  # 100Hz
    window.input_timer.timeout.connect(
        lambda: input_controller.poll_input() if window.is_gamepad_enabled() else None
    )
    window.input_timer.start()

    # Pipeline callbacks arrive on the reader thread; process them here
    window.pipeline_timer = QTimer()
    window.pipeline_timer.setInterval(config.pipeline_poll_rate_ms)
    window.pipeline_timer.timeout.connect(coordinator.drain)
    window.pipeline_timer.start()

    video_panel.surface_available.connect(coordinator.surface_available)
    video_panel.surface_destroyed.connect(coordinator.surface_destroyed)

    def handle_state_changed(app_state):
        if app_state == Qt.ApplicationState.ApplicationActive:
            coordinator.app_resumed()
        elif app_state in (
            Qt.ApplicationState.ApplicationHidden,
            Qt.ApplicationState.ApplicationSuspended,
        ):
            # Hidden window: stop driving and pause the feed
            if stream.stop():
                window.set_streaming(False)
            coordinator.app_paused()

    app.applicationStateChanged.connect(handle_state_changed)

    def handle_quit():
        window.input_timer.stop()
        window.pipeline_timer.stop()
        stream.stop()
        coordinator.app_destroyed()

    app.aboutToQuit.connect(handle_quit)

    coordinator.app_created()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
