"""
stream_controller.py

Implements StreamController, the start/stop toggle behind the operator's
"START STREAM" button. Starting opens the UDP session and launches the control
dispatcher; stopping halts the dispatcher and then releases the port.
"""

import logging
import threading

from teleop_client.communication.transport_session import TransportSession
from teleop_client.control.dispatcher import DEFAULT_INTERVAL, ControlDispatcher
from teleop_client.input.control_state import ControlState

log = logging.getLogger(__name__)


class StreamController:
    """
    Owns the single transport session and its dispatcher.

    - start() is ignored while streaming; stop() is a no-op when idle.
    - MalformedConfiguration and PortUnavailable from start() propagate to the
      caller and leave nothing open.
    """

    def __init__(
        self,
        state: ControlState,
        bind_port: int | None = None,
        bind_host: str = "",
        interval: float = DEFAULT_INTERVAL,
        send_timeout: float = 0.5,
        session_factory=None,
    ):
        """
        Args:
            state (ControlState): Shared control inputs.
            bind_port (int | None): Local UDP port; None binds the destination port.
            bind_host (str): Local interface to bind.
            interval (float): Dispatcher tick interval in seconds.
            send_timeout (float): Socket send timeout in seconds.
            session_factory: Callable(port) -> session, for tests.
        """
        self.state = state
        self.bind_port = bind_port
        self.bind_host = bind_host
        self.interval = interval
        self.send_timeout = send_timeout
        self._session_factory = session_factory or self._open_session
        self._lock = threading.Lock()
        self.session = None
        self.dispatcher: ControlDispatcher | None = None

    def _open_session(self, port: int) -> TransportSession:
        return TransportSession.open(port, bind_host=self.bind_host, timeout=self.send_timeout)

    @property
    def running(self) -> bool:
        return self.session is not None

    def start(self) -> bool:
        """
        Open the session and start streaming.

        Returns:
            bool: True if streaming was started, False if it was already running.
        Raises:
            MalformedConfiguration: Destination host/port cannot be parsed.
            PortUnavailable: The local port cannot be bound.
        """
        with self._lock:
            if self.session is not None:
                log.info("Stream already running; start ignored.")
                return False

            destination = self.state.snapshot().destination()
            port = self.bind_port if self.bind_port is not None else destination.port
            session = self._session_factory(port)

            dispatcher = ControlDispatcher(self.state, session, interval=self.interval)
            try:
                dispatcher.start()
            except Exception:
                session.close()
                raise
            self.session = session
            self.dispatcher = dispatcher
            log.info(f"Streaming control frames to {destination.host}:{destination.port}")
            return True

    def stop(self) -> bool:
        """
        Stop streaming and release the port.

        Returns:
            bool: True if a running stream was stopped.
        """
        with self._lock:
            if self.session is None:
                return False
            if self.dispatcher is not None:
                self.dispatcher.stop()
            self.session.close()
            self.session = None
            self.dispatcher = None
            log.info("Streaming stopped.")
            return True

    def toggle(self) -> bool:
        """Start if idle, stop if running. Returns the new running state."""
        if self.running:
            self.stop()
        else:
            self.start()
        return self.running
