"""
dispatcher.py

Implements ControlDispatcher, the 20 Hz loop that turns the current stick
positions into motor frames for the rover.

The loop re-arms only after a tick has finished, so a slow tick delays the
next one instead of causing a burst of catch-up frames. Errors inside a tick
are logged and the loop carries on; only stop() ends it.
"""

import logging
import threading

from teleop_client.communication.packet_encoder import encode_frame
from teleop_client.errors import MalformedConfiguration, TransportError
from teleop_client.input.axis_mapper import stick_to_motor
from teleop_client.input.control_state import ControlSnapshot, ControlState

log = logging.getLogger(__name__)

DEFAULT_INTERVAL = 0.05


def compute_intensities(snapshot: ControlSnapshot) -> tuple[int, int]:
    """Left/right motor intensities for one tick, speed multiplier applied."""
    left = stick_to_motor(snapshot.left) * snapshot.multiplier
    right = stick_to_motor(snapshot.right) * snapshot.multiplier
    return left, right


class ControlDispatcher:
    """
    Periodic sender of control frames.

    - Reads a ControlSnapshot each tick, maps and encodes it, and sends the
      frame through the transport session.
    - Runs on its own daemon thread; stop() may be called from any thread and
      takes effect before the next tick.
    - A tick already in flight is allowed to finish.
    """

    def __init__(self, state: ControlState, session, interval: float = DEFAULT_INTERVAL):
        """
        Args:
            state (ControlState): Source of destination, multiplier and sticks.
            session: TransportSession (or anything with send(host, port, frame)).
            interval (float): Seconds between the end of one tick and the next.
        """
        self.state = state
        self.session = session
        self.interval = interval
        self.tick_count = 0
        self.last_frame: bytes | None = None
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return (
            self._thread is not None
            and self._thread.is_alive()
            and not self._stop_event.is_set()
        )

    def start(self):
        """Start ticking. Ignored if the loop is already running."""
        if self.running:
            return
        # fresh event: a thread left over from a timed-out join must stay stopped
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run, args=(self._stop_event,), name="control-dispatcher", daemon=True
        )
        self._thread.start()
        log.info(f"Control dispatcher started ({1.0 / self.interval:.0f} Hz)")

    def _run(self, stop_event: threading.Event):
        while not stop_event.is_set():
            self.tick()
            if stop_event.wait(timeout=self.interval):
                break

    def tick(self):
        """Run one iteration: snapshot, map, encode, send."""
        try:
            snapshot = self.state.snapshot()
            destination = snapshot.destination()
            left, right = compute_intensities(snapshot)
            frame = encode_frame(left, right)
            self.session.send(destination.host, destination.port, frame)
            self.last_frame = frame
            log.debug(f"Sent {frame!r} to {destination.host}:{destination.port}")
        except (MalformedConfiguration, TransportError) as e:
            log.warning(f"Control tick skipped: {e}")
        except Exception:
            log.exception("Unexpected error in control tick")
        finally:
            self.tick_count += 1

    def stop(self, timeout: float = 1.0):
        """
        Cancel the loop. Safe to call when not running and from the loop itself.

        Args:
            timeout (float): How long to wait for an in-flight tick to finish.
        """
        self._stop_event.set()
        thread = self._thread
        if thread is None:
            return
        if thread is not threading.current_thread() and thread.is_alive():
            thread.join(timeout=timeout)
            if thread.is_alive():
                log.warning("Control dispatcher thread did not finish within timeout")
        self._thread = None
        log.info(f"Control dispatcher stopped after {self.tick_count} ticks")
