"""
input_controller.py

Implements the InputController class, which polls the gamepad (when one is
attached) at the configured rate and publishes the readings into the shared
ControlState read by the control dispatcher.
"""

import time
import logging

from .gamepad_input import GamepadInput

log = logging.getLogger(__name__)


class InputController:
    """
    Bridges a stick source to the ControlState.

    - Polling is rate-limited to input_poll_rate_hz however often poll_input()
      is called.
    - Without a joystick the controller stays idle and the on-screen sticks
      are the only input.
    """

    def __init__(self, state, cfg, input_source=None):
        """
        Args:
            state (ControlState): Where readings are published.
            cfg: Settings with input_poll_rate_hz and the gamepad fields.
            input_source: Object with get_sticks(); defaults to GamepadInput(cfg).
        """
        self.state = state
        self.poll_interval = 1.0 / cfg.input_poll_rate_hz
        self.last_poll_time = 0.0
        self.last_sticks = (0, 0)

        if input_source is not None:
            self.input_source = input_source
            return
        try:
            self.input_source = GamepadInput(cfg)
            log.info("Gamepad input available.")
        except RuntimeError as e:
            self.input_source = None
            log.warning(f"Gamepad not available: {e}")

    @property
    def available(self) -> bool:
        return self.input_source is not None

    def poll_input(self, now: float | None = None) -> bool:
        """
        Read the gamepad and publish the sticks if the poll interval has elapsed.

        Returns:
            bool: True if a reading was published.
        """
        if self.input_source is None:
            return False

        now = time.monotonic() if now is None else now
        if now - self.last_poll_time < self.poll_interval:
            return False
        self.last_poll_time = now

        sticks = self.input_source.get_sticks()
        self.state.set_sticks(*sticks)
        if sticks != self.last_sticks:
            log.debug(f"Sticks: {sticks}")
            self.last_sticks = sticks
        return True

    def release(self):
        """Centre both sticks, e.g. when the gamepad is switched off."""
        self.last_sticks = (0, 0)
        self.state.set_sticks(0, 0)
