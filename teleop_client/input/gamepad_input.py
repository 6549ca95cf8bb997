"""
gamepad_input.py

Provides the GamepadInput class: a physical joystick as an alternative to the
on-screen sticks. Reads the two vertical axes used for tank driving and
converts them to stick readings in -100..100, up positive.
"""

import pygame
import logging

log = logging.getLogger(__name__)

STICK_SCALE = 100


class GamepadInput:
    """
    Tank-drive stick readings from the first attached joystick.

    - Initializes pygame and the joystick subsystem.
    - Applies a dead zone so a resting stick reads exactly 0.
    - Inverts the axes: pygame reports up as negative.
    """

    def __init__(self, cfg):
        """
        Args:
            cfg: Settings with gamepad_deadzone, gamepad_left_axis, gamepad_right_axis.
        Raises:
            RuntimeError: If no joystick is detected on initialization.
        """
        pygame.init()
        pygame.joystick.init()

        if pygame.joystick.get_count() == 0:
            raise RuntimeError("No joystick detected")

        self.joystick = pygame.joystick.Joystick(0)
        self.joystick.init()
        log.info(f"Initialized joystick: {self.joystick.get_name()}")

        self.axis_deadzone = cfg.gamepad_deadzone
        self.left_axis = cfg.gamepad_left_axis
        self.right_axis = cfg.gamepad_right_axis

    def _stick_value(self, value: float) -> int:
        if abs(value) < self.axis_deadzone:
            return 0
        return int(round(-value * STICK_SCALE))

    def get_sticks(self) -> tuple[int, int]:
        """
        Poll the joystick.

        Returns:
            tuple: (left, right) stick readings in -100..100.
        """
        pygame.event.pump()
        left = self._stick_value(self.joystick.get_axis(self.left_axis))
        right = self._stick_value(self.joystick.get_axis(self.right_axis))
        return left, right
