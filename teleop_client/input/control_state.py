"""
control_state.py

Thread-safe store for everything the control loop reads on each tick:
destination host/port as typed by the operator, the selected speed multiplier,
and the latest left/right stick readings.

The UI timeline publishes individual fields; the dispatcher thread takes an
immutable ControlSnapshot so a tick never sees a half-applied edit.
"""

import threading

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from teleop_client.errors import MalformedConfiguration

MIN_SPEED_MULTIPLIER = 1
MAX_SPEED_MULTIPLIER = 10


class Destination(BaseModel):
    """Validated rover address."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    host: str = Field(min_length=1)
    port: int = Field(ge=1, le=65535)


class ControlSnapshot(BaseModel):
    """Consistent view of the control inputs at one instant."""

    model_config = ConfigDict(frozen=True)

    host: str = ""
    port: str = ""
    multiplier: int = MIN_SPEED_MULTIPLIER
    left: int = 0
    right: int = 0

    def destination(self) -> Destination:
        """
        Parse the operator's host/port text.

        Raises:
            MalformedConfiguration: Empty host, or a port that is not 1..65535.
        """
        try:
            return Destination(host=self.host, port=self.port)
        except ValidationError as e:
            raise MalformedConfiguration(
                f"Invalid destination {self.host!r}:{self.port!r} ({e.error_count()} error(s))"
            ) from e


class ControlState:
    """
    Shared control inputs, guarded by a single lock.

    - Written from the UI thread (text edits, multiplier selection, sticks) and
      from the gamepad poller.
    - Read by the ControlDispatcher thread via snapshot().
    """

    def __init__(self, host: str = "", port="", multiplier: int = MIN_SPEED_MULTIPLIER):
        self._lock = threading.Lock()
        self._host = host
        self._port = str(port)
        self._multiplier = self._check_multiplier(multiplier)
        self._left = 0
        self._right = 0

    @staticmethod
    def _check_multiplier(multiplier: int) -> int:
        if not MIN_SPEED_MULTIPLIER <= int(multiplier) <= MAX_SPEED_MULTIPLIER:
            raise MalformedConfiguration(
                f"Speed multiplier must be {MIN_SPEED_MULTIPLIER}..{MAX_SPEED_MULTIPLIER}, got {multiplier}"
            )
        return int(multiplier)

    def set_destination(self, host: str, port) -> None:
        with self._lock:
            self._host = host
            self._port = str(port)

    def set_host(self, host: str) -> None:
        with self._lock:
            self._host = host

    def set_port(self, port) -> None:
        with self._lock:
            self._port = str(port)

    def set_multiplier(self, multiplier: int) -> None:
        value = self._check_multiplier(multiplier)
        with self._lock:
            self._multiplier = value

    def set_sticks(self, left: int, right: int) -> None:
        with self._lock:
            self._left = int(left)
            self._right = int(right)

    def set_left(self, value: int) -> None:
        with self._lock:
            self._left = int(value)

    def set_right(self, value: int) -> None:
        with self._lock:
            self._right = int(value)

    def snapshot(self) -> ControlSnapshot:
        with self._lock:
            return ControlSnapshot(
                host=self._host,
                port=self._port,
                multiplier=self._multiplier,
                left=self._left,
                right=self._right,
            )
