"""Shared fixtures for the teleoperation client tests."""

from __future__ import annotations

import socket

import pytest

from teleop_client.input.control_state import ControlState


@pytest.fixture
def receiver():
    """A UDP socket on loopback standing in for the rover."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(2.0)
    yield sock
    sock.close()


@pytest.fixture
def state(receiver) -> ControlState:
    """Control state pointed at the loopback receiver."""
    return ControlState(host="127.0.0.1", port=receiver.getsockname()[1], multiplier=1)
