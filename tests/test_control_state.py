"""Tests for the shared control state and its snapshots."""

from __future__ import annotations

import threading

import pytest
from pydantic import ValidationError

from teleop_client.errors import MalformedConfiguration
from teleop_client.input.control_state import ControlSnapshot, ControlState


class TestSnapshot:

    def test_snapshot_reflects_published_values(self) -> None:
        state = ControlState(host="rover.local", port=5005, multiplier=3)
        state.set_sticks(-20, 40)
        snap = state.snapshot()
        assert (snap.host, snap.port, snap.multiplier, snap.left, snap.right) == (
            "rover.local", "5005", 3, -20, 40,
        )

    def test_snapshot_is_immutable(self) -> None:
        snap = ControlState().snapshot()
        with pytest.raises(ValidationError):
            snap.left = 10

    def test_snapshot_unaffected_by_later_edits(self) -> None:
        state = ControlState(host="a", port=1)
        snap = state.snapshot()
        state.set_destination("b", 2)
        state.set_left(99)
        assert (snap.host, snap.port, snap.left) == ("a", "1", 0)

    def test_concurrent_writers_never_tear_a_snapshot(self) -> None:
        state = ControlState(host="h", port=1)
        stop = threading.Event()

        def writer():
            n = 0
            while not stop.is_set():
                n = (n + 1) % 100
                state.set_sticks(n, -n)

        thread = threading.Thread(target=writer)
        thread.start()
        try:
            for _ in range(2000):
                snap = state.snapshot()
                assert snap.left == -snap.right
        finally:
            stop.set()
            thread.join()


class TestDestination:

    def test_parses_port_text(self) -> None:
        dest = ControlSnapshot(host=" 10.0.0.5 ", port="5005").destination()
        assert (dest.host, dest.port) == ("10.0.0.5", 5005)

    @pytest.mark.parametrize(
        ("host", "port"),
        [("", "5005"), ("   ", "5005"), ("10.0.0.5", ""), ("10.0.0.5", "abc"), ("10.0.0.5", "0"), ("10.0.0.5", "65536")],
    )
    def test_rejects_unusable_destination(self, host: str, port: str) -> None:
        with pytest.raises(MalformedConfiguration):
            ControlSnapshot(host=host, port=port).destination()

    def test_malformed_configuration_is_value_error(self) -> None:
        assert issubclass(MalformedConfiguration, ValueError)


class TestMultiplier:

    @pytest.mark.parametrize("value", [1, 5, 10])
    def test_accepts_one_to_ten(self, value: int) -> None:
        state = ControlState()
        state.set_multiplier(value)
        assert state.snapshot().multiplier == value

    @pytest.mark.parametrize("value", [0, 11, -1])
    def test_rejects_out_of_range(self, value: int) -> None:
        state = ControlState(multiplier=2)
        with pytest.raises(MalformedConfiguration):
            state.set_multiplier(value)
        assert state.snapshot().multiplier == 2
