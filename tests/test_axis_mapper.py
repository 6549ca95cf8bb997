"""Tests for the axis mapper."""

from __future__ import annotations

import pytest

from teleop_client.input.axis_mapper import map_to_interval, stick_to_motor


class TestMapToInterval:
    """Affine remap with truncating integer division."""

    def test_midpoint_maps_to_fifty(self) -> None:
        assert map_to_interval(0, -500, 500, 0, 100) == 50

    def test_endpoints(self) -> None:
        assert map_to_interval(-500, -500, 500, 0, 100) == 0
        assert map_to_interval(500, -500, 500, 0, 100) == 100

    def test_monotonic_over_stick_domain(self) -> None:
        values = [map_to_interval(raw, -500, 500, 0, 100) for raw in range(-500, 501)]
        assert all(a <= b for a, b in zip(values, values[1:]))

    def test_truncates_positive_fraction_down(self) -> None:
        # 499 * 100 / 1000 = 49.9
        assert map_to_interval(-1, -500, 500, 0, 100) == 49

    def test_truncates_negative_fraction_toward_zero(self) -> None:
        # -5 * 100 / 1000 = -0.5; floor division would give -1
        assert map_to_interval(-505, -500, 500, 0, 100) == 0
        # -15 * 100 / 1000 = -1.5
        assert map_to_interval(-515, -500, 500, 0, 100) == -1

    def test_out_of_range_input_is_not_clamped(self) -> None:
        assert map_to_interval(600, -500, 500, 0, 100) == 110
        assert map_to_interval(-600, -500, 500, 0, 100) == -10

    def test_empty_source_interval_fails_fast(self) -> None:
        with pytest.raises(ZeroDivisionError):
            map_to_interval(3, 7, 7, 0, 100)


class TestStickToMotor:
    """The fixed [-500, 500] -> [0, 100] mapping applied to 100 - raw."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(0, 60), (100, 50), (-100, 70), (500, 10), (-400, 100)],
    )
    def test_known_readings(self, raw: int, expected: int) -> None:
        assert stick_to_motor(raw) == expected

    def test_pushing_up_lowers_the_mapped_value(self) -> None:
        assert stick_to_motor(100) < stick_to_motor(0) < stick_to_motor(-100)
