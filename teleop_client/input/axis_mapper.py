"""
axis_mapper.py

Affine remapping of raw stick readings onto motor intensity values.
Integer-only: the division truncates toward zero so results match the rover
firmware's reference controller digit for digit.
"""

STICK_DOMAIN = (-500, 500)
MOTOR_RANGE = (0, 100)


def _truncating_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero (``//`` rounds toward -inf)."""
    if denominator == 0:
        raise ZeroDivisionError("Axis mapper source interval is empty")
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator < 0) == (denominator < 0) else -quotient


def map_to_interval(raw: int, src_min: int, src_max: int, dst_min: int, dst_max: int) -> int:
    """
    Map *raw* from [src_min, src_max] onto [dst_min, dst_max].

    Values outside the source interval are not clamped and land outside the
    destination interval.

    Raises:
        ZeroDivisionError: If src_min == src_max.
    """
    return dst_min + _truncating_div((raw - src_min) * (dst_max - dst_min), src_max - src_min)


def stick_to_motor(raw_y: int) -> int:
    """Motor intensity (before the speed multiplier) for a raw vertical stick reading."""
    return map_to_interval(100 - raw_y, *STICK_DOMAIN, *MOTOR_RANGE)
