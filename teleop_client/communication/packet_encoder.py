"""
packet_encoder.py

Builds the ASCII command frame understood by the rover's motor board:

    s0:000,s1:000,m0:DDDD,D,m1:DDDD,D\n

m0/m1 carry the left/right motor magnitude (zero padded to four digits) and a
direction digit. s0/s1 are servo channels this client never drives; they are
always sent as 000. One frame per datagram, no checksum or sequence number.
"""

import re

FRAME_FORMAT = "s0:000,s1:000,m0:%04d,%01d,m1:%04d,%01d\n"

_FRAME_RE = re.compile(rb"^s0:(\d{3}),s1:(\d{3}),m0:(\d{4,}),([01]),m1:(\d{4,}),([01])\n$")


def direction_digit(intensity: int) -> int:
    """
    1 for strictly positive intensity, else 0.

    Zero and reverse share digit 0: the frame cannot express "stop" apart from
    "reverse at zero speed". The rover relies on magnitude 0000 for stopping.
    """
    return 1 if intensity > 0 else 0


def encode_frame(left: int, right: int) -> bytes:
    """
    Encode two signed motor intensities into a control frame.

    Args:
        left (int): Left motor intensity, nominally -1000..1000.
        right (int): Right motor intensity, nominally -1000..1000.
    Returns:
        bytes: ASCII frame terminated by a newline.
    """
    text = FRAME_FORMAT % (abs(left), direction_digit(left), abs(right), direction_digit(right))
    return text.encode("ascii")


def decode_frame(frame: bytes) -> tuple[int, int, int, int]:
    """
    Parse a control frame back into its motor fields.

    Returns:
        tuple: (left_magnitude, left_direction, right_magnitude, right_direction)
    Raises:
        ValueError: If *frame* is not a well-formed control frame.
    """
    match = _FRAME_RE.match(frame)
    if match is None:
        raise ValueError(f"Malformed control frame: {frame!r}")
    _, _, m0, d0, m1, d1 = match.groups()
    return int(m0), int(d0), int(m1), int(d1)
