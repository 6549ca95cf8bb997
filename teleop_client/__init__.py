"""
teleop_client package

Operator-side code for driving the rover: stick input, the 20 Hz UDP control
loop and its wire format, the video pipeline lifecycle, and the PyQt6 window
that ties them together.
"""
