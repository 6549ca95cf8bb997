"""
errors.py

Exception hierarchy for the teleoperation client.

Start-up failures (PortUnavailable, MalformedConfiguration) are reported to the
operator and keep streaming off. Per-tick failures (HostResolutionError,
TransmitError) are logged by the dispatcher and never stop the loop.
"""


class TeleopError(Exception):
    """Base class for all client errors."""


class TransportError(TeleopError):
    """Failure in the UDP transport session."""


class PortUnavailable(TransportError):
    """The local UDP port could not be bound."""

    def __init__(self, port: int, reason: str = ""):
        self.port = port
        super().__init__(f"Cannot bind UDP port {port}: {reason}" if reason else f"Cannot bind UDP port {port}")


class HostResolutionError(TransportError):
    """The destination host name did not resolve."""

    def __init__(self, host: str, reason: str = ""):
        self.host = host
        super().__init__(f"Cannot resolve host {host!r}: {reason}" if reason else f"Cannot resolve host {host!r}")


class TransmitError(TransportError):
    """The datagram could not be handed to the network."""


class SessionClosedError(TransportError):
    """send() was called on a session that has been closed."""


class LifecycleContractViolation(TeleopError):
    """A pipeline lifecycle event arrived in a state that does not accept it."""


class MalformedConfiguration(TeleopError, ValueError):
    """Operator-supplied destination or speed settings are not usable."""
