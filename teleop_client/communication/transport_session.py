"""
transport_session.py

Implements TransportSession, the UDP endpoint the control loop sends frames
through. A session binds one local port for its whole lifetime and reuses the
socket for every datagram; the destination is resolved on every send so an
operator can retarget the rover without restarting the stream.
"""

import logging
import socket
import threading

from teleop_client.errors import (
    HostResolutionError,
    PortUnavailable,
    SessionClosedError,
    TransmitError,
)

log = logging.getLogger(__name__)


class TransportSession:
    """
    Bound UDP socket used to fire control frames at the rover.

    - open() binds the local port (PortUnavailable on failure).
    - send() resolves the host each call; HostResolutionError and TransmitError
      leave the session open for the next tick.
    - close() releases the port and is safe to call repeatedly.
    - Only one session should be open at a time; StreamController enforces it.
    """

    def __init__(self, sock: socket.socket):
        self._socket: socket.socket | None = sock
        self._lock = threading.Lock()
        self.port = sock.getsockname()[1]

    @classmethod
    def open(cls, port: int, bind_host: str = "", timeout: float = 0.5) -> "TransportSession":
        """
        Bind a UDP socket on *port* (0 lets the OS choose).

        Args:
            port (int): Local port to bind.
            bind_host (str): Local interface address, "" for all.
            timeout (float): Upper bound in seconds for a single send.
        Raises:
            PortUnavailable: If the port cannot be bound.
        """
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.bind((bind_host, port))
        except OSError as e:
            sock.close()
            raise PortUnavailable(port, str(e)) from e
        sock.settimeout(timeout)
        session = cls(sock)
        log.info(f"[TransportSession] Bound UDP port {session.port}")
        return session

    @property
    def is_open(self) -> bool:
        return self._socket is not None

    def send(self, host: str, port: int, frame: bytes) -> int:
        """
        Send one frame to host:port.

        Returns:
            int: Number of bytes handed to the network.
        Raises:
            SessionClosedError: If the session was closed.
            HostResolutionError: If *host* does not resolve.
            TransmitError: If the socket rejects the datagram.
        """
        if self._socket is None:
            raise SessionClosedError("send() on a closed transport session")
        try:
            infos = socket.getaddrinfo(host, port, socket.AF_INET, socket.SOCK_DGRAM)
        except (socket.gaierror, UnicodeError) as e:
            raise HostResolutionError(host, str(e)) from e
        if not infos:
            raise HostResolutionError(host, "no IPv4 address")
        address = infos[0][4]

        with self._lock:
            sock = self._socket
            if sock is None:
                raise SessionClosedError("send() on a closed transport session")
            try:
                return sock.sendto(frame, address)
            except OSError as e:
                raise TransmitError(f"Failed to send to {address[0]}:{address[1]}: {e}") from e

    def close(self):
        """Release the bound port."""
        with self._lock:
            if self._socket is None:
                return
            self._socket.close()
            self._socket = None
        log.info(f"[TransportSession] Released UDP port {self.port}")

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
