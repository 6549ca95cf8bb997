"""Tests for the UDP transport session."""

from __future__ import annotations

import socket

import pytest

from teleop_client.communication import transport_session
from teleop_client.communication.transport_session import TransportSession
from teleop_client.errors import (
    HostResolutionError,
    PortUnavailable,
    SessionClosedError,
    TransmitError,
    TransportError,
)

FRAME = b"s0:000,s1:000,m0:0050,1,m1:0050,1\n"


class _FailingSocket:
    """Socket stand-in whose sendto always fails."""

    def __init__(self):
        self.closed = False

    def getsockname(self):
        return ("0.0.0.0", 40000)

    def sendto(self, data, address):
        raise OSError("Network is unreachable")

    def close(self):
        self.closed = True


class TestOpen:

    def test_binds_ephemeral_port(self) -> None:
        with TransportSession.open(0, bind_host="127.0.0.1") as session:
            assert session.is_open
            assert session.port > 0

    def test_port_in_use_raises_port_unavailable(self) -> None:
        blocker = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        blocker.bind(("127.0.0.1", 0))
        try:
            port = blocker.getsockname()[1]
            with pytest.raises(PortUnavailable) as excinfo:
                TransportSession.open(port, bind_host="127.0.0.1")
            assert excinfo.value.port == port
        finally:
            blocker.close()


class TestSend:

    def test_frame_arrives_unchanged(self, receiver) -> None:
        host, port = receiver.getsockname()
        with TransportSession.open(0, bind_host="127.0.0.1") as session:
            assert session.send(host, port, FRAME) == len(FRAME)
            data, source = receiver.recvfrom(1024)
        assert data == FRAME
        assert source[1] == session.port

    def test_same_socket_used_for_every_send(self, receiver) -> None:
        host, port = receiver.getsockname()
        with TransportSession.open(0, bind_host="127.0.0.1") as session:
            session.send(host, port, FRAME)
            session.send(host, port, FRAME)
            sources = {receiver.recvfrom(1024)[1] for _ in range(2)}
        assert len(sources) == 1

    def test_host_resolved_on_every_send(self, receiver, monkeypatch) -> None:
        host, port = receiver.getsockname()
        calls = []
        real_getaddrinfo = socket.getaddrinfo

        def counting_getaddrinfo(*args, **kwargs):
            calls.append(args[0])
            return real_getaddrinfo(*args, **kwargs)

        monkeypatch.setattr(transport_session.socket, "getaddrinfo", counting_getaddrinfo)
        with TransportSession.open(0, bind_host="127.0.0.1") as session:
            for _ in range(3):
                session.send(host, port, FRAME)
        assert calls == [host, host, host]

    def test_resolution_failure_keeps_session_usable(self, receiver, monkeypatch) -> None:
        host, port = receiver.getsockname()
        with TransportSession.open(0, bind_host="127.0.0.1") as session:
            with monkeypatch.context() as m:
                def no_dns(*args, **kwargs):
                    raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")

                m.setattr(transport_session.socket, "getaddrinfo", no_dns)
                with pytest.raises(HostResolutionError) as excinfo:
                    session.send("rover.invalid", port, FRAME)
                assert excinfo.value.host == "rover.invalid"

            assert session.is_open
            session.send(host, port, FRAME)
            assert receiver.recvfrom(1024)[0] == FRAME

    def test_socket_failure_raises_transmit_error(self) -> None:
        sock = _FailingSocket()
        session = TransportSession(sock)
        with pytest.raises(TransmitError):
            session.send("127.0.0.1", 5005, FRAME)
        assert session.is_open
        assert not sock.closed

    def test_errors_share_transport_base(self) -> None:
        for error in (PortUnavailable, HostResolutionError, TransmitError, SessionClosedError):
            assert issubclass(error, TransportError)


class TestClose:

    def test_send_after_close_is_rejected(self, receiver) -> None:
        host, port = receiver.getsockname()
        session = TransportSession.open(0, bind_host="127.0.0.1")
        session.close()
        assert not session.is_open
        with pytest.raises(SessionClosedError):
            session.send(host, port, FRAME)

    def test_close_is_idempotent(self) -> None:
        session = TransportSession.open(0, bind_host="127.0.0.1")
        session.close()
        session.close()
        assert not session.is_open

    def test_close_releases_port(self) -> None:
        session = TransportSession.open(0, bind_host="127.0.0.1")
        port = session.port
        session.close()
        with TransportSession.open(port, bind_host="127.0.0.1") as reopened:
            assert reopened.port == port
