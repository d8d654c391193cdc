"""UDP transport used to exchange command/reply datagrams with the sensor."""

from __future__ import annotations

import logging
import socket
from typing import Optional, Protocol, Tuple

logger = logging.getLogger(__name__)

DEFAULT_LOCAL_PORT = 55555
DEFAULT_SENSOR_PORT = 55556
DEFAULT_REPLY_TIMEOUT_S = 60.0

# digiVIT replies are short ASCII strings; this is ample.
MAX_DATAGRAM_SIZE = 1024

Address = Tuple[str, int]


class ReplyTimeout(TimeoutError):
    """No reply datagram arrived within the allowed wait."""


class Transport(Protocol):
    """Minimal send / receive-with-timeout surface used by the sampler."""

    def send(self, payload: bytes, address: Address) -> None:
        ...

    def receive(self, timeout: float) -> bytes:
        ...


class UdpTransport:
    """
    Datagram socket bound to the local interface facing the sensor.

    Use as a context manager so the socket is closed even when the
    sampling loop exits through an exception.
    """

    def __init__(self, host_address: str, local_port: int = DEFAULT_LOCAL_PORT) -> None:
        self.host_address = host_address
        self.local_port = local_port
        self._sock: Optional[socket.socket] = None

    # ------------------------------------------------------------------ lifecycle
    def open(self) -> None:
        if self._sock is not None:
            return
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((self.host_address, self.local_port))
        except OSError:
            sock.close()
            raise
        self._sock = sock
        logger.info("Bound UDP socket to %s:%s", *self.local_address)

    def close(self) -> None:
        if self._sock is None:
            return
        self._sock.close()
        self._sock = None
        logger.info("Closed UDP socket on %s:%s", self.host_address, self.local_port)

    def __enter__(self) -> "UdpTransport":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def local_address(self) -> Address:
        """Return the bound ``(host, port)``; resolves port 0 to the real port."""
        sock = self._require_socket()
        host, port = sock.getsockname()[:2]
        return host, port

    def _require_socket(self) -> socket.socket:
        if self._sock is None:
            raise RuntimeError("UdpTransport is not open")
        return self._sock

    # ------------------------------------------------------------------ I/O
    def send(self, payload: bytes, address: Address) -> None:
        sock = self._require_socket()
        logger.debug("-> %s:%s %r", address[0], address[1], payload)
        sock.sendto(payload, address)

    def receive(self, timeout: float) -> bytes:
        """Block for one datagram; raise :class:`ReplyTimeout` after ``timeout`` s."""
        sock = self._require_socket()
        sock.settimeout(timeout)
        try:
            data, sender = sock.recvfrom(MAX_DATAGRAM_SIZE)
        except socket.timeout as exc:
            raise ReplyTimeout(f"No reply within {timeout:g} s") from exc
        logger.debug("<- %s:%s %r", sender[0], sender[1], data)
        return data
