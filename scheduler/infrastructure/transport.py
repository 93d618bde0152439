"""
UDP transport

The scheduler owns exactly one datagram socket, bound to its well-known
port and used for both receiving requests and sending replies.
"""

import logging
import socket
from typing import Optional

from ..errors import TransportFailure
from ..protocol.messages import Datagram

logger = logging.getLogger(__name__)


class UdpTransport:
    """
    Connectionless socket shared by the handshake and the dispatch loop

    Args:
        port: Local port to bind
        host: Local address to bind ('' for all interfaces)
        buffer_size: Receive buffer size; longer datagrams are truncated
    """

    def __init__(self, port: int, host: str = '', buffer_size: int = 3):
        self.buffer_size = buffer_size
        self._udp = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            self._udp.bind((host, port))
        except OSError as e:
            self._udp.close()
            raise TransportFailure(f"Error binding datagram socket: {e}", port=port) from e
        self.port = self._udp.getsockname()[1]
        self.closed = False
        logger.info("Datagram socket bound on port %d", self.port)

    def receive(self, timeout: Optional[float] = None) -> Optional[Datagram]:
        """
        Block until a datagram arrives

        Args:
            timeout: Seconds to wait; None waits forever

        Returns:
            The received Datagram, or None if the timeout expired
        """
        try:
            self._udp.settimeout(timeout)
            data, address = self._udp.recvfrom(self.buffer_size)
        except socket.timeout:
            return None
        except OSError as e:
            self.close()
            raise TransportFailure(f"Error receiving datagram: {e}", port=self.port) from e
        return Datagram(payload=data, port=address[1], host=address[0])

    def send(self, datagram: Datagram):
        try:
            self._udp.sendto(datagram.payload, (datagram.host, datagram.port))
        except OSError as e:
            self.close()
            raise TransportFailure(f"Error sending datagram: {e}",
                                   payload=datagram.payload, port=datagram.port) from e

    def close(self):
        if not self.closed:
            self.closed = True
            self._udp.close()
            logger.info("Datagram socket on port %d closed", self.port)

    def __enter__(self):
        return self

    def __exit__(self, type, value, traceback):
        self.close()
