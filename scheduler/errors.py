"""
Scheduler error kinds

Every failure the scheduler reports derives from SchedulerError so callers
can separate scheduler faults from programming errors.
"""

from typing import Optional


class SchedulerError(Exception):
    """
    Base class for scheduler errors

    Args:
        message: Human readable description
        payload: Raw datagram bytes involved (if any)
        port: Peer port involved (if any)
    """

    def __init__(self, message: str, payload: Optional[bytes] = None, port: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.payload = payload
        self.port = port

    def __str__(self):
        details = []
        if self.payload is not None:
            details.append(f"length={len(self.payload)}")
            details.append(f"bytes={list(self.payload)}")
        if self.port is not None:
            details.append(f"port={self.port}")
        if details:
            return f"{self.message} ({', '.join(details)})"
        return self.message


class MalformedInitMessage(SchedulerError):
    """Init packet with an unrecognized shape (non-fatal during handshake)"""


class DuplicateRegistration(MalformedInitMessage):
    """Floor number or elevator id announced twice"""


class InvalidRequest(SchedulerError):
    """Runtime packet with a bad length, direction byte or floor number"""


class NoElevatorAvailable(SchedulerError):
    """Selection requested while the registry holds no elevators"""


class TransportFailure(SchedulerError):
    """Socket error on bind, send or receive (fatal)"""


class StartupTimeout(SchedulerError):
    """Bootstrap handshake did not complete before its deadline"""
