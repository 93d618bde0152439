"""
Message types exchanged with floors and elevators

Init messages arrive only during the bootstrap handshake; runtime messages
are consumed by the dispatch loop.
"""

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    DOWN = 0
    UP = 1


class InitDoneKind(Enum):
    FLOORS = 'FLOORS'
    ELEVATORS = 'ELEVATORS'


@dataclass(frozen=True)
class Datagram:
    """
    One unframed packet

    For received packets host/port identify the sender; for outgoing
    packets they are the destination.
    """
    payload: bytes
    port: int
    host: str = 'localhost'

    @property
    def length(self) -> int:
        return len(self.payload)


# --- Init messages ---

@dataclass(frozen=True)
class InitDone:
    kind: InitDoneKind


@dataclass(frozen=True)
class FloorRegistration:
    floor_number: int
    metadata: int


@dataclass(frozen=True)
class ElevatorRegistration:
    elevator_id: int
    metadata1: int
    metadata2: int


# --- Runtime messages ---

@dataclass(frozen=True)
class FloorCall:
    """Call button pressed on a floor: [direction, floor, reserved]"""
    direction_byte: int
    floor_number: int
    reserved: int = 0


@dataclass(frozen=True)
class DestinationRequest:
    """Passenger picked a destination after boarding: [floor, 0]"""
    floor_number: int


@dataclass(frozen=True)
class ElevatorStatusUpdate:
    """Elevator status for a floor: [status, reply port]"""
    status_code: int
    reply_port: int
