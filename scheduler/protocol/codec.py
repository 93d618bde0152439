"""
Protocol codec

Pure translation between fixed-width datagram payloads and message types.
No I/O and no state: the caller supplies anything it needs (floor count,
destination port).

Init payloads:
    [0]                         floors announced
    [n != 0]                    elevators announced
    [floor, metadata]           register a floor
    [id, metadata1, metadata2]  register an elevator

Runtime payloads:
    [direction, floor, reserved]  floor call (direction 0=DOWN, 1=UP)
    [floor, 0]                    destination chosen after boarding
    [status, reply_port]          elevator status for a floor

Every reply is a single byte.
"""

from typing import Union

from ..errors import InvalidRequest, MalformedInitMessage
from .messages import (
    Datagram, Direction, InitDone, InitDoneKind, FloorRegistration, ElevatorRegistration,
    FloorCall, DestinationRequest, ElevatorStatusUpdate,
)

InitMessage = Union[InitDone, FloorRegistration, ElevatorRegistration]
RuntimeRequest = Union[FloorCall, DestinationRequest, ElevatorStatusUpdate]

FLOORS_DONE_SIGNAL = 0


def decode_init(payload: bytes) -> InitMessage:
    """
    Classify an init payload by its length

    Raises:
        MalformedInitMessage: Length is not 1, 2 or 3
    """
    length = len(payload)
    if length == 1:
        if payload[0] == FLOORS_DONE_SIGNAL:
            return InitDone(InitDoneKind.FLOORS)
        return InitDone(InitDoneKind.ELEVATORS)
    if length == 2:
        return FloorRegistration(floor_number=payload[0], metadata=payload[1])
    if length == 3:
        return ElevatorRegistration(elevator_id=payload[0], metadata1=payload[1], metadata2=payload[2])
    raise MalformedInitMessage("Invalid init message", payload=bytes(payload))


def decode_request(payload: bytes) -> RuntimeRequest:
    """
    Classify a runtime payload by its length and flag byte

    Only the shape is checked here; range validation needs the registry
    and happens in the dispatch loop.

    Raises:
        InvalidRequest: Length is not 2 or 3
    """
    length = len(payload)
    if length == 3:
        return FloorCall(direction_byte=payload[0], floor_number=payload[1], reserved=payload[2])
    if length == 2:
        if payload[1] == 0:
            return DestinationRequest(floor_number=payload[0])
        return ElevatorStatusUpdate(status_code=payload[0], reply_port=payload[1])
    raise InvalidRequest("Invalid request (improper format)", payload=bytes(payload))


def is_valid(payload: bytes, floor_count: int) -> bool:
    """True for a 3-byte floor call with a known direction and floor in range"""
    if len(payload) != 3:
        return False
    if payload[0] not in (Direction.DOWN.value, Direction.UP.value):
        return False
    floor_number = payload[1]
    return 0 <= floor_number <= floor_count


def direction_from_byte(value: int) -> Direction:
    """0 is DOWN; any other value is UP"""
    return Direction.DOWN if value == Direction.DOWN.value else Direction.UP


def _single_byte(value: int, what: str) -> bytes:
    if not 0 <= value <= 255:
        raise InvalidRequest(f"{what} {value} does not fit in one byte")
    return bytes([value])


def encode_elevator_dispatch(floor_number: int, port: int, host: str = 'localhost') -> Datagram:
    """Dispatch packet telling an elevator which floor to serve"""
    return Datagram(payload=_single_byte(floor_number, 'Floor number'), port=port, host=host)


def encode_floor_update(status_code: int, port: int, host: str = 'localhost') -> Datagram:
    """Update packet forwarding an elevator status code to a floor"""
    return Datagram(payload=_single_byte(status_code, 'Status code'), port=port, host=host)


def decode_elevator_dispatch(payload: bytes) -> int:
    """Elevator-side decode of a dispatch packet"""
    if len(payload) != 1:
        raise InvalidRequest("Dispatch packet must be one byte", payload=bytes(payload))
    return payload[0]
