"""Wire protocol: message types and the fixed-width codec"""

from .messages import (
    Datagram,
    Direction,
    InitDoneKind,
    InitDone,
    FloorRegistration,
    ElevatorRegistration,
    FloorCall,
    DestinationRequest,
    ElevatorStatusUpdate,
)
from .codec import (
    decode_init,
    decode_request,
    is_valid,
    direction_from_byte,
    encode_elevator_dispatch,
    encode_floor_update,
    decode_elevator_dispatch,
)

__all__ = [
    'Datagram',
    'Direction',
    'InitDoneKind',
    'InitDone',
    'FloorRegistration',
    'ElevatorRegistration',
    'FloorCall',
    'DestinationRequest',
    'ElevatorStatusUpdate',
    'decode_init',
    'decode_request',
    'is_valid',
    'direction_from_byte',
    'encode_elevator_dispatch',
    'encode_floor_update',
    'decode_elevator_dispatch',
]
