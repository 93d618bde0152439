"""
Protocol Codec Tests

Decoding of init and runtime payloads, floor-call validation and the
one-byte reply encoders.
"""

import pytest

from scheduler.errors import InvalidRequest, MalformedInitMessage
from scheduler.protocol.codec import (
    decode_init, decode_request, is_valid, direction_from_byte,
    encode_elevator_dispatch, encode_floor_update, decode_elevator_dispatch,
)
from scheduler.protocol.messages import (
    Direction, InitDone, InitDoneKind, FloorRegistration, ElevatorRegistration,
    FloorCall, DestinationRequest, ElevatorStatusUpdate,
)


def test_decode_init_done_signals():
    assert decode_init(bytes([0])) == InitDone(InitDoneKind.FLOORS)
    assert decode_init(bytes([1])) == InitDone(InitDoneKind.ELEVATORS)
    assert decode_init(bytes([255])) == InitDone(InitDoneKind.ELEVATORS)


def test_decode_init_registrations():
    assert decode_init(bytes([3, 103])) == FloorRegistration(floor_number=3, metadata=103)
    assert decode_init(bytes([1, 201, 8])) == ElevatorRegistration(elevator_id=1, metadata1=201, metadata2=8)


@pytest.mark.parametrize("payload", [b"", bytes([1, 2, 3, 4])])
def test_decode_init_rejects_other_lengths(payload):
    with pytest.raises(MalformedInitMessage) as exc_info:
        decode_init(payload)
    assert exc_info.value.payload == payload


def test_decode_request_kinds():
    assert decode_request(bytes([1, 0, 0])) == FloorCall(direction_byte=1, floor_number=0, reserved=0)
    assert decode_request(bytes([4, 0])) == DestinationRequest(floor_number=4)
    assert decode_request(bytes([5, 90])) == ElevatorStatusUpdate(status_code=5, reply_port=90)


@pytest.mark.parametrize("payload", [b"", bytes([1]), bytes([1, 2, 3, 4])])
def test_decode_request_rejects_other_lengths(payload):
    with pytest.raises(InvalidRequest):
        decode_request(payload)


def test_is_valid_accepts_both_directions_across_floor_range():
    floor_count = 4
    for direction in (0, 1):
        for floor_number in range(floor_count + 1):
            assert is_valid(bytes([direction, floor_number, 0]), floor_count)


def test_is_valid_rejects_bad_direction_byte():
    for direction in range(2, 256):
        assert not is_valid(bytes([direction, 1, 0]), 4)


def test_is_valid_rejects_out_of_range_floor():
    assert not is_valid(bytes([1, 5, 0]), 4)
    assert not is_valid(bytes([0, 200, 0]), 2)


def test_is_valid_requires_three_bytes():
    assert not is_valid(bytes([1, 0]), 4)


def test_direction_from_byte():
    assert direction_from_byte(0) is Direction.DOWN
    assert direction_from_byte(1) is Direction.UP
    assert direction_from_byte(7) is Direction.UP


def test_elevator_dispatch_round_trip():
    for floor_number in range(256):
        datagram = encode_elevator_dispatch(floor_number, port=200)
        assert datagram.length == 1
        assert decode_elevator_dispatch(datagram.payload) == floor_number


def test_encoders_address_local_host_by_default():
    dispatch = encode_elevator_dispatch(3, port=200)
    update = encode_floor_update(5, port=9000)
    assert (dispatch.host, dispatch.port, dispatch.payload) == ('localhost', 200, bytes([3]))
    assert (update.host, update.port, update.payload) == ('localhost', 9000, bytes([5]))


def test_encoders_reject_values_wider_than_a_byte():
    with pytest.raises(InvalidRequest):
        encode_elevator_dispatch(256, port=200)
    with pytest.raises(InvalidRequest):
        encode_floor_update(-1, port=200)


def test_decode_elevator_dispatch_requires_one_byte():
    with pytest.raises(InvalidRequest):
        decode_elevator_dispatch(bytes([1, 2]))
