"""
Dispatch Loop Tests

Request scenarios end to end over the loopback transport: floor calls,
destination requests, status updates and rejected packets.
"""

import pytest

from group_control import FirstRegisteredStrategy, NearestCarStrategy
from scheduler.core.registry import Registry
from scheduler.dispatch import DispatchLoop
from scheduler.errors import InvalidRequest, NoElevatorAvailable, TransportFailure
from scheduler.infrastructure.message_broker import MessageBroker
from scheduler.protocol.messages import Datagram, ElevatorStatusUpdate


def _loop(transport, registry, broker=None, **kwargs):
    return DispatchLoop(transport, registry, FirstRegisteredStrategy(), broker=broker,
                        poll_interval=0.01, **kwargs)


def _drain(pipe):
    events = []
    while not pipe.empty():
        events.append(pipe.get_nowait())
    return events


def test_up_call_dispatches_floor_to_elevator_port(transport, registry):
    transport.feed([1, 0, 0])
    reply = _loop(transport, registry).run_once()

    assert reply == Datagram(payload=bytes([0]), port=200, host='localhost')
    assert transport.sent == [reply]


def test_out_of_range_floor_call_sends_nothing(transport, registry):
    loop = _loop(transport, registry)
    with pytest.raises(InvalidRequest):
        loop.handle_datagram(Datagram(payload=bytes([1, 200, 0]), port=100))

    transport.feed([1, 200, 0])
    assert loop.run_once() is None
    assert transport.sent == []


def test_bad_direction_byte_is_rejected(transport, registry):
    transport.feed([2, 1, 0])
    assert _loop(transport, registry).run_once() is None
    assert transport.sent == []


def test_destination_request_dispatches_floor(transport, registry):
    transport.feed([2, 0])
    reply = _loop(transport, registry).run_once()
    assert (reply.payload, reply.port) == (bytes([2]), 200)


def test_destination_request_out_of_range_is_rejected(transport, registry):
    transport.feed([3, 0])
    assert _loop(transport, registry).run_once() is None
    assert transport.sent == []


def test_status_update_is_forwarded_to_reply_port(transport, registry):
    loop = _loop(transport, registry)
    reply = loop.route_status_update(ElevatorStatusUpdate(status_code=5, reply_port=9000))
    assert (reply.payload, reply.port) == (bytes([5]), 9000)


def test_status_update_packet_uses_port_offset(transport, registry):
    transport.feed([5, 90], port=200)
    reply = _loop(transport, registry, port_offset=9000).run_once()
    assert (reply.payload, reply.port) == (bytes([5]), 9090)


def test_unknown_length_does_not_stop_the_loop(transport, registry):
    transport.feed([9])
    transport.feed([1, 2, 3])
    loop = _loop(transport, registry)

    assert loop.run_once() is None
    assert loop.run_once() is not None
    assert len(transport.sent) == 1


def test_empty_registry_rejects_floor_call(transport):
    loop = _loop(transport, Registry())
    with pytest.raises(NoElevatorAvailable):
        loop.handle_datagram(Datagram(payload=bytes([1, 0, 0]), port=100))

    transport.feed([1, 0, 0])
    assert loop.run_once() is None
    assert transport.sent == []


def test_receive_timeout_is_a_quiet_iteration(transport, registry):
    assert _loop(transport, registry).run_once() is None


def test_replies_are_addressed_to_configured_peer_host(transport, registry):
    transport.feed([0, 1, 0])
    reply = _loop(transport, registry, peer_host='10.0.0.5').run_once()
    assert reply.host == '10.0.0.5'


def test_strategy_decides_the_elevator(transport, three_elevator_registry):
    three_elevator_registry.get_elevator(2).current_floor = 4
    loop = DispatchLoop(transport, three_elevator_registry, NearestCarStrategy(), poll_interval=0.01)

    transport.feed([1, 4, 0])
    assert loop.run_once().port == 202


def test_events_published_for_each_step(transport, registry):
    broker = MessageBroker()
    pipe = broker.open_broadcast_pipe()
    loop = _loop(transport, registry, broker=broker)

    transport.feed([1, 1, 0])
    transport.feed([5, 90])
    transport.feed([7])
    for _ in range(3):
        loop.run_once()

    topics = [event['topic'] for event in _drain(pipe)]
    assert topics == [
        'scheduler/received', 'scheduler/assigned', 'scheduler/sent',
        'scheduler/received', 'scheduler/forwarded', 'scheduler/sent',
        'scheduler/received', 'scheduler/rejected',
    ]


def test_transport_failure_propagates_out_of_run(transport, registry):
    transport.fail_on_send = True
    transport.feed([1, 0, 0])
    with pytest.raises(TransportFailure):
        _loop(transport, registry).run()


def test_stop_ends_run(transport, registry):
    loop = _loop(transport, registry)
    loop.stop()
    loop.run()
    assert loop.stopped
