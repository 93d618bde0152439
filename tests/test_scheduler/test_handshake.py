"""
Bootstrap Handshake Tests

Termination on both done signals, tolerance of malformed and repeated
packets, and the bounded startup wait.
"""

import pytest

from group_control import FirstRegisteredStrategy
from scheduler.core.elevator_state import ElevatorState
from scheduler.core.registry import Registry
from scheduler.dispatch import DispatchLoop
from scheduler.errors import StartupTimeout
from scheduler.handshake import BootstrapHandshake
from scheduler.infrastructure.message_broker import MessageBroker


def _feed_registrations(transport):
    transport.feed([0, 100])      # floor 0 on port 100
    transport.feed([1, 101])      # floor 1 on port 101
    transport.feed([0, 200, 8])   # elevator 0 on port 200, capacity 8


@pytest.mark.parametrize("signals", [[[0], [1]], [[1], [0]]])
def test_handshake_completes_on_both_signals_in_either_order(transport, signals):
    _feed_registrations(transport)
    for signal in signals:
        transport.feed(signal)

    handshake = BootstrapHandshake(transport, Registry(), timeout=1.0)
    registry = handshake.run()

    assert handshake.is_complete
    assert [f.floor_number for f in registry.floors] == [0, 1]
    elevator = registry.get_elevator(0)
    assert (elevator.port, elevator.capacity, elevator.state) == (200, 8, ElevatorState.IDLE)


def test_single_signal_never_completes(transport):
    handshake = BootstrapHandshake(transport, Registry())
    assert handshake.process(bytes([0])) is False
    assert handshake.process(bytes([0, 100])) is False
    assert not handshake.is_complete


def test_single_signal_times_out_naming_missing_peers(transport):
    _feed_registrations(transport)
    transport.feed([0])

    handshake = BootstrapHandshake(transport, Registry(), timeout=0.05)
    with pytest.raises(StartupTimeout, match="elevators"):
        handshake.run()
    assert handshake.floors_done and not handshake.elevators_done


def test_repeated_signal_is_idempotent(transport):
    registry = Registry()
    handshake = BootstrapHandshake(transport, registry)
    for payload in ([0, 100], [0, 200, 8], [0]):
        handshake.process(bytes(payload))
    before = registry.to_dict()

    assert handshake.process(bytes([0])) is False
    assert registry.to_dict() == before
    assert handshake.process(bytes([1])) is True
    assert handshake.process(bytes([1])) is True
    assert registry.to_dict() == before


def test_malformed_and_duplicate_init_messages_are_skipped(transport):
    broker = MessageBroker()
    pipe = broker.open_broadcast_pipe()
    transport.feed([])
    transport.feed([9, 9, 9, 9])
    transport.feed([0, 100])
    transport.feed([0, 150])      # duplicate floor 0
    transport.feed([0, 200, 8])
    transport.feed([0, 210, 4])   # duplicate elevator 0
    transport.feed([0])
    transport.feed([1])

    registry = BootstrapHandshake(transport, Registry(), broker=broker, timeout=1.0).run()

    assert registry.floor_count == 1
    assert registry.get_floor(0).port == 100
    assert registry.get_elevator(0).port == 200

    topics = []
    while not pipe.empty():
        topics.append(pipe.get_nowait()['topic'])
    assert topics.count('handshake/malformed') == 4
    assert topics[-1] == 'handshake/complete'


def test_port_offset_applies_to_registered_ports(transport):
    registry = Registry()
    handshake = BootstrapHandshake(transport, registry, port_offset=5000)
    handshake.process(bytes([2, 12]))
    handshake.process(bytes([1, 40, 6]))

    assert registry.get_floor(2).port == 5012
    assert registry.get_elevator(1).port == 5040


def test_zero_port_registrations_are_skipped(transport):
    transport.feed([0, 100])
    transport.feed([1, 0])        # floor 1 on port 0
    transport.feed([0, 0, 8])     # elevator 0 on port 0
    transport.feed([0])
    transport.feed([1])

    registry = BootstrapHandshake(transport, Registry(), timeout=1.0).run()

    assert registry.floor_count == 1
    assert registry.get_floor(1) is None
    assert registry.elevator_count == 0

    # Nothing is ever sent to port 0
    loop = DispatchLoop(transport, registry, FirstRegisteredStrategy(), poll_interval=0.01)
    transport.feed([1, 0, 0])
    assert loop.run_once() is None
    assert transport.sent == []
    assert not transport.closed


def test_port_offset_makes_zero_port_byte_usable(transport):
    registry = Registry()
    handshake = BootstrapHandshake(transport, registry, port_offset=5000)
    handshake.process(bytes([0, 0, 8]))

    assert registry.get_elevator(0).port == 5000
