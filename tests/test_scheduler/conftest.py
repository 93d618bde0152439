"""Shared fixtures: an in-memory transport standing in for the UDP socket"""

import queue
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest

from scheduler.core.elevator_state import ElevatorState
from scheduler.core.registry import ElevatorRecord, FloorRecord, Registry
from scheduler.errors import TransportFailure
from scheduler.protocol.messages import Datagram


class LoopbackTransport:
    """Feeds queued datagrams to the scheduler and records what it sends"""

    def __init__(self):
        self.inbox = queue.Queue()
        self.sent = []
        self.closed = False
        self.fail_on_send = False

    def feed(self, payload, port=5000, host='127.0.0.1'):
        self.inbox.put(Datagram(payload=bytes(payload), port=port, host=host))

    def receive(self, timeout=None):
        if self.closed:
            raise TransportFailure("Socket closed")
        try:
            return self.inbox.get(timeout=timeout)
        except queue.Empty:
            return None

    def send(self, datagram):
        if self.fail_on_send:
            raise TransportFailure("Send failed", payload=datagram.payload, port=datagram.port)
        self.sent.append(datagram)

    def close(self):
        self.closed = True


@pytest.fixture
def transport():
    return LoopbackTransport()


@pytest.fixture
def registry():
    """Floors 0 and 1 on ports 100/101, elevator 0 on port 200"""
    registry = Registry()
    registry.add_floor(FloorRecord(floor_number=0, port=100))
    registry.add_floor(FloorRecord(floor_number=1, port=101))
    registry.add_elevator(ElevatorRecord(elevator_id=0, state=ElevatorState.IDLE, port=200, capacity=8))
    return registry


@pytest.fixture
def three_elevator_registry():
    registry = Registry()
    for floor_number in range(5):
        registry.add_floor(FloorRecord(floor_number=floor_number, port=100 + floor_number))
    for elevator_id in range(3):
        registry.add_elevator(ElevatorRecord(
            elevator_id=elevator_id, state=ElevatorState.IDLE, port=200 + elevator_id, capacity=8))
    return registry
