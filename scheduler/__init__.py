"""
Elevator Scheduler - datagram dispatch service

This package registers floors and elevators at startup and then decides
which elevator answers each floor request.

The handshake, dispatch loop and service live in their own modules
(scheduler.handshake, scheduler.dispatch, scheduler.service) because they
depend on the group_control strategies, which in turn use the types
exported here.
"""

__version__ = "0.1.0"

from .errors import (
    SchedulerError,
    MalformedInitMessage,
    DuplicateRegistration,
    InvalidRequest,
    NoElevatorAvailable,
    TransportFailure,
    StartupTimeout,
)
from .core.registry import Registry, FloorRecord, ElevatorRecord
from .core.elevator_state import ElevatorState, ElevatorStateMachine
from .protocol.messages import Datagram, Direction
from .infrastructure.message_broker import MessageBroker
from .infrastructure.transport import UdpTransport

__all__ = [
    'SchedulerError',
    'MalformedInitMessage',
    'DuplicateRegistration',
    'InvalidRequest',
    'NoElevatorAvailable',
    'TransportFailure',
    'StartupTimeout',
    'Registry',
    'FloorRecord',
    'ElevatorRecord',
    'ElevatorState',
    'ElevatorStateMachine',
    'Datagram',
    'Direction',
    'MessageBroker',
    'UdpTransport',
]
