"""Core scheduler state: registry and elevator motion state"""

from .elevator_state import ElevatorState, ElevatorStateMachine
from .registry import Registry, FloorRecord, ElevatorRecord

__all__ = [
    'ElevatorState',
    'ElevatorStateMachine',
    'Registry',
    'FloorRecord',
    'ElevatorRecord',
]
