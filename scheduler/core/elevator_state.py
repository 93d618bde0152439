"""
Elevator motion state

The scheduler does not drive elevator motion; it only needs the state an
elevator starts in and which way each state travels.
"""

from enum import Enum
from typing import Optional

from ..protocol.messages import Direction


class ElevatorState(Enum):
    IDLE = 'IDLE'
    MOVING_UP = 'MOVING_UP'
    MOVING_DOWN = 'MOVING_DOWN'
    DOORS_OPEN = 'DOORS_OPEN'

    @property
    def direction(self) -> Optional[Direction]:
        """Travel direction, or None when the car is not travelling"""
        if self is ElevatorState.MOVING_UP:
            return Direction.UP
        if self is ElevatorState.MOVING_DOWN:
            return Direction.DOWN
        return None


class ElevatorStateMachine:
    """
    Minimal elevator motion state machine

    Every registered elevator gets the machine's initial state.
    """

    INITIAL_STATE = ElevatorState.IDLE

    def __init__(self):
        self.current_state = self.INITIAL_STATE
