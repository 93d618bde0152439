"""
Registry of known floors and elevators

Populated once by the bootstrap handshake and read by the dispatch loop.
Records keep registration order; that order is what the baseline
allocation strategy relies on.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..errors import DuplicateRegistration
from ..protocol.messages import Direction
from .elevator_state import ElevatorState


@dataclass(frozen=True)
class FloorRecord:
    """A registered floor call panel"""
    floor_number: int
    port: int

    def __str__(self):
        return f"Floor {self.floor_number} (port {self.port})"


@dataclass
class ElevatorRecord:
    """A registered elevator car"""
    elevator_id: int
    state: ElevatorState
    port: int
    capacity: int
    current_floor: int = 0

    @property
    def direction(self) -> Optional[Direction]:
        return self.state.direction

    def __str__(self):
        return (f"Elevator {self.elevator_id} (port {self.port}, capacity {self.capacity}, "
                f"state {self.state.value}, floor {self.current_floor})")


class Registry:
    """
    In-memory set of floors and elevators

    Single writer: only the bootstrap handshake adds records. After the
    handshake the dispatch loop treats the registry as read-only.
    """

    def __init__(self):
        self._floors: Dict[int, FloorRecord] = {}
        self._elevators: Dict[int, ElevatorRecord] = {}

    def add_floor(self, floor: FloorRecord):
        """
        Register a floor

        Raises:
            DuplicateRegistration: If the floor number is already known
        """
        if floor.floor_number in self._floors:
            raise DuplicateRegistration(f"Floor {floor.floor_number} is already registered",
                                        port=floor.port)
        self._floors[floor.floor_number] = floor

    def add_elevator(self, elevator: ElevatorRecord):
        """
        Register an elevator

        Raises:
            DuplicateRegistration: If the elevator id is already known
        """
        if elevator.elevator_id in self._elevators:
            raise DuplicateRegistration(f"Elevator {elevator.elevator_id} is already registered",
                                        port=elevator.port)
        self._elevators[elevator.elevator_id] = elevator

    @property
    def floors(self) -> Tuple[FloorRecord, ...]:
        return tuple(self._floors.values())

    @property
    def elevators(self) -> Tuple[ElevatorRecord, ...]:
        return tuple(self._elevators.values())

    @property
    def floor_count(self) -> int:
        return len(self._floors)

    @property
    def elevator_count(self) -> int:
        return len(self._elevators)

    def get_floor(self, floor_number: int) -> Optional[FloorRecord]:
        return self._floors.get(floor_number)

    def get_elevator(self, elevator_id: int) -> Optional[ElevatorRecord]:
        return self._elevators.get(elevator_id)

    def has_floor_number(self, floor_number: int) -> bool:
        # Upper bound is inclusive: floor numbers run 0..floor_count
        return 0 <= floor_number <= self.floor_count

    def describe(self) -> List[str]:
        """Human readable dump of every floor and elevator"""
        return [str(floor) for floor in self._floors.values()] + \
               [str(elevator) for elevator in self._elevators.values()]

    def to_dict(self) -> dict:
        """Snapshot for telemetry"""
        return {
            'floors': [
                {'floor_number': f.floor_number, 'port': f.port}
                for f in self._floors.values()
            ],
            'elevators': [
                {
                    'elevator_id': e.elevator_id,
                    'state': e.state.value,
                    'port': e.port,
                    'capacity': e.capacity,
                    'current_floor': e.current_floor,
                }
                for e in self._elevators.values()
            ],
        }
