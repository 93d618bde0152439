"""
First Registered Strategy

Baseline allocation: the first elevator that announced itself answers
every request.
"""

from scheduler.core.registry import ElevatorRecord, Registry
from scheduler.protocol.messages import Direction
from ..interfaces.allocation_strategy import IAllocationStrategy


class FirstRegisteredStrategy(IAllocationStrategy):
    """Always selects the first registered elevator, ignoring direction and floor"""

    def select_elevator(self, direction: Direction, floor_number: int, registry: Registry) -> ElevatorRecord:
        self.require_elevators(registry, direction, floor_number)
        return registry.elevators[0]

    def get_strategy_name(self) -> str:
        return "First Registered (Baseline)"
